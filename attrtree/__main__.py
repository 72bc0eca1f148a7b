"""Module entrypoint for ``python -m attrtree``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing and command dispatch happen in ``attrtree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
