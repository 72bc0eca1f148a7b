"""Public package surface for attrtree.

Exports ``main`` for programmatic CLI invocation.
The directory and attribute models live in ``attrtree.file_tree_model``
and ``attrtree.attributes``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
