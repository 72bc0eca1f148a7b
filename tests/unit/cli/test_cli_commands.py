"""CLI command dispatch, output, and error-message tests.

Verifies how ``attrtree.cli.main`` resolves directories, prints results,
and turns domain errors into ``SystemExit`` messages.
"""

from __future__ import annotations

import io
import os
import stat
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from attrtree import cli


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._config_tmp = tempfile.TemporaryDirectory()
        patcher = mock.patch("attrtree.config.CONFIG_PATH", Path(self._config_tmp.name) / "config.json")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._config_tmp.cleanup)

    def run_cli(self, *argv: str, default_path: Path | None = None) -> str:
        stdout = io.StringIO()
        with mock.patch.object(sys, "argv", ["attrtree", *argv]), mock.patch("sys.stdout", stdout):
            cli.main(default_path=default_path)
        return stdout.getvalue()


class CliTreeTests(CliTestCase):
    def test_tree_prints_directories_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "docs" / "api").mkdir(parents=True)
            (root / "src").mkdir()
            (root / "notes.txt").write_text("n", encoding="utf-8")

            output = self.run_cli("tree", str(root))

            self.assertEqual(
                output.splitlines(),
                [f"▾ {root.name}/", "  ▾ docs/", "    ▸ api/", "  ▸ src/"],
            )

    def test_tree_defaults_to_given_default_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "only").mkdir()

            output = self.run_cli("tree", default_path=root)

            self.assertIn("  ▸ only/", output.splitlines())

    def test_tree_missing_path_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "absent"
            with self.assertRaises(SystemExit) as caught:
                self.run_cli("tree", str(missing))
            self.assertEqual(str(caught.exception.code), f"Path not found: {missing}")


class CliListAndInfoTests(CliTestCase):
    def test_ls_prints_flag_column_and_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "b.txt").write_text("b", encoding="utf-8")
            locked = root / "a.txt"
            locked.write_text("a", encoding="utf-8")
            os.chmod(locked, 0o444)
            try:
                output = self.run_cli("ls", str(root))
            finally:
                os.chmod(locked, 0o644)

            self.assertEqual(output.splitlines(), ["R---  a.txt", "----  b.txt"])

    def test_ls_missing_directory_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit) as caught:
                self.run_cli("ls", str(Path(tmp) / "gone"))
            self.assertTrue(str(caught.exception.code).startswith("Directory unavailable:"))

    def test_info_prints_detail_block(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "data.txt"
            target.write_text("hello", encoding="utf-8")

            lines = self.run_cli("info", str(target)).splitlines()

            self.assertEqual(lines[0], "Name: data.txt")
            self.assertIn("Size: 5 bytes", lines)
            self.assertTrue(any(line.startswith("Flags: ") for line in lines))


class CliSetTests(CliTestCase):
    def test_set_read_only_on_several_files_and_confirms(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("x.txt", "y.txt"):
                (root / name).write_text(name, encoding="utf-8")
            try:
                output = self.run_cli("set", str(root), "x.txt", "y.txt", "--read-only")
                modes = [os.stat(root / name).st_mode for name in ("x.txt", "y.txt")]
            finally:
                for name in ("x.txt", "y.txt"):
                    os.chmod(root / name, 0o644)

            self.assertEqual(
                output.splitlines(),
                ["ok     x.txt", "ok     y.txt", "R---  x.txt", "R---  y.txt"],
            )
            self.assertTrue(all(not mode & stat.S_IWUSR for mode in modes))

    def test_set_reports_missing_file_and_exits_nonzero(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real.txt").write_text("r", encoding="utf-8")
            os.chmod(root / "real.txt", 0o444)
            stdout = io.StringIO()
            with (
                mock.patch.object(sys, "argv", ["attrtree", "set", str(root), "ghost.txt", "real.txt", "--no-read-only"]),
                mock.patch("sys.stdout", stdout),
                self.assertRaises(SystemExit) as caught,
            ):
                cli.main()

            self.assertEqual(caught.exception.code, 1)
            lines = stdout.getvalue().splitlines()
            self.assertTrue(lines[0].startswith("failed ghost.txt: File missing:"))
            self.assertEqual(lines[1:], ["ok     real.txt", "----  real.txt"])
            self.assertTrue(os.stat(root / "real.txt").st_mode & stat.S_IWUSR)

    def test_set_without_flags_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit) as caught:
                self.run_cli("set", tmp, "a.txt")
            self.assertIn("Nothing to change", str(caught.exception.code))


if __name__ == "__main__":
    unittest.main()
