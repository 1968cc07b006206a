from pathlib import Path
from contextlib import redirect_stderr, redirect_stdout
import io
import os
import stat
import tempfile
import unittest

from bf2c.cli import DEFAULT_INPUT, DEFAULT_OUTPUT, main as cli_main
from bf2c.translator import translate_text


class CLITests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write_source(self, content: str, name: str = "program.bf") -> Path:
        path = self.tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_cli_emits_c_file(self) -> None:
        source_path = self._write_source("+++. a comment")
        output_path = self.tmp_path / "out.c"
        exit_code = cli_main(["-i", str(source_path), "-o", str(output_path)])
        self.assertEqual(exit_code, 0)
        self.assertEqual(output_path.read_text(encoding="utf-8"), translate_text("+++."))

    def test_cli_long_options(self) -> None:
        source_path = self._write_source(",.")
        output_path = self.tmp_path / "echo.c"
        exit_code = cli_main(["--input", str(source_path), "--output", str(output_path)])
        self.assertEqual(exit_code, 0)
        self.assertEqual(output_path.read_text(encoding="utf-8"), translate_text(",."))

    def test_cli_uses_default_file_names(self) -> None:
        self._write_source("[-]", name=DEFAULT_INPUT)
        cwd = os.getcwd()
        os.chdir(self.tmp_path)
        try:
            buffer = io.StringIO()
            with redirect_stdout(buffer):
                exit_code = cli_main([])
        finally:
            os.chdir(cwd)
        self.assertEqual(exit_code, 0)
        self.assertIn("default values", buffer.getvalue())
        emitted = (self.tmp_path / DEFAULT_OUTPUT).read_text(encoding="utf-8")
        self.assertEqual(emitted, translate_text("[-]"))

    def test_cli_missing_file_errors(self) -> None:
        output_path = self.tmp_path / "out.c"
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            exit_code = cli_main(["-i", str(self.tmp_path / "missing.bf"), "-o", str(output_path)])
        self.assertEqual(exit_code, 1)
        self.assertIn("Source file not found", buffer.getvalue())
        self.assertFalse(output_path.exists())

    @unittest.skipIf(os.name != "posix", "POSIX file modes only")
    def test_cli_keeps_mode_of_replaced_output(self) -> None:
        source_path = self._write_source("+.")
        output_path = self.tmp_path / "out.c"
        output_path.write_text("old", encoding="utf-8")
        os.chmod(output_path, 0o640)
        self.assertEqual(cli_main(["-i", str(source_path), "-o", str(output_path)]), 0)
        self.assertEqual(stat.S_IMODE(output_path.stat().st_mode), 0o640)
        self.assertEqual(output_path.read_text(encoding="utf-8"), translate_text("+."))

    @unittest.skipIf(os.name != "posix", "POSIX file modes only")
    def test_cli_new_output_respects_umask(self) -> None:
        source_path = self._write_source("+.")
        output_path = self.tmp_path / "out.c"
        previous = os.umask(0o027)
        try:
            exit_code = cli_main(["-i", str(source_path), "-o", str(output_path)])
        finally:
            os.umask(previous)
        self.assertEqual(exit_code, 0)
        self.assertEqual(stat.S_IMODE(output_path.stat().st_mode), 0o640)

    def test_cli_unwritable_output_leaves_no_file(self) -> None:
        source_path = self._write_source("+.")
        output_path = self.tmp_path / "no_such_dir" / "out.c"
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            exit_code = cli_main(["-i", str(source_path), "-o", str(output_path)])
        self.assertEqual(exit_code, 1)
        self.assertFalse(output_path.exists())
        self.assertEqual(sorted(p.name for p in self.tmp_path.iterdir()), ["program.bf"])

    def test_cli_warns_on_unbalanced_loops(self) -> None:
        source_path = self._write_source("+[+")
        output_path = self.tmp_path / "out.c"
        buffer = io.StringIO()
        with redirect_stderr(buffer):
            exit_code = cli_main(["-i", str(source_path), "-o", str(output_path)])
        self.assertEqual(exit_code, 0)
        self.assertIn("unbalanced", buffer.getvalue())
        self.assertEqual(output_path.read_text(encoding="utf-8"), translate_text("+[+"))

    def test_cli_help_does_not_translate(self) -> None:
        buffer = io.StringIO()
        cwd = os.getcwd()
        os.chdir(self.tmp_path)
        try:
            with redirect_stdout(buffer), self.assertRaises(SystemExit) as ctx:
                cli_main(["-h"])
        finally:
            os.chdir(cwd)
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("--input", buffer.getvalue())
        self.assertEqual(list(self.tmp_path.iterdir()), [])

    def test_cli_invalid_option_exits_nonzero(self) -> None:
        buffer = io.StringIO()
        with redirect_stderr(buffer), self.assertRaises(SystemExit) as ctx:
            cli_main(["-x"])
        self.assertNotEqual(ctx.exception.code, 0)


if __name__ == "__main__":
    unittest.main()
