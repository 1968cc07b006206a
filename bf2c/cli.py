from __future__ import annotations

import argparse
import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import Optional

from .translator import BrainfuckTranslator, TranslationReport

DEFAULT_INPUT = "brainfuck.in"
DEFAULT_OUTPUT = "brainfuck.out.c"


def _output_mode(output_path: Path) -> int:
    """Keep the mode of a file being replaced; new files get 0o666 minus the umask."""
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _translate_file(source_path: Path, output_path: Path) -> TranslationReport:
    """Translate into a temporary sibling of ``output_path``, then move it into place."""
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {source_path}")

    translator = BrainfuckTranslator()
    with source_path.open("rb") as source:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_path.name}.", suffix=".tmp", dir=str(output_path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as sink:
                report = translator.translate(source, sink)
            os.chmod(tmp_name, _output_mode(output_path))
            os.replace(tmp_name, output_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    return report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bf2c",
        description="Translate a Brainfuck program into equivalent C source",
    )
    parser.add_argument(
        "-i",
        "--input",
        default=DEFAULT_INPUT,
        help=f"Brainfuck source file (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"Destination for the generated C file (default: {DEFAULT_OUTPUT})",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _build_parser().parse_args(argv)

    if not argv:
        print("The default values have been chosen. Call the program with -h for help.")

    try:
        report = _translate_file(Path(args.input), Path(args.output))
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"I/O error: {exc}", file=sys.stderr)
        return 1

    if not report.balanced:
        print(
            f"warning: unbalanced loop brackets in {args.input} "
            f"(depth {report.depth}); the generated C will not compile",
            file=sys.stderr,
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
