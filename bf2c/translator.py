from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Dict, TextIO, Union

# Fixed tape geometry baked into every generated program.
TAPE_LENGTH = 30000

_CHUNK_SIZE = 8192


class Symbol(str, Enum):
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INCREMENT = "+"
    DECREMENT = "-"
    LOOP_OPEN = "["
    LOOP_CLOSE = "]"
    READ_INPUT = ","
    WRITE_OUTPUT = "."


STATEMENTS: Dict[str, str] = {
    Symbol.MOVE_RIGHT.value: "ptr++;",
    Symbol.MOVE_LEFT.value: "ptr--;",
    Symbol.INCREMENT.value: "++*ptr;",
    Symbol.DECREMENT.value: "--*ptr;",
    Symbol.LOOP_OPEN.value: "while (*ptr) {",
    Symbol.LOOP_CLOSE.value: "}",
    Symbol.READ_INPUT.value: "*ptr = getchar();",
    Symbol.WRITE_OUTPUT.value: "putchar(*ptr);",
}

PROLOGUE = (
    "/* This C code was automatically generated from Brainfuck source code by bf2c */\n"
    "\n"
    "#include <stdio.h>\n"
    "#include <stdlib.h>\n"
    "\n"
    "int main(void)\n"
    "{\n"
    f"unsigned char tape[{TAPE_LENGTH}] = {{0}};\n"
    "unsigned char *ptr = tape;\n"
)

EPILOGUE = "return 0;\n}\n"

Source = Union[TextIO, BinaryIO]


@dataclass
class TranslationReport:
    """Diagnostics gathered while translating; never affects the output."""

    statements: int = 0
    depth: int = 0
    min_depth: int = 0

    @property
    def balanced(self) -> bool:
        return self.depth == 0 and self.min_depth >= 0


def count_symbols(code: str) -> int:
    return sum(1 for ch in code if ch in STATEMENTS)


class BrainfuckTranslator:
    """Single-pass Brainfuck to C translator.

    Each recognized symbol is written to the sink as exactly one C statement;
    every other character is a comment. Loop brackets are passed through
    as-is, so an unbalanced program yields C that does not compile.
    """

    def translate(self, source: Source, sink: TextIO) -> TranslationReport:
        report = TranslationReport()
        sink.write(PROLOGUE)
        while True:
            chunk = source.read(_CHUNK_SIZE)
            if not chunk:
                break
            if not isinstance(chunk, str):
                chunk = bytes(chunk).decode("latin-1")
            self._emit_chunk(chunk, sink, report)
        sink.write(EPILOGUE)
        return report

    def translate_text(self, code: str) -> str:
        sink = io.StringIO()
        self.translate(io.StringIO(code), sink)
        return sink.getvalue()

    def _emit_chunk(self, chunk: str, sink: TextIO, report: TranslationReport) -> None:
        for ch in chunk:
            statement = STATEMENTS.get(ch)
            if statement is None:
                continue
            sink.write(statement)
            sink.write("\n")
            report.statements += 1
            if ch == Symbol.LOOP_OPEN.value:
                report.depth += 1
            elif ch == Symbol.LOOP_CLOSE.value:
                report.depth -= 1
                report.min_depth = min(report.min_depth, report.depth)


def translate(source: Source, sink: TextIO) -> TranslationReport:
    return BrainfuckTranslator().translate(source, sink)


def translate_text(code: str) -> str:
    return BrainfuckTranslator().translate_text(code)


__all__ = [
    "BrainfuckTranslator",
    "EPILOGUE",
    "PROLOGUE",
    "STATEMENTS",
    "Symbol",
    "TAPE_LENGTH",
    "TranslationReport",
    "count_symbols",
    "translate",
    "translate_text",
]
