from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from .translator import STATEMENTS, TAPE_LENGTH, Symbol

# Value an unsigned char cell holds after `*ptr = getchar()` hits EOF.
EOF_VALUE = 255


class StepLimitExceeded(RuntimeError):
    """Raised when Brainfuck execution exceeds the configured step budget."""


class UnbalancedLoopError(ValueError):
    """Raised when loop brackets do not pair up."""


@dataclass
class RunResult:
    output: bytes
    steps: int
    pointer: int
    tape: List[int] = field(repr=False)


@dataclass
class BrainfuckInterpreter:
    """Reference semantics for the C programs emitted by the translator."""

    tape_length: int = TAPE_LENGTH

    tape: List[int] = field(init=False, repr=False)
    pointer: int = field(init=False, repr=False)
    output_buffer: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.tape = [0] * self.tape_length
        self.pointer = 0
        self.output_buffer = bytearray()

    def run(
        self,
        code: str,
        input_data: Optional[Iterable[int]] = None,
        max_steps: Optional[int] = None,
    ) -> RunResult:
        self.reset()
        commands = [ch for ch in code if ch in STATEMENTS]
        jump_map = self._build_jump_map(commands)
        input_iter = iter(list(input_data or []))
        pc = 0
        steps = 0

        while pc < len(commands):
            if max_steps is not None and steps >= max_steps:
                raise StepLimitExceeded("Brainfuck program exceeded allowed step count")
            pc = self._execute_instruction(commands[pc], pc, jump_map, input_iter)
            steps += 1

        return RunResult(
            output=bytes(self.output_buffer),
            steps=steps,
            pointer=self.pointer,
            tape=list(self.tape),
        )

    def _execute_instruction(
        self,
        command: str,
        pc: int,
        jump_map: Dict[int, int],
        input_iter: Iterator[int],
    ) -> int:
        new_pc = pc + 1
        if command == Symbol.MOVE_RIGHT:
            self.pointer += 1
            if self.pointer >= self.tape_length:
                raise IndexError("Pointer moved beyond the tape length.")
        elif command == Symbol.MOVE_LEFT:
            self.pointer -= 1
            if self.pointer < 0:
                raise IndexError("Pointer moved before start of tape.")
        elif command == Symbol.INCREMENT:
            self.tape[self.pointer] = (self.tape[self.pointer] + 1) & 0xFF
        elif command == Symbol.DECREMENT:
            self.tape[self.pointer] = (self.tape[self.pointer] - 1) & 0xFF
        elif command == Symbol.WRITE_OUTPUT:
            self.output_buffer.append(self.tape[self.pointer])
        elif command == Symbol.READ_INPUT:
            self.tape[self.pointer] = next(input_iter, EOF_VALUE) & 0xFF
        elif command == Symbol.LOOP_OPEN:
            if self.tape[self.pointer] == 0:
                new_pc = jump_map[pc] + 1
        elif command == Symbol.LOOP_CLOSE:
            if self.tape[self.pointer] != 0:
                new_pc = jump_map[pc] + 1
        return new_pc

    def _build_jump_map(self, commands: List[str]) -> Dict[int, int]:
        jump_map: Dict[int, int] = {}
        stack: List[int] = []
        for index, char in enumerate(commands):
            if char == Symbol.LOOP_OPEN:
                stack.append(index)
            elif char == Symbol.LOOP_CLOSE:
                if not stack:
                    raise UnbalancedLoopError("Unmatched ']' at command {}".format(index))
                start = stack.pop()
                jump_map[start] = index
                jump_map[index] = start
        if stack:
            raise UnbalancedLoopError("Unmatched '[' at command {}".format(stack.pop()))
        return jump_map


__all__ = [
    "BrainfuckInterpreter",
    "EOF_VALUE",
    "RunResult",
    "StepLimitExceeded",
    "UnbalancedLoopError",
]
