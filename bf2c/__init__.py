from .bf_interpreter import BrainfuckInterpreter, RunResult, StepLimitExceeded, UnbalancedLoopError
from .translator import (
    TAPE_LENGTH,
    BrainfuckTranslator,
    Symbol,
    TranslationReport,
    translate,
    translate_text,
)

__all__ = [
    "BrainfuckInterpreter",
    "BrainfuckTranslator",
    "RunResult",
    "StepLimitExceeded",
    "Symbol",
    "TAPE_LENGTH",
    "TranslationReport",
    "UnbalancedLoopError",
    "translate",
    "translate_text",
]
