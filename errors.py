from __future__ import annotations
from enum import Enum
from typing import Optional


class FailureKind(Enum):
    """Why a number or a raw term list was refused at the ingestion boundary."""

    COEFF_OUT_OF_RANGE = "coefficient out of range"
    EXP_OUT_OF_RANGE = "exponent out of range"
    MALFORMED = "malformed input"


class ErrorCode(Enum):
    WRONG_COMMAND = "WRONG COMMAND"
    DEG_BY_WRONG_VAR = "DEG BY WRONG VARIABLE"
    AT_WRONG_VAL = "AT WRONG VALUE"
    STACK_UNDERFLOW = "STACK UNDERFLOW"
    WRONG_POLY = "WRONG POLY"
    COMPOSE_WRONG_PARAM = "COMPOSE WRONG PARAMETER"
    EXPONENT_OVERFLOW = "EXPONENT OVERFLOW"

    @property
    def message(self) -> str:
        return self.value


class CalcError(Exception):
    """A command or input line that the calculator refuses."""

    def __init__(self, code: ErrorCode, line: Optional[int] = None) -> None:
        super().__init__(code.message)
        self.code = code
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return f"ERROR {self.code.message}"
        return f"ERROR {self.line} {self.code.message}"


class CoefficientRangeError(ValueError):
    def __init__(self, value: int) -> None:
        super().__init__(f"coefficient {value} outside the 64-bit signed range")
        self.value = value
        self.kind = FailureKind.COEFF_OUT_OF_RANGE


class ExponentRangeError(ValueError):
    def __init__(self, value: int) -> None:
        super().__init__(f"exponent {value} outside [0, 2^31 - 1]")
        self.value = value
        self.kind = FailureKind.EXP_OUT_OF_RANGE


class PolyParseError(ValueError):
    def __init__(self, msg: str, pos: int = -1, kind: FailureKind = FailureKind.MALFORMED) -> None:
        super().__init__(msg if pos < 0 else f"{msg} at column {pos}")
        self.pos = pos
        self.kind = kind
