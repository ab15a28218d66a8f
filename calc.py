from __future__ import annotations
import logging
import string
import sys
from typing import Callable, Dict, Iterable, Optional, TextIO, Tuple

from coefficient import NumberResult, read_coeff, read_unsigned
from config import CalcConfig
from errors import CalcError, ErrorCode, ExponentRangeError, PolyParseError
from polynomial import Polynomial
from polynomial_parser import parse_polynomial
from stack import PolyStack

logger = logging.getLogger(__name__)

LETTERS = frozenset(string.ascii_letters)
WHITESPACE = frozenset(" \t\n\v\f\r")


class Calculator:
    """Stack calculator driven one text line at a time.

    A line is ignored if it is empty or a comment, run as a command if it
    starts with a letter, and otherwise parsed as a polynomial and pushed.
    Results go to ``out``; diagnostics go to ``err`` as
    ``ERROR <line> <MESSAGE>``. A rejected line leaves the stack untouched.
    """

    def __init__(
        self,
        config: Optional[CalcConfig] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self.config = config or CalcConfig()
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.stack = PolyStack()
        self._commands: Dict[str, Callable[[], None]] = {
            "ZERO": self._zero,
            "IS_COEFF": self._is_coeff,
            "IS_ZERO": self._is_zero,
            "CLONE": self._clone,
            "ADD": self._add,
            "MUL": self._mul,
            "NEG": self._neg,
            "SUB": self._sub,
            "IS_EQ": self._is_eq,
            "DEG": self._deg,
            "PRINT": self._print,
            "POP": self._pop,
        }
        # name -> (error for a bad parameter, characters that may start it,
        #          number reader, handler)
        self._param_commands: Dict[
            str, Tuple[ErrorCode, str, Callable[[str], NumberResult], Callable[[int], None]]
        ] = {
            "DEG_BY": (ErrorCode.DEG_BY_WRONG_VAR, string.digits, read_unsigned, self._deg_by),
            "AT": (ErrorCode.AT_WRONG_VAL, string.digits + "-", read_coeff, self._at),
            "COMPOSE": (ErrorCode.COMPOSE_WRONG_PARAM, string.digits, read_unsigned, self._compose),
        }

    # -----------------
    # Driving
    # -----------------
    def run(self, lines: Iterable[str]) -> None:
        for number, raw in enumerate(lines, start=1):
            self.process_line(raw, number)
        self.stack.clear()

    def process_line(self, raw: str, line_number: int) -> None:
        line = raw[:-1] if raw.endswith("\n") else raw
        if not line or line.startswith(self.config.comment_char):
            return
        try:
            if line[0] in LETTERS:
                self.execute(line)
            else:
                self.stack.push(self.read_poly(line))
        except CalcError as e:
            e.line = line_number
            self._report(e)
        except ExponentRangeError as e:
            logger.debug("line %d: %s", line_number, e)
            self._report(CalcError(ErrorCode.EXPONENT_OVERFLOW, line_number))

    def read_poly(self, line: str) -> Polynomial:
        try:
            return parse_polynomial(line, self.config.max_nesting)
        except PolyParseError as e:
            logger.debug("rejected polynomial %r: %s", line, e)
            raise CalcError(ErrorCode.WRONG_POLY) from e

    def execute(self, line: str) -> None:
        handler = self._commands.get(line)
        if handler is not None:
            logger.debug("command %s", line)
            handler()
            return
        for name in self._param_commands:
            if line.startswith(name):
                self._execute_param(name, line[len(name):])
                return
        raise CalcError(ErrorCode.WRONG_COMMAND)

    def _execute_param(self, name: str, rest: str) -> None:
        code, first, read, handler = self._param_commands[name]
        if not rest.startswith(" ") or len(rest) < 2 or rest[1] not in first:
            # "DEG_BYX" is an unknown command, "DEG_BY" or "DEG_BY x" a bad parameter
            if rest and rest[0] not in WHITESPACE:
                raise CalcError(ErrorCode.WRONG_COMMAND)
            raise CalcError(code)
        num = read(rest[1:])
        if not num.ok:
            raise CalcError(code)
        logger.debug("command %s %d", name, num.value)
        handler(num.value)

    def _report(self, e: CalcError) -> None:
        logger.debug("%s", e)
        self.err.write(f"{e}\n")

    def _emit(self, value: object) -> None:
        self.out.write(f"{value}\n")

    def _emit_bool(self, flag: bool) -> None:
        self._emit(self.config.true_string if flag else self.config.false_string)

    def _replace_top(self, n: int, result: Polynomial) -> None:
        for p in self.stack.pop_many(n):
            p.destroy()
        self.stack.push(result)

    # -----------------
    # Commands
    # -----------------
    def _zero(self) -> None:
        self.stack.push(Polynomial.zero())

    def _is_coeff(self) -> None:
        self._emit_bool(self.stack.peek().is_constant())

    def _is_zero(self) -> None:
        self._emit_bool(self.stack.peek().is_zero())

    def _clone(self) -> None:
        self.stack.push(self.stack.peek().clone())

    def _add(self) -> None:
        self.stack.require(2)
        self._replace_top(2, self.stack.peek(0) + self.stack.peek(1))

    def _mul(self) -> None:
        self.stack.require(2)
        self._replace_top(2, self.stack.peek(0) * self.stack.peek(1))

    def _neg(self) -> None:
        self._replace_top(1, -self.stack.peek())

    def _sub(self) -> None:
        self.stack.require(2)
        self._replace_top(2, self.stack.peek(0) - self.stack.peek(1))

    def _is_eq(self) -> None:
        self.stack.require(2)
        self._emit_bool(self.stack.peek(0) == self.stack.peek(1))

    def _deg(self) -> None:
        self._emit(self.stack.peek().degree())

    def _print(self) -> None:
        self._emit(self.stack.peek().to_string())

    def _pop(self) -> None:
        self.stack.pop().destroy()

    def _deg_by(self, var_idx: int) -> None:
        self._emit(self.stack.peek().degree_by(var_idx))

    def _at(self, x: int) -> None:
        self._replace_top(1, self.stack.peek().at(x))

    def _compose(self, k: int) -> None:
        # top is the outer polynomial; q[k-1] sits right below it, q[0] deepest
        self.stack.require(k + 1)
        p = self.stack.peek()
        q = [self.stack.peek(k - i) for i in range(k)]
        self._replace_top(k + 1, p.compose(q, k))
