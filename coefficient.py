from __future__ import annotations
import re
from typing import Optional
import numpy as np
from errors import FailureKind

COEFF_MIN = int(np.iinfo(np.int64).min)
COEFF_MAX = int(np.iinfo(np.int64).max)
EXP_MIN = 0
EXP_MAX = int(np.iinfo(np.int32).max)
UNSIGNED_MAX = int(np.iinfo(np.uint64).max)

_SIGNED = re.compile(r"-?[0-9]+")
_UNSIGNED = re.compile(r"[0-9]+")

class NumberResult:
	"""Outcome of converting a piece of text to a bounded integer."""
	__slots__ = ("value", "error")
	def __init__(self, value: int = 0, error: Optional[FailureKind] = None) -> None:
		self.value = value
		self.error = error
	@property
	def ok(self) -> bool:
		return self.error is None
	def __repr__(self) -> str:
		if self.ok:
			return f"NumberResult({self.value})"
		return f"NumberResult(error={self.error.name})"

def _read(text: str, pattern: re.Pattern, lo: int, hi: int, kind: FailureKind) -> NumberResult:
	if pattern.fullmatch(text) is None:
		return NumberResult(error=FailureKind.MALFORMED)
	n = int(text)
	if n < lo or n > hi:
		return NumberResult(error=kind)
	return NumberResult(n)

def read_coeff(text: str) -> NumberResult:
	return _read(text, _SIGNED, COEFF_MIN, COEFF_MAX, FailureKind.COEFF_OUT_OF_RANGE)

def read_exp(text: str) -> NumberResult:
	return _read(text, _UNSIGNED, EXP_MIN, EXP_MAX, FailureKind.EXP_OUT_OF_RANGE)

def read_unsigned(text: str) -> NumberResult:
	# DEG_BY and COMPOSE parameters
	return _read(text, _UNSIGNED, 0, UNSIGNED_MAX, FailureKind.COEFF_OUT_OF_RANGE)

def in_coeff_range(n: int) -> bool:
	return COEFF_MIN <= n <= COEFF_MAX

def in_exp_range(n: int) -> bool:
	return EXP_MIN <= n <= EXP_MAX

# One-element int64 arrays: ufunc loops wrap on overflow like native
# fixed-width arithmetic and do not warn the way numpy scalars do.
def _lane(n: int) -> np.ndarray:
	return np.array([n], dtype=np.int64)

def add(a: int, b: int) -> int:
	return int(np.add(_lane(a), _lane(b))[0])

def mul(a: int, b: int) -> int:
	return int(np.multiply(_lane(a), _lane(b))[0])

def neg(a: int) -> int:
	return int(np.negative(_lane(a))[0])

def power(x: int, n: int) -> int:
	"""x**n by binary exponentiation, wrapping at 64 bits."""
	if n < 0:
		raise ValueError("negative exponent")
	result = _lane(1)
	base = _lane(x)
	while n > 0:
		if n & 1:
			result = np.multiply(result, base)
		n >>= 1
		if n:
			base = np.multiply(base, base)
	return int(result[0])
