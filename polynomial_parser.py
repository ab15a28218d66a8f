from __future__ import annotations
from typing import List, Tuple
from coefficient import read_coeff, read_exp
from errors import PolyParseError
from polynomial import Constant, Polynomial, ingest

# Recursive descent over the bracketed notation:
#   poly  := coeff | mono ('+' mono)*
#   mono  := '(' poly ',' exp ')'
#   coeff := '-'? digit+
#   exp   := digit+
# No whitespace is allowed anywhere.

DIGITS = "0123456789"

class PolyReader:
	def __init__(self, text: str, max_nesting: int = 100) -> None:
		self.s, self.i, self.n = text, 0, len(text)
		self.max_nesting = max_nesting
	def peek(self) -> str:
		return self.s[self.i] if self.i < self.n else ""
	def expect(self, c: str) -> None:
		if self.peek() != c:
			got = self.peek() or "end of input"
			raise PolyParseError(f"Expected {c!r}, got {got!r}", self.i)
		self.i += 1
	def number(self, signed: bool) -> str:
		j = self.i
		if signed and j < self.n and self.s[j] == "-":
			j += 1
		while j < self.n and self.s[j] in DIGITS:
			j += 1
		lex = self.s[self.i:j]
		self.i = j
		return lex
	def poly(self, depth: int = 0) -> Polynomial:
		c = self.peek()
		if c == "(":
			if depth >= self.max_nesting:
				raise PolyParseError(f"Nesting deeper than {self.max_nesting}", self.i)
			pairs: List[Tuple[Polynomial, int]] = []
			try:
				pairs.append(self.mono(depth))
				while self.peek() == "+":
					self.i += 1
					pairs.append(self.mono(depth))
			except PolyParseError:
				for coeff, _ in pairs:
					coeff.destroy()
				raise
			res = ingest(pairs)
			if not res.ok:
				raise PolyParseError("Terms refused", self.i, res.error)
			return res.poly
		if c != "" and (c in DIGITS or c == "-"):
			start = self.i
			num = read_coeff(self.number(signed=True))
			if not num.ok:
				raise PolyParseError("Bad coefficient", start, num.error)
			return Constant(num.value)
		raise PolyParseError(f"Unexpected char {c!r}", self.i)
	def mono(self, depth: int) -> Tuple[Polynomial, int]:
		self.expect("(")
		coeff = self.poly(depth + 1)
		self.expect(",")
		start = self.i
		num = read_exp(self.number(signed=False))
		if not num.ok:
			raise PolyParseError("Bad exponent", start, num.error)
		self.expect(")")
		return coeff, num.value

def parse_polynomial(expr: str, max_nesting: int = 100) -> Polynomial:
	reader = PolyReader(expr, max_nesting)
	p = reader.poly()
	if reader.i != reader.n:
		raise PolyParseError("Trailing input", reader.i)
	return p
