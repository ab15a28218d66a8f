from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
from coefficient import in_exp_range
from errors import ExponentRangeError

if TYPE_CHECKING:
	from polynomial import Polynomial

@dataclass(eq=False)
class Monomial:
	"""coeff * x_i^exp, where coeff is a polynomial in x_{i+1}, x_{i+2}, ..."""
	coeff: Polynomial
	exp: int = 0
	def degree(self) -> int:
		return self.exp + self.coeff.degree()
	def is_zero(self) -> bool:
		return self.coeff.is_zero()
	def clone(self) -> Monomial:
		return Monomial(self.coeff.clone(), self.exp)
	def destroy(self) -> None:
		self.coeff.destroy()
	def add_m(self, other: Monomial) -> Monomial:
		# caller guarantees equal exponents
		return Monomial(self.coeff + other.coeff, self.exp)
	def mul_m(self, other: Monomial) -> Monomial:
		e = self.exp + other.exp
		if not in_exp_range(e):
			raise ExponentRangeError(e)
		return Monomial(self.coeff * other.coeff, e)
	def mul_c(self, c: Polynomial) -> Monomial:
		return Monomial(self.coeff * c, self.exp)
	def __neg__(self) -> Monomial:
		return Monomial(-self.coeff, self.exp)
	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Monomial):
			return NotImplemented
		return self.exp == other.exp and self.coeff == other.coeff
	def __hash__(self) -> int:
		return hash((self.exp, self.coeff))
	def to_string(self) -> str:
		return f"({self.coeff.to_string()},{self.exp})"
	def __str__(self) -> str:
		return self.to_string()
