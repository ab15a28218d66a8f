from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import coefficient
from coefficient import in_coeff_range, in_exp_range
from errors import CoefficientRangeError, FailureKind
from monomial import Monomial


class Polynomial:
    """Sparse multivariable polynomial with 64-bit integer coefficients.

    A value is either a ``Constant`` or a ``Terms`` list of monomials in the
    variable x_0 whose coefficients are polynomials in x_1, x_2, ... and so
    on down the nesting. Every value produced here is canonical:

    * ``Constant(0)`` is the only zero;
    * a ``Terms`` list is non-empty, strictly ascending by exponent and
      holds no zero coefficient;
    * a single exponent-0 monomial with a constant coefficient is always
      flattened to that constant.

    Canonical form is unique, so structural equality is algebraic equality.

    Operators borrow their arguments and return fresh values that share no
    structure with them. ``own_monos`` is the exception: it takes over the
    list it is given. ``clone`` and ``destroy`` live on the two variants.
    """

    @staticmethod
    def zero() -> "Constant":
        return Constant(0)

    @staticmethod
    def from_coeff(c: int) -> "Constant":
        if not in_coeff_range(c):
            raise CoefficientRangeError(c)
        return Constant(c)

    @staticmethod
    def own_monos(monos: List[Monomial]) -> "Polynomial":
        """Sum of ``monos``, taking ownership of the list and its monomials."""
        return add_monos(monos)

    @staticmethod
    def clone_monos(monos: Sequence[Monomial]) -> "Polynomial":
        """Sum of ``monos``; the input is deep-copied and left untouched."""
        return add_monos([m.clone() for m in monos])

    def is_constant(self) -> bool:
        return isinstance(self, Constant)

    def is_zero(self) -> bool:
        return isinstance(self, Constant) and self.coeff == 0

    # =====================
    # Addition
    # =====================

    def __add__(self, rhs: "Polynomial") -> "Polynomial":
        if isinstance(self, Constant) and isinstance(rhs, Constant):
            return Constant(coefficient.add(self.coeff, rhs.coeff))
        if isinstance(self, Constant):
            return rhs._add_const(self)
        if isinstance(rhs, Constant):
            return self._add_const(rhs)
        return self._add_terms(rhs)

    def _add_const(self, c: "Constant") -> "Polynomial":
        if c.is_zero():
            return self.clone()
        first = self.monos[0]
        if first.exp == 0:
            head = first.coeff + c
            rest = [m.clone() for m in self.monos[1:]]
            if head.is_zero():
                return _interpret(rest)
            return _interpret([Monomial(head, 0)] + rest)
        return Terms([Monomial(c.clone(), 0)] + [m.clone() for m in self.monos])

    def _add_terms(self, rhs: "Terms") -> "Polynomial":
        a, b = self.monos, rhs.monos
        out: List[Monomial] = []
        i = j = 0
        while i < len(a) and j < len(b):
            ma, mb = a[i], b[j]
            if ma.exp == mb.exp:
                s = ma.add_m(mb)
                if not s.is_zero():
                    out.append(s)
                i += 1
                j += 1
            elif ma.exp < mb.exp:
                out.append(ma.clone())
                i += 1
            else:
                out.append(mb.clone())
                j += 1
        out.extend(m.clone() for m in a[i:])
        out.extend(m.clone() for m in b[j:])
        return _interpret(out)

    def __neg__(self) -> "Polynomial":
        if isinstance(self, Constant):
            return Constant(coefficient.neg(self.coeff))
        return Terms([-m for m in self.monos])

    def __sub__(self, rhs: "Polynomial") -> "Polynomial":
        nq = -rhs
        result = self + nq
        nq.destroy()
        return result

    # =====================
    # Multiplication
    # =====================

    def __mul__(self, rhs: "Polynomial") -> "Polynomial":
        if isinstance(self, Constant) and isinstance(rhs, Constant):
            return Constant(coefficient.mul(self.coeff, rhs.coeff))
        if isinstance(self, Constant):
            return rhs._mul_const(self)
        if isinstance(rhs, Constant):
            return self._mul_const(rhs)
        prods: List[Monomial] = []
        for a in self.monos:
            for b in rhs.monos:
                prods.append(a.mul_m(b))
        return add_monos(prods)

    def _mul_const(self, c: "Constant") -> "Polynomial":
        if c.is_zero():
            return Constant(0)
        # wrapping can still zero out a coefficient, so renormalize
        return add_monos([m.mul_c(c) for m in self.monos])

    def pow(self, exp: int) -> "Polynomial":
        """self**exp by repeated squaring, O(log exp) multiplications."""
        if exp < 0:
            raise ValueError("Exponent must be non-negative integer")
        result: Polynomial = Constant(1)
        base = self.clone()
        while True:
            if exp & 1:
                result = result * base
            exp >>= 1
            if not exp:
                break
            base = base * base
        return result

    # =====================
    # Queries
    # =====================

    def degree(self) -> int:
        if isinstance(self, Constant):
            return -1 if self.coeff == 0 else 0
        return max(m.degree() for m in self.monos)

    def degree_by(self, var_idx: int) -> int:
        """Degree in x_{var_idx} alone; -1 for zero, 0 if the variable is absent."""
        if var_idx < 0:
            raise ValueError("variable index must be non-negative")
        if isinstance(self, Constant):
            return -1 if self.coeff == 0 else 0
        if var_idx == 0:
            return self.monos[-1].exp
        return max(m.coeff.degree_by(var_idx - 1) for m in self.monos)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        if isinstance(self, Constant) and isinstance(other, Constant):
            return self.coeff == other.coeff
        if isinstance(self, Constant) or isinstance(other, Constant):
            return False
        if len(self.monos) != len(other.monos):
            return False
        return all(ma == mb for ma, mb in zip(self.monos, other.monos))

    def __hash__(self) -> int:
        if isinstance(self, Constant):
            return hash(self.coeff)
        return hash(tuple(self.monos))

    # =====================
    # Substitution
    # =====================

    def at(self, x: int) -> "Polynomial":
        """Substitute x for x_0; the remaining variables move up one level."""
        if not in_coeff_range(x):
            raise CoefficientRangeError(x)
        if isinstance(self, Constant):
            return self.clone()
        result: Polynomial = Constant(0)
        for m in self.monos:
            result = result + m.coeff * Constant(coefficient.power(x, m.exp))
        return result

    def compose(self, q: Sequence["Polynomial"], k: Optional[int] = None) -> "Polynomial":
        """Substitute polynomials for variables: return P(q[0], ..., q[k-1], 0, 0, ...).

        x_i becomes q[i] for i < k and 0 otherwise; k defaults to len(q).
        """
        if k is None:
            k = len(q)
        if k < 0 or k > len(q):
            raise ValueError(f"need {k} substitutions, got {len(q)}")
        return self._compose(q, k, 0)

    def _compose(self, q: Sequence["Polynomial"], k: int, var_id: int) -> "Polynomial":
        if isinstance(self, Constant):
            return self.clone()
        result: Polynomial = Constant(0)
        for m in self.monos:
            # the coefficient may hold deeper variables even when exp == 0
            term = m.coeff._compose(q, k, var_id + 1)
            if m.exp > 0:
                term = term * q[var_id].pow(m.exp) if var_id < k else Constant(0)
            result = result + term
        return result

    def to_string(self) -> str:
        if isinstance(self, Constant):
            return str(self.coeff)
        return "+".join(m.to_string() for m in self.monos)

    def __str__(self) -> str:
        return self.to_string()


@dataclass(eq=False)
class Constant(Polynomial):
    coeff: int = 0

    def clone(self) -> "Constant":
        return Constant(self.coeff)

    def destroy(self) -> None:
        pass


@dataclass(eq=False)
class Terms(Polynomial):
    monos: List[Monomial] = field(default_factory=list)

    def clone(self) -> "Terms":
        return Terms([m.clone() for m in self.monos])

    def destroy(self) -> None:
        for m in self.monos:
            m.destroy()
        self.monos.clear()

    def size(self) -> int:
        return len(self.monos)


# =====================
# Normalization
# =====================


def _exp_of(m: Monomial) -> int:
    return m.exp


def _interpret(monos: List[Monomial]) -> Polynomial:
    """Wrap an ascending, zero-free monomial list, collapsing trivial shapes."""
    if not monos:
        return Constant(0)
    if len(monos) == 1 and monos[0].exp == 0 and monos[0].coeff.is_constant():
        return monos[0].coeff
    return Terms(monos)


def add_monos(monos: List[Monomial]) -> Polynomial:
    """Canonical polynomial equal to the sum of ``monos``.

    The list may be unsorted and may contain repeated exponents and zero
    coefficients. It is sorted and compacted in place and becomes the
    storage of the result, so the caller gives it up.
    """
    if not monos:
        return Constant(0)
    monos.sort(key=_exp_of)
    w = 0
    for r in range(1, len(monos)):
        if monos[r].exp == monos[w].exp:
            monos[w] = monos[w].add_m(monos[r])
        else:
            if not monos[w].is_zero():
                w += 1
            monos[w] = monos[r]
    if not monos[w].is_zero():
        w += 1
    del monos[w:]
    return _interpret(monos)


@dataclass(frozen=True)
class Ingested:
    poly: Optional[Polynomial] = None
    error: Optional[FailureKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def ingest(pairs: Iterable[Tuple[Polynomial, int]]) -> Ingested:
    """Build a canonical polynomial from raw ``(coefficient, exponent)`` pairs.

    The pairs are taken over. On failure every coefficient is released and
    the result carries the failure kind instead of a polynomial.
    """
    pairs = list(pairs)
    error: Optional[FailureKind] = None
    for coeff, exp in pairs:
        if not in_exp_range(exp):
            error = FailureKind.EXP_OUT_OF_RANGE
            break
        if isinstance(coeff, Constant) and not in_coeff_range(coeff.coeff):
            error = FailureKind.COEFF_OUT_OF_RANGE
            break
        if not is_canonical(coeff):
            error = FailureKind.MALFORMED
            break
    if error is not None:
        for coeff, _ in pairs:
            coeff.destroy()
        return Ingested(error=error)
    return Ingested(poly=add_monos([Monomial(c, e) for c, e in pairs]))


def is_canonical(p: Polynomial) -> bool:
    if isinstance(p, Constant):
        return in_coeff_range(p.coeff)
    if not p.monos:
        return False
    prev = -1
    for m in p.monos:
        if not in_exp_range(m.exp) or m.exp <= prev:
            return False
        if m.coeff.is_zero() or not is_canonical(m.coeff):
            return False
        prev = m.exp
    first = p.monos[0]
    return not (len(p.monos) == 1 and first.exp == 0 and first.coeff.is_constant())
