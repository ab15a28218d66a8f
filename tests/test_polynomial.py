"""Tests for the recursive polynomial representation and its operators."""

import itertools
import random

import pytest

from errors import CoefficientRangeError, ExponentRangeError, FailureKind
from monomial import Monomial
from polynomial import (
    Constant,
    Polynomial,
    Terms,
    ingest,
    is_canonical,
)
from polynomial_parser import parse_polynomial as P

C = Constant
M = Monomial

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def var(i):
    """x_i as a canonical polynomial."""
    p = Terms([M(C(1), 1)])
    for _ in range(i):
        p = Terms([M(p, 0)])
    return p


def random_poly(rng, depth=2, zero_ok=True):
    if depth == 0 or rng.random() < 0.3:
        c = rng.randint(-5, 5)
        if c == 0 and not zero_ok:
            c = 1
        return Polynomial.from_coeff(c)
    monos = [
        M(random_poly(rng, depth - 1), rng.randint(0, 4))
        for _ in range(rng.randint(1, 4))
    ]
    p = Polynomial.own_monos(monos)
    if p.is_zero() and not zero_ok:
        return C(1)
    return p


class TestTermModel:
    def test_zero(self):
        z = Polynomial.zero()
        assert z.is_zero()
        assert z.is_constant()
        assert z == C(0)

    def test_from_coeff_bounds(self):
        assert Polynomial.from_coeff(INT64_MAX) == C(INT64_MAX)
        assert Polynomial.from_coeff(INT64_MIN) == C(INT64_MIN)
        with pytest.raises(CoefficientRangeError):
            Polynomial.from_coeff(INT64_MAX + 1)
        with pytest.raises(CoefficientRangeError):
            Polynomial.from_coeff(INT64_MIN - 1)

    def test_terms_are_not_constant(self):
        p = P("(1,1)")
        assert not p.is_constant()
        assert not p.is_zero()
        assert isinstance(p, Terms)
        assert p.size() == 1

    def test_clone_is_deep(self):
        p = P("((1,2)+(3,4),1)+(7,0)")
        c = p.clone()
        assert c == p
        assert c is not p
        assert c.monos is not p.monos
        assert c.monos[1].coeff is not p.monos[1].coeff

    def test_destroy_releases_only_the_target(self):
        p = P("((1,2)+(3,4),1)+(7,0)")
        c = p.clone()
        c.destroy()
        assert c.monos == []
        assert p == P("((1,2)+(3,4),1)+(7,0)")

    def test_destroy_constant_is_noop(self):
        c = C(4)
        c.destroy()
        assert c == C(4)

    def test_hash_matches_equality(self):
        assert hash(P("(1,0)+(2,3)")) == hash(P("(2,3)+(1,0)"))
        assert len({P("(1,1)"), P("(1,1)"), C(1)}) == 2

    def test_printer(self):
        assert str(C(-12)) == "-12"
        assert str(P("(1,0)+((2,1),3)")) == "(1,0)+((2,1),3)"


class TestNormalizer:
    def test_cancellation_and_zero_drop(self):
        p = Polynomial.own_monos([M(C(3), 2), M(C(0), 5), M(C(-3), 2)])
        assert isinstance(p, Constant)
        assert p.coeff == 0

    def test_sorts_and_merges(self):
        p = Polynomial.own_monos([M(C(1), 3), M(C(2), 1), M(C(4), 3)])
        assert str(p) == "(2,1)+(5,3)"
        assert is_canonical(p)

    def test_flatten_single_constant_term(self):
        assert Polynomial.own_monos([M(C(7), 0)]) == C(7)
        inner = Polynomial.own_monos([M(C(5), 0)])
        assert Polynomial.own_monos([M(inner, 0)]) == C(5)

    def test_keeps_nonconstant_exponent_zero_term(self):
        p = Polynomial.own_monos([M(P("(1,1)"), 0)])
        assert isinstance(p, Terms)
        assert p == var(1)

    def test_trailing_zero_term_dropped(self):
        p = Polynomial.own_monos([M(C(1), 0), M(C(0), 5)])
        assert p == C(1)

    def test_empty_is_zero(self):
        assert Polynomial.own_monos([]) == C(0)
        assert Polynomial.clone_monos([]) == C(0)

    def test_permutations_normalize_identically(self):
        base = [M(C(2), 3), M(C(-1), 0), M(P("(1,1)"), 3), M(C(5), 1)]
        expected = Polynomial.clone_monos(base)
        for perm in itertools.permutations(base):
            assert Polynomial.clone_monos(list(perm)) == expected

    def test_clone_monos_leaves_input(self):
        monos = [M(C(1), 2), M(C(-1), 2), M(P("(3,1)"), 0)]
        Polynomial.clone_monos(monos)
        assert len(monos) == 3
        assert monos[0].coeff == C(1)
        assert monos[2].coeff == P("(3,1)")


class TestIngest:
    def test_success(self):
        res = ingest([(C(1), 2), (C(2), 0), (C(-1), 2)])
        assert res.ok
        assert res.poly == C(2)

    def test_exponent_out_of_range(self):
        res = ingest([(C(1), 0), (C(1), 2 ** 31)])
        assert not res.ok
        assert res.poly is None
        assert res.error is FailureKind.EXP_OUT_OF_RANGE

    def test_negative_exponent(self):
        assert ingest([(C(1), -1)]).error is FailureKind.EXP_OUT_OF_RANGE

    def test_coefficient_out_of_range(self):
        res = ingest([(C(2 ** 63), 1)])
        assert res.error is FailureKind.COEFF_OUT_OF_RANGE

    def test_failure_releases_coefficients(self):
        inner = P("(1,1)+(2,2)")
        res = ingest([(inner, 1), (C(1), 2 ** 31)])
        assert not res.ok
        assert inner.monos == []


class TestAddNegSub:
    def test_constants(self):
        assert C(2) + C(3) == C(5)

    def test_constant_sum_wraps(self):
        assert C(INT64_MAX) + C(1) == C(INT64_MIN)

    def test_constant_into_existing_exponent_zero(self):
        assert str(P("(1,0)+(1,1)") + C(2)) == "(3,0)+(1,1)"

    def test_constant_cancels_exponent_zero(self):
        r = P("(1,0)+(1,1)") + C(-1)
        assert str(r) == "(1,1)"
        assert is_canonical(r)

    def test_constant_prepended(self):
        assert str(C(3) + P("(1,2)")) == "(3,0)+(1,2)"

    def test_constant_recurses_into_nested_coefficient(self):
        r = P("((1,1),0)+(1,1)") + C(2)
        assert str(r) == "((2,0)+(1,1),0)+(1,1)"

    def test_add_zero_gives_copy(self):
        p = P("(1,3)")
        r = p + C(0)
        assert r == p
        assert r is not p

    def test_merge_collapses_to_constant(self):
        r = P("(1,0)+(1,1)") + P("(-1,1)")
        assert isinstance(r, Constant)
        assert r == C(1)

    def test_merge_interleaves(self):
        r = P("(1,1)+(1,5)") + P("(2,0)+(3,3)+(-1,5)")
        assert str(r) == "(2,0)+(1,1)+(3,3)"

    def test_neg(self):
        assert str(-P("(1,0)+((2,1),3)")) == "(-1,0)+((-2,1),3)"
        assert -C(INT64_MIN) == C(INT64_MIN)

    def test_sub(self):
        assert (P("(2,1)") - P("(2,1)")).is_zero()
        assert str(P("(3,2)") - C(1)) == "(-1,0)+(3,2)"

    def test_sub_leaves_operands(self):
        p, q = P("(1,1)"), P("(1,2)")
        p - q
        assert q == P("(1,2)")
        assert p == P("(1,1)")


class TestMul:
    def test_square(self):
        one_plus_x = Terms([M(C(1), 0), M(C(1), 1)])
        r = one_plus_x * one_plus_x
        assert r == Terms([M(C(1), 0), M(C(2), 1), M(C(1), 2)])

    def test_constant_product_wraps(self):
        assert C(2 ** 62) * C(4) == C(0)
        assert C(INT64_MAX) * C(2) == C(-2)

    def test_times_zero(self):
        assert P("(1,1)+(3,4)") * C(0) == C(0)
        assert C(0) * P("(1,1)") == C(0)

    def test_wrapped_coefficient_is_dropped(self):
        r = P("(4611686018427387904,1)+(1,0)") * C(4)
        assert r == C(4)

    def test_difference_of_squares(self):
        r = P("((1,1),0)+(1,1)") * P("((-1,1),0)+(1,1)")
        assert str(r) == "((-1,2),0)+(1,2)"

    def test_exponent_overflow(self):
        with pytest.raises(ExponentRangeError):
            P("(1,2147483647)") * P("(1,1)")

    def test_exponent_at_bound(self):
        r = P("(1,2147483646)") * P("(1,1)")
        assert r.degree_by(0) == 2 ** 31 - 1

    def test_pow(self):
        p = P("(1,0)+(1,1)")
        assert str(p.pow(3)) == "(1,0)+(3,1)+(3,2)+(1,3)"
        assert p.pow(0) == C(1)
        assert p.pow(1) == p
        with pytest.raises(ValueError):
            p.pow(-1)


class TestDegree:
    def setup_method(self):
        # x_0^3 x_1^2 + x_0
        self.p = P("((1,2),3)+(1,1)")

    def test_constants(self):
        assert C(0).degree() == -1
        assert C(9).degree() == 0
        assert C(0).degree_by(3) == -1
        assert C(9).degree_by(0) == 0

    def test_total_degree(self):
        assert self.p.degree() == 5

    def test_degree_by(self):
        assert self.p.degree_by(0) == 3
        assert self.p.degree_by(1) == 2
        assert self.p.degree_by(5) == 0

    def test_degree_by_uses_highest_exponent(self):
        assert P("(1,0)+(1,2)+(1,5)").degree_by(0) == 5


class TestEquality:
    def test_constant_vs_terms(self):
        assert P("(1,1)") != C(1)
        assert C(1) != P("(1,1)")

    def test_size_mismatch(self):
        assert P("(1,1)") != P("(1,1)+(1,2)")

    def test_nested(self):
        assert P("((1,1),2)") == P("((1,1),2)")
        assert P("((1,1),2)") != P("((1,2),2)")
        assert P("((1,1),2)") != P("((1,1),3)")

    def test_not_a_polynomial(self):
        assert P("(1,1)") != "(1,1)"


class TestAt:
    def test_univariate(self):
        p = P("(1,0)+(2,1)+(3,2)")
        assert p.at(2) == C(17)
        assert p.at(-1) == C(2)

    def test_shifts_variables(self):
        # x_0 x_1 + 5 at x_0 = 3 is 3 x_0 + 5
        assert str(P("((1,1),1)+(5,0)").at(3)) == "(5,0)+(3,1)"

    def test_zero_point(self):
        assert P("(7,0)+(1,3)").at(0) == C(7)

    def test_constant(self):
        c = C(4)
        r = c.at(10)
        assert r == c
        assert r is not c

    def test_wraps(self):
        assert P("(1,64)").at(2) == C(0)

    def test_argument_range(self):
        with pytest.raises(CoefficientRangeError):
            P("(1,1)").at(2 ** 63)


class TestCompose:
    def test_substitution(self):
        assert str(P("(1,2)").compose([P("(1,0)+(1,1)")])) == "(1,0)+(2,1)+(1,2)"

    def test_two_variables(self):
        assert str(P("((1,1),1)").compose([C(3), P("(2,1)")])) == "(6,1)"

    def test_no_substitutes_evaluates_at_zero(self):
        assert P("(1,0)+(1,1)").compose([]) == C(1)
        assert P("((5,0)+(2,1),0)+(3,2)").compose([]) == C(5)

    def test_missing_variables_become_zero(self):
        assert P("((1,1),1)+(4,0)").compose([C(3)]) == C(4)

    def test_only_first_k_used(self):
        p = P("((1,1),0)")
        assert p.compose([C(2), C(9)], 1) == C(0)
        assert p.compose([C(2), C(9)], 2) == C(9)

    def test_constant(self):
        assert C(8).compose([P("(1,1)")]) == C(8)

    def test_bad_count(self):
        with pytest.raises(ValueError):
            P("(1,1)").compose([C(1)], 2)


class TestAlgebraicProperties:
    def setup_method(self):
        self.rng = random.Random(20210518)

    def polys(self, n=40, **kw):
        return [random_poly(self.rng, **kw) for _ in range(n)]

    def test_results_are_canonical(self):
        for p, q in zip(self.polys(), self.polys()):
            for r in (p + q, p - q, p * q, -p, p.at(3), p.compose([q, p])):
                assert is_canonical(r)

    def test_additive_identity_and_inverse(self):
        for p in self.polys():
            assert p + C(0) == p
            assert (p + (-p)).is_zero()

    def test_multiplicative_identity_and_zero(self):
        for p in self.polys():
            assert p * C(1) == p
            assert p * C(0) == C(0)

    def test_commutativity(self):
        for p, q in zip(self.polys(), self.polys()):
            assert p + q == q + p
            assert p * q == q * p

    def test_associativity(self):
        for p, q, r in zip(self.polys(20), self.polys(20), self.polys(20)):
            assert (p + q) + r == p + (q + r)
            assert (p * q) * r == p * (q * r)

    def test_distributivity(self):
        for p, q, r in zip(self.polys(20), self.polys(20), self.polys(20)):
            assert p * (q + r) == p * q + p * r

    def test_degree_of_product(self):
        for p, q in zip(self.polys(zero_ok=False), self.polys(zero_ok=False)):
            assert (p * q).degree() == p.degree() + q.degree()

    def test_degree_agrees_with_top_variable(self):
        checked = 0
        for p in self.polys(60, zero_ok=False):
            if not isinstance(p, Terms):
                continue
            checked += 1
            top = p.monos[-1]
            assert p.degree() == max(m.exp + m.coeff.degree() for m in p.monos)
            assert p.degree_by(0) == top.exp
            assert p.degree() >= p.degree_by(0) + top.coeff.degree()
        assert checked > 0

    def test_evaluation_is_linear(self):
        for p, q in zip(self.polys(), self.polys()):
            for x in (-3, 0, 1, 7):
                assert (p + q).at(x) == p.at(x) + q.at(x)

    def test_compose_with_own_variables_is_identity(self):
        for p in self.polys():
            assert p.compose([var(0), var(1), var(2)]) == p

    def test_compose_agrees_with_at(self):
        for p in self.polys(depth=1):
            for x in (-2, 0, 5):
                assert p.compose([C(x)]) == p.at(x)
