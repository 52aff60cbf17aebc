"""
Quotient slicing tests
"""
import pytest

from plonk_kzg.errors import DegreeOverflow
from plonk_kzg.field import FR
from plonk_kzg.kzg import Commitment, KZGScheme
from plonk_kzg.polynomial import Polynomial
from plonk_kzg.slicing import SlicedPolynomial, slice_degree
from plonk_kzg.srs import SRS


def _poly(length):
    return Polynomial([FR(i + 1) for i in range(length)])


class TestSlicing:
    def test_slice_degree(self):
        assert slice_degree(8) == 9

    def test_recombine(self):
        p = _poly(15)
        sliced = SlicedPolynomial(p, 4)
        assert all(s.degree <= 4 for s in sliced.slices)
        assert sliced.recombine() == p

    def test_short_polynomial_leaves_empty_slices(self):
        sliced = SlicedPolynomial(_poly(3), 4)
        assert sliced.mid.is_zero()
        assert sliced.hi.is_zero()
        assert sliced.recombine() == _poly(3)

    def test_interior_zero_slice(self):
        coeffs = [FR(1)] * 5 + [FR(0)] * 5 + [FR(2)] * 5
        p = Polynomial(coeffs)
        sliced = SlicedPolynomial(p, 4)
        assert sliced.mid.is_zero()
        assert sliced.recombine() == p

    def test_overflow(self):
        with pytest.raises(DegreeOverflow):
            SlicedPolynomial(_poly(16), 4)

    def test_compact_matches_evaluation(self):
        p = _poly(15)
        sliced = SlicedPolynomial.for_domain(p, 3)
        zeta = FR(31337)
        assert sliced.compact(zeta).evaluate(zeta) == p.evaluate(zeta)
        assert sliced.evaluate(zeta) == p.evaluate(zeta)

    def test_commitments_recombine(self):
        srs = SRS.from_tau(FR(5), max_degree=4)
        scheme = KZGScheme(srs)
        p = _poly(15)
        sliced = SlicedPolynomial(p, 4)
        lo, mid, hi = sliced.commit(scheme)
        tau = FR(5)
        combined = lo + mid * tau ** 5 + hi * tau ** 10
        assert combined == Commitment.generator() * p.evaluate(tau)
