"""
Foundation module tests: field.py, polynomial.py, domain.py, config.py
"""
import hashlib

import pytest

from plonk_kzg.config import PlonkConfig, load_config
from plonk_kzg.domain import EvaluationDomain, next_power_of_2
from plonk_kzg.errors import ConstraintViolation
from plonk_kzg.field import (
    FR, CURVE_ORDER, G1, G2, Z1,
    ec_mul, ec_add, ec_neg, ec_eq, ec_pairing,
    is_on_g1, from_affine, to_affine,
    get_root_of_unity, get_roots_of_unity,
)
from plonk_kzg.polynomial import Polynomial, fft, ifft, poly_div


# =====================================================================
# FR arithmetic
# =====================================================================

class TestFR:
    def test_modular_reduction(self):
        assert FR(CURVE_ORDER) == FR(0)
        assert FR(CURVE_ORDER + 7) == FR(7)

    def test_negative_wraps(self):
        assert FR(-1) == FR(CURVE_ORDER - 1)

    def test_division_inverse(self):
        a = FR(3)
        assert a * (FR(1) / a) == FR(1)

    def test_operations_stay_in_fr(self):
        assert isinstance(FR(3) * FR(4), FR)
        assert isinstance(FR(3) - 5, FR)


# =====================================================================
# Elliptic curve helpers
# =====================================================================

class TestCurve:
    def test_scalar_reduced_mod_order(self):
        assert ec_eq(ec_mul(G1, CURVE_ORDER + 2), ec_mul(G1, 2))

    def test_add_neg_is_identity(self):
        p = ec_mul(G1, 5)
        assert ec_eq(ec_add(p, ec_neg(p)), Z1)

    def test_affine_round_trip(self):
        p = ec_mul(G1, 11)
        x, y = to_affine(p)
        assert ec_eq(from_affine(x, y), p)
        assert to_affine(Z1) is None

    def test_on_curve(self):
        assert is_on_g1(ec_mul(G1, 9))
        x, y = to_affine(G1)
        assert not is_on_g1(from_affine(x + 1, y))

    def test_on_curve_requires_field_coordinates(self):
        assert not is_on_g1((1, 2, 1))
        assert not is_on_g1((1, 2))
        assert not is_on_g1(None)
        assert is_on_g1(from_affine(1, 2))
        assert is_on_g1(Z1)

    def test_pairing_bilinear(self):
        lhs = ec_pairing(ec_mul(G2, 3), ec_mul(G1, 5))
        rhs = ec_pairing(G2, ec_mul(G1, 15))
        assert lhs == rhs


# =====================================================================
# Roots of unity
# =====================================================================

class TestRootsOfUnity:
    @pytest.mark.parametrize("n", [2, 4, 8, 16])
    def test_primitive(self, n):
        omega = get_root_of_unity(n)
        assert omega ** n == FR(1)
        assert omega ** (n // 2) != FR(1)

    def test_roots_list(self):
        roots = get_roots_of_unity(4)
        assert roots[0] == FR(1)
        assert len(set(int(r) for r in roots)) == 4

    @pytest.mark.parametrize("n", [0, 3, 6, 1 << 29])
    def test_invalid_size(self, n):
        with pytest.raises(ValueError):
            get_root_of_unity(n)


# =====================================================================
# Polynomial
# =====================================================================

class TestPolynomial:
    def test_trim_and_degree(self):
        p = Polynomial([1, 2, 0, 0])
        assert p.degree == 1
        assert Polynomial.zero().degree == 0
        assert Polynomial([]).is_zero()

    def test_evaluate(self):
        p = Polynomial([1, 2, 3])
        assert p.evaluate(FR(2)) == FR(17)

    def test_arithmetic(self):
        p = Polynomial([1, 2])
        q = Polynomial([3, 4])
        assert p + q == Polynomial([4, 6])
        assert p - q == Polynomial([-2, -2])
        assert p * q == Polynomial([3, 10, 8])
        assert p * 3 == Polynomial([3, 6])
        assert p - 1 == Polynomial([0, 2])

    def test_shift(self):
        p = Polynomial([5, 1, 2])
        factor = FR(7)
        shifted = p.shift(factor)
        assert shifted.evaluate(FR(3)) == p.evaluate(factor * FR(3))

    def test_mul_by_vanishing(self):
        p = Polynomial([2, 3])
        assert p.mul_by_vanishing(4) == p * Polynomial.vanishing(4)

    def test_poly_div(self):
        q, r = poly_div(Polynomial([-1, 0, 1]), Polynomial([-1, 1]))
        assert q == Polynomial([1, 1])
        assert r.is_zero()

    def test_poly_div_remainder(self):
        q, r = poly_div(Polynomial([1, 0, 1]), Polynomial([-1, 1]))
        assert q == Polynomial([1, 1])
        assert r == Polynomial([2])

    def test_divide_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            poly_div(Polynomial([1]), Polynomial.zero())

    def test_divide_exact(self):
        zh = Polynomial.vanishing(4)
        p = Polynomial([1, 2, 3]) * zh
        assert p.divide_exact(zh) == Polynomial([1, 2, 3])

    def test_divide_exact_violation(self):
        with pytest.raises(ConstraintViolation) as exc:
            Polynomial([1, 0, 1]).divide_exact(Polynomial([-1, 1]), context="gate")
        assert exc.value.context == "gate"
        assert isinstance(exc.value, ValueError)


class TestFFT:
    def test_fft_matches_evaluation(self):
        omega = get_root_of_unity(4)
        coeffs = [FR(1), FR(2), FR(3), FR(4)]
        p = Polynomial(coeffs)
        assert fft(coeffs, omega) == [p.evaluate(omega ** i) for i in range(4)]

    def test_ifft_inverts_fft(self):
        omega = get_root_of_unity(8)
        coeffs = [FR(i * i + 1) for i in range(8)]
        assert ifft(fft(coeffs, omega), omega) == coeffs


# =====================================================================
# Evaluation domain
# =====================================================================

class TestDomain:
    @pytest.mark.parametrize("n, expected", [(1, 1), (2, 2), (3, 4), (5, 8), (8, 8), (9, 16)])
    def test_next_power_of_2(self, n, expected):
        assert next_power_of_2(n) == expected

    def test_interpolate_evaluate(self):
        domain = EvaluationDomain(4)
        values = [FR(3), FR(1), FR(4), FR(1)]
        poly = domain.interpolate(values)
        assert domain.evaluate(poly) == values

    def test_vanishing_is_zero_on_domain(self):
        domain = EvaluationDomain(8)
        zh = domain.vanishing_polynomial()
        assert all(zh.evaluate(w) == 0 for w in domain)
        assert domain.evaluate_vanishing(FR(2)) == FR(2) ** 8 - 1

    def test_lagrange_first_closed_form(self):
        domain = EvaluationDomain(8)
        l1 = domain.lagrange_first()
        zeta = FR(123456789)
        assert domain.evaluate_lagrange_first(zeta) == l1.evaluate(zeta)
        assert domain.evaluate_lagrange_first(FR(1)) == FR(1)
        assert domain.evaluate_lagrange_first(domain[3]) == FR(0)

    def test_public_input_closed_form(self):
        domain = EvaluationDomain(4)
        pi = [FR(0), FR(-11), FR(0), FR(5)]
        zeta = FR(987654321)
        assert domain.evaluate_public_input(pi, zeta) == domain.interpolate(pi).evaluate(zeta)

    def test_rejects_non_power_of_two(self):
        with pytest.raises(ValueError):
            EvaluationDomain(6)


# =====================================================================
# Configuration
# =====================================================================

class TestConfig:
    def test_defaults(self):
        config = load_config({})
        assert config.hash_name == "sha256"
        assert config.transcript_label == b"plonk-kzg"
        assert config.srs_degree_margin == 5
        assert config.hash_function() is hashlib.sha256

    def test_environment_overrides(self):
        config = load_config({
            "PLONK_KZG_HASH": "sha512",
            "PLONK_KZG_LABEL": "demo",
            "PLONK_KZG_SRS_MARGIN": "8",
            "PLONK_KZG_LOG_LEVEL": "debug",
        })
        assert config.hash_function()().digest_size == 64
        assert config.transcript_label == b"demo"
        assert config.srs_degree_margin == 8
        assert config.log_level == "DEBUG"

    def test_unknown_hash(self):
        with pytest.raises(ValueError):
            load_config({"PLONK_KZG_HASH": "not-a-hash"})

    def test_short_digest_rejected(self):
        with pytest.raises(ValueError):
            PlonkConfig(hash_name="md5")

    def test_bad_margin(self):
        with pytest.raises(ValueError):
            load_config({"PLONK_KZG_SRS_MARGIN": "many"})
        with pytest.raises(ValueError):
            load_config({"PLONK_KZG_SRS_MARGIN": "1"})
