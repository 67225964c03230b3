import pytest

from rsfec.model.field_poly import FieldPolynomial
from rsfec.model.galois_field import AZTEC_PARAM, QR_CODE_FIELD_256, GaloisField

GF = QR_CODE_FIELD_256


def poly(*coefficients):
    return FieldPolynomial(GF, coefficients)


def random_poly(rng, degree):
    coefficients = rng.integers(0, 256, size=degree + 1).tolist()
    coefficients[0] = int(rng.integers(1, 256))
    return FieldPolynomial(GF, coefficients)


def test_leading_zeros_are_stripped():
    p = poly(0, 0, 5, 0, 1)
    assert p.coefficients == (5, 0, 1)
    assert p.degree == 2
    assert p.leading_coefficient == 5
    assert p.coefficient(0) == 1
    assert p.coefficient(1) == 0


def test_all_zero_collapses_to_zero():
    p = poly(0, 0, 0)
    assert p.is_zero
    assert p.coefficients == (0,)
    assert p.degree == 0
    assert p == GF.zero


def test_empty_coefficients_rejected():
    with pytest.raises(ValueError):
        FieldPolynomial(GF, [])


def test_evaluate_at_special_points():
    p = poly(3, 7, 9)
    assert p.evaluate_at(0) == 9
    assert p.evaluate_at(1) == 3 ^ 7 ^ 9


def test_evaluate_at_horner():
    p = poly(3, 7, 9)
    x = 0x53
    expected = GF.multiply(3, GF.multiply(x, x)) ^ GF.multiply(7, x) ^ 9
    assert p.evaluate_at(x) == expected


def test_add_or_subtract_right_aligns():
    a = poly(1, 2, 3, 4)
    b = poly(5, 6)
    assert a.add_or_subtract(b).coefficients == (1, 2, 3 ^ 5, 4 ^ 6)
    assert b + a == a + b
    # x - x == 0 in characteristic 2
    assert (a - a).is_zero


def test_add_zero_returns_operand():
    a = poly(9, 8)
    assert a.add_or_subtract(GF.zero) is a
    assert GF.zero.add_or_subtract(a) is a


def test_multiply():
    # (x + 1)(x + 1) = x^2 + 1
    assert (poly(1, 1) * poly(1, 1)).coefficients == (1, 0, 1)
    assert (poly(1, 2) * GF.zero).is_zero
    a = poly(2, 3)
    b = poly(4, 5, 6)
    product = a.multiply(b)
    assert product.degree == a.degree + b.degree
    assert product.evaluate_at(0x1F) == GF.multiply(a.evaluate_at(0x1F), b.evaluate_at(0x1F))


def test_multiply_scalar():
    a = poly(2, 3)
    assert a.multiply_scalar(1) is a
    assert a.multiply_scalar(0).is_zero
    assert (a * 2).coefficients == (4, 6)
    assert (2 * a) == a * 2


def test_multiply_by_monomial():
    a = poly(2, 3)
    assert a.multiply_by_monomial(2, 1).coefficients == (2, 3, 0, 0)
    assert a.multiply_by_monomial(1, 2).coefficients == (4, 6, 0)
    assert a.multiply_by_monomial(3, 0).is_zero
    with pytest.raises(ValueError):
        a.multiply_by_monomial(-1, 1)


@pytest.mark.parametrize("deg_a,deg_b", [(0, 0), (5, 0), (5, 2), (12, 7), (3, 6), (40, 10)])
def test_division_law(rng, deg_a, deg_b):
    for _ in range(20):
        a = random_poly(rng, deg_a)
        b = random_poly(rng, deg_b)
        q, r = a.divide(b)
        assert b * q + r == a
        assert r.is_zero or r.degree < b.degree


def test_divmod_sugar():
    a = poly(1, 0, 0, 1)
    b = poly(1, 1)
    assert divmod(a, b) == a.divide(b)


def test_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        poly(1, 2).divide(GF.zero)


def test_field_mismatch_rejected():
    twin = GaloisField(0x11D, 256)
    a = poly(1, 2)
    b = FieldPolynomial(twin, [1, 2])
    assert a != b
    for op in (a.add_or_subtract, a.multiply, a.divide):
        with pytest.raises(ValueError, match="same field"):
            op(b)
    with pytest.raises(ValueError):
        FieldPolynomial(AZTEC_PARAM, [1]) * a


def test_str_rendering():
    assert str(poly(1, 0, 1)) == "x^2 + 1"
    assert str(poly(2, 3)) == "ax + a^25"
    assert str(GF.zero) == "0"
    assert "FieldPolynomial" in repr(poly(1))
