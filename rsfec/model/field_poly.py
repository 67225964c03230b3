# rsfec/model/field_poly.py
# Immutable polynomial with coefficients in a GaloisField
# Coefficients are stored highest degree first: [3, 2, 1] is 3x^2 + 2x + 1
# Every operation returns a new polynomial, operands are never modified

from typing import TYPE_CHECKING, Iterable, Tuple, Union

if TYPE_CHECKING:
    from rsfec.model.galois_field import GaloisField


class FieldPolynomial:
    __slots__ = ("field", "coefficients")

    def __init__(self, field: "GaloisField", coefficients: Iterable[int]):
        coefficients = tuple(coefficients)
        if not coefficients:
            raise ValueError("polynomial needs at least one coefficient")
        self.field = field
        if len(coefficients) > 1 and coefficients[0] == 0:
            # leading term must be nonzero for anything except the constant "0"
            first_non_zero = 1
            while first_non_zero < len(coefficients) and coefficients[first_non_zero] == 0:
                first_non_zero += 1
            if first_non_zero == len(coefficients):
                coefficients = (0,)
            else:
                coefficients = coefficients[first_non_zero:]
        self.coefficients: Tuple[int, ...] = coefficients

    @property
    def degree(self) -> int:
        return len(self.coefficients) - 1

    @property
    def is_zero(self) -> bool:
        return self.coefficients[0] == 0

    @property
    def leading_coefficient(self) -> int:
        return self.coefficients[0]

    def coefficient(self, degree: int) -> int:
        # coefficient of the x^degree term
        return self.coefficients[len(self.coefficients) - 1 - degree]

    def _check_field(self, other: "FieldPolynomial"):
        if self.field is not other.field:
            raise ValueError("polynomials do not belong to the same field")

    def evaluate_at(self, a: int) -> int:
        if a == 0:
            # just the x^0 coefficient
            return self.coefficient(0)
        if a == 1:
            # sum of the coefficients
            result = 0
            for c in self.coefficients:
                result ^= c
            return result
        # Horner
        mul = self.field.multiply
        result = self.coefficients[0]
        for c in self.coefficients[1:]:
            result = mul(a, result) ^ c
        return result

    def add_or_subtract(self, other: "FieldPolynomial") -> "FieldPolynomial":
        self._check_field(other)
        if self.is_zero:
            return other
        if other.is_zero:
            return self

        smaller = self.coefficients
        larger = other.coefficients
        if len(smaller) > len(larger):
            smaller, larger = larger, smaller
        length_diff = len(larger) - len(smaller)
        # high-order terms only found in the larger polynomial are copied as is
        sum_diff = list(larger[:length_diff])
        for i in range(length_diff, len(larger)):
            sum_diff.append(smaller[i - length_diff] ^ larger[i])
        return FieldPolynomial(self.field, sum_diff)

    def multiply(self, other: "FieldPolynomial") -> "FieldPolynomial":
        self._check_field(other)
        if self.is_zero or other.is_zero:
            return self.field.zero
        mul = self.field.multiply
        a = self.coefficients
        b = other.coefficients
        product = [0] * (len(a) + len(b) - 1)
        for i, ai in enumerate(a):
            if ai == 0:
                continue
            for j, bj in enumerate(b):
                product[i + j] ^= mul(ai, bj)
        return FieldPolynomial(self.field, product)

    def multiply_scalar(self, scalar: int) -> "FieldPolynomial":
        if scalar == 0:
            return self.field.zero
        if scalar == 1:
            return self
        mul = self.field.multiply
        return FieldPolynomial(self.field, [mul(c, scalar) for c in self.coefficients])

    def multiply_by_monomial(self, degree: int, coefficient: int) -> "FieldPolynomial":
        # self * coefficient * x^degree
        if degree < 0:
            raise ValueError(f"monomial degree must be >= 0, got {degree}")
        if coefficient == 0:
            return self.field.zero
        mul = self.field.multiply
        product = [mul(c, coefficient) for c in self.coefficients] + [0] * degree
        return FieldPolynomial(self.field, product)

    def divide(self, other: "FieldPolynomial") -> Tuple["FieldPolynomial", "FieldPolynomial"]:
        """Long division, returns (quotient, remainder) with deg(remainder) < deg(other)."""
        self._check_field(other)
        if other.is_zero:
            raise ZeroDivisionError("polynomial division by zero")

        field = self.field
        quotient = field.zero
        remainder = self

        inverse_leading = field.inverse(other.leading_coefficient)
        while remainder.degree >= other.degree and not remainder.is_zero:
            degree_diff = remainder.degree - other.degree
            scale = field.multiply(remainder.leading_coefficient, inverse_leading)
            quotient = quotient.add_or_subtract(field.build_monomial(degree_diff, scale))
            remainder = remainder.add_or_subtract(other.multiply_by_monomial(degree_diff, scale))

        return quotient, remainder

    # operator sugar
    def __add__(self, other: "FieldPolynomial") -> "FieldPolynomial":
        return self.add_or_subtract(other)

    __sub__ = __add__

    def __mul__(self, other: Union["FieldPolynomial", int]) -> "FieldPolynomial":
        if isinstance(other, int):
            return self.multiply_scalar(other)
        return self.multiply(other)

    __rmul__ = __mul__

    def __divmod__(self, other: "FieldPolynomial") -> Tuple["FieldPolynomial", "FieldPolynomial"]:
        return self.divide(other)

    def __eq__(self, other):
        if not isinstance(other, FieldPolynomial):
            return NotImplemented
        return self.field is other.field and self.coefficients == other.coefficients

    def __hash__(self):
        return hash((id(self.field), self.coefficients))

    def __len__(self):
        return len(self.coefficients)

    def __repr__(self):
        return f"FieldPolynomial({self.field!r}, {list(self.coefficients)})"

    def __str__(self):
        # e.g. "x^2 + a^25x + a^1" style, coefficients shown as powers of alpha
        terms = []
        for degree in range(self.degree, -1, -1):
            c = self.coefficient(degree)
            if c == 0:
                continue
            term = ""
            if degree == 0 or c != 1:
                power = self.field.log(c)
                if power == 0:
                    term = "1"
                elif power == 1:
                    term = "a"
                else:
                    term = f"a^{power}"
            if degree == 1:
                term += "x"
            elif degree > 1:
                term += f"x^{degree}"
            terms.append(term)
        return " + ".join(terms) if terms else "0"
