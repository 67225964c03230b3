# rsfec/model/galois_field.py
# GF(2^m) arithmetic with log/antilog tables, 0 < m <= 16
# Generator element alpha = 2 for every field defined here
# Standard barcode fields are exposed as module level constants

from typing import Dict, List

from rsfec.model.field_poly import FieldPolynomial

MAX_FIELD_SIZE = 1 << 16


# //////////
# Addition and subtraction in a field of characteristic 2 are the same
# operation: a bitwise XOR of the two elements. It does not depend on the
# field size, so it lives outside the class and can be used before any table
# has been built.
def add_or_subtract(a: int, b: int) -> int:
    return a ^ b


# //////////
# One finite field GF(size), defined by a primitive polynomial whose bits are
# its coefficients (bit 0 is the constant term).
#
# The field precomputes two tables when it is created:
# - exp_table[i] = alpha^i
# - log_table[alpha^i] = i (log_table[0] is never read)
#
# Multiplication, inversion, exponentiation and logarithm are then plain table
# lookups. The tables are filled in the constructor and never written again, so
# one field object can be shared by any number of encoders/decoders and threads.
#
# generator_base is the exponent of the first consecutive root used by the
# codes built on this field: alpha^0 for QR code, alpha^1 for Data Matrix.
class GaloisField:
    def __init__(self, primitive: int, size: int, generator_base: int = 0):
        if size < 2 or size > MAX_FIELD_SIZE or size & (size - 1):
            raise ValueError(f"field size must be a power of two in [2, {MAX_FIELD_SIZE}], got {size}")
        if primitive <= 0:
            raise ValueError(f"primitive polynomial must be nonzero, got {primitive:#x}")
        if generator_base < 0:
            raise ValueError(f"generator base must be >= 0, got {generator_base}")
        self.primitive = primitive
        self.size = size
        self.generator_base = generator_base
        self.exp_table: List[int] = [0] * size
        self.log_table: List[int] = [0] * size
        self._build_tables()

        self._zero = FieldPolynomial(self, [0])
        self._one = FieldPolynomial(self, [1])

    # //////////
    # Walk the powers of alpha = 2: start at 1, shift left by one bit each
    # step, and whenever the value no longer fits in the field subtract (XOR)
    # the primitive polynomial and mask back to m bits.
    #
    # If the polynomial really is primitive, the first size-1 powers visit
    # every nonzero element exactly once. Anything else (a reducible
    # polynomial, a polynomial of the wrong degree) repeats a value early and
    # is rejected here instead of producing silently wrong arithmetic later.
    def _build_tables(self):
        x = 1
        for i in range(self.size):
            self.exp_table[i] = x
            x <<= 1  # x * alpha
            if x >= self.size:
                x ^= self.primitive
                x &= self.size - 1

        seen = [False] * self.size
        for i in range(self.size - 1):
            v = self.exp_table[i]
            if v == 0 or seen[v]:
                raise ValueError(
                    f"{self.primitive:#x} is not a primitive polynomial for GF({self.size})"
                )
            seen[v] = True
            self.log_table[v] = i
        # log_table[0] stays 0 but is never used

    @property
    def zero(self):
        return self._zero

    @property
    def one(self):
        return self._one

    def build_monomial(self, degree: int, coefficient: int):
        # coefficient * x^degree
        if degree < 0:
            raise ValueError(f"monomial degree must be >= 0, got {degree}")
        if coefficient == 0:
            return self._zero
        coefficients = [0] * (degree + 1)
        coefficients[0] = coefficient
        return FieldPolynomial(self, coefficients)

    def exp(self, a: int) -> int:
        if a < 0 or a >= self.size:
            raise ValueError(f"exponent {a} outside [0, {self.size})")
        return self.exp_table[a]

    def log(self, a: int) -> int:
        if a == 0:
            raise ValueError("log(0) is undefined in GF(2^m)")
        return self.log_table[a]

    def inverse(self, a: int) -> int:
        if a == 0:
            raise ZeroDivisionError("0 has no multiplicative inverse")
        return self.exp_table[self.size - self.log_table[a] - 1]

    # //////////
    # a * b = alpha^(log a + log b). The exponent sum is at most 2*(size-2);
    # exp_table only holds size entries, so instead of a second "mod (size-1)"
    # the sum is folded back as (s % size) + s // size. Powers of alpha repeat
    # with period size-1 and exp_table[size-1] == exp_table[0] == 1, so both
    # forms land on the same element.
    def multiply(self, a: int, b: int) -> int:
        if a < 0 or b < 0 or a >= self.size or b >= self.size:
            raise ValueError(f"operands ({a}, {b}) outside GF({self.size})")
        if a == 0 or b == 0:
            return 0
        log_sum = self.log_table[a] + self.log_table[b]
        return self.exp_table[(log_sum % self.size) + log_sum // self.size]

    def divide(self, a: int, b: int) -> int:
        if b == 0:
            raise ZeroDivisionError(f"GF({self.size}) div by 0")
        if a == 0:
            return 0
        return self.multiply(a, self.inverse(b))

    def __repr__(self):
        return f"GF(0x{self.primitive:x},{self.size})"


# standard fields
AZTEC_DATA_12 = GaloisField(0x1069, 4096)  # x^12 + x^6 + x^5 + x^3 + 1
AZTEC_DATA_10 = GaloisField(0x409, 1024)   # x^10 + x^3 + 1
AZTEC_DATA_6 = GaloisField(0x43, 64)       # x^6 + x + 1
AZTEC_PARAM = GaloisField(0x13, 16)        # x^4 + x + 1
QR_CODE_FIELD_256 = GaloisField(0x011D, 256)                         # x^8 + x^4 + x^3 + x^2 + 1
DATA_MATRIX_FIELD_256 = GaloisField(0x012D, 256, generator_base=1)  # x^8 + x^5 + x^3 + x^2 + 1
AZTEC_DATA_8 = DATA_MATRIX_FIELD_256
MAXICODE_FIELD_64 = AZTEC_DATA_6

STANDARD_FIELDS: Dict[str, GaloisField] = {
    "aztec_data_12": AZTEC_DATA_12,
    "aztec_data_10": AZTEC_DATA_10,
    "aztec_data_6": AZTEC_DATA_6,
    "aztec_param": AZTEC_PARAM,
    "qr_code_field_256": QR_CODE_FIELD_256,
    "data_matrix_field_256": DATA_MATRIX_FIELD_256,
    "aztec_data_8": AZTEC_DATA_8,
    "maxicode_field_64": MAXICODE_FIELD_64,
}


def get_field(name: str) -> GaloisField:
    key = name.strip().lower().replace("-", "_")
    try:
        return STANDARD_FIELDS[key]
    except KeyError:
        raise ValueError(
            f"unknown field '{name}' (choose from {', '.join(sorted(STANDARD_FIELDS))})"
        ) from None
