# rsfec/model/decoder.py
# Reed-Solomon decoder (errors only, no erasures)
# syndromes -> extended Euclid (sigma, omega) -> Chien search -> Forney -> correct
# Corrects up to nsym // 2 symbol errors. Correction is all-or-nothing: either
# every located error is fixed or ReedSolomonError is raised and nothing is returned.

from typing import List, Optional, Tuple

from rsfec.model.encoder import MAX_BYTE_FIELD_SIZE
from rsfec.model.field_poly import FieldPolynomial
from rsfec.model.galois_field import GaloisField, QR_CODE_FIELD_256, add_or_subtract


class ReedSolomonError(Exception):
    """The received word has more errors than the code can correct."""


class ReedSolomonDecoder:
    def __init__(self, field: GaloisField = QR_CODE_FIELD_256,
                 restrict_to: Optional[GaloisField] = None):
        if restrict_to is not None and field is not restrict_to:
            raise ValueError(f"only {restrict_to!r} is supported by this decoder, got {field!r}")
        if field.size > MAX_BYTE_FIELD_SIZE:
            raise ValueError(f"{field!r} symbols do not fit in one byte")
        self.field = field

    def _check_args(self, received: bytes, nsym: int):
        if nsym <= 0:
            raise ValueError("No error correction bytes")
        if len(received) < nsym:
            raise ValueError(f"received word ({len(received)} symbols) shorter than nsym={nsym}")
        size = self.field.size
        if len(received) > size - 1:
            raise ValueError(f"received word of {len(received)} symbols exceeds the {size - 1} symbol limit of {self.field!r}")
        for b in received:
            if b >= size:
                raise ValueError(f"symbol {b} outside {self.field!r}")

    def syndromes(self, received: bytes, nsym: int) -> List[int]:
        # S_i = r(alpha^(i+B)), i = 0..nsym-1
        self._check_args(received, nsym)
        field = self.field
        poly = FieldPolynomial(field, received)
        return [
            poly.evaluate_at(field.exp((i + field.generator_base) % (field.size - 1)))
            for i in range(nsym)
        ]

    def check(self, received: bytes, nsym: int) -> bool:
        return not any(self.syndromes(received, nsym))

    def decode(self, received: bytes, nsym: int) -> bytes:
        corrected, _ = self.decode_with_positions(received, nsym)
        return corrected

    def decode_with_positions(self, received: bytes, nsym: int) -> Tuple[bytes, List[int]]:
        synd = self.syndromes(received, nsym)
        if not any(synd):
            # already a codeword
            return bytes(received), []

        field = self.field
        # highest syndrome index is the leading coefficient
        syndrome = FieldPolynomial(field, synd[::-1])
        sigma, omega = self._run_euclidean_algorithm(field.build_monomial(nsym, 1), syndrome, nsym)
        error_locations = self._find_error_locations(sigma)
        error_magnitudes = self._find_error_magnitudes(omega, error_locations)

        # map every location before touching the buffer
        positions = []
        for loc in error_locations:
            position = len(received) - 1 - field.log(loc)
            if position < 0:
                raise ReedSolomonError("Bad error location")
            positions.append(position)

        out = bytearray(received)
        for position, magnitude in zip(positions, error_magnitudes):
            out[position] = add_or_subtract(out[position], magnitude)

        if any(self.syndromes(out, nsym)):
            # sigma had the right number of roots but they do not explain the syndromes
            raise ReedSolomonError("Could not correct message")
        return bytes(out), sorted(positions)

    def _run_euclidean_algorithm(self, a: FieldPolynomial, b: FieldPolynomial,
                                 nsym: int) -> Tuple[FieldPolynomial, FieldPolynomial]:
        field = self.field
        # assume a's degree is >= b's
        if a.degree < b.degree:
            a, b = b, a

        r_last = a
        r = b
        t_last = field.zero
        t = field.one

        # run until r's degree is less than nsym / 2
        while r.degree >= nsym // 2:
            r_last_last = r_last
            t_last_last = t_last
            r_last = r
            t_last = t

            if r_last.is_zero:
                # Euclidean algorithm already terminated
                raise ReedSolomonError("r_{i-1} was zero")
            # divide r_last_last by r_last, quotient in q and remainder in r
            q, r = r_last_last.divide(r_last)
            t = q.multiply(t_last).add_or_subtract(t_last_last)

        sigma_tilde_at_zero = t.coefficient(0)
        if sigma_tilde_at_zero == 0:
            raise ReedSolomonError("sigmaTilde(0) was zero")

        inverse = field.inverse(sigma_tilde_at_zero)
        sigma = t.multiply_scalar(inverse)
        omega = r.multiply_scalar(inverse)
        return sigma, omega

    def _find_error_locations(self, error_locator: FieldPolynomial) -> List[int]:
        # Chien search: the roots of sigma are the inverses of the error locations
        num_errors = error_locator.degree
        if num_errors == 0:
            raise ReedSolomonError("Error locator has no roots")
        if num_errors == 1:
            return [error_locator.coefficient(1)]
        field = self.field
        result = []
        for i in range(1, field.size):
            if error_locator.evaluate_at(i) == 0:
                result.append(field.inverse(i))
                if len(result) == num_errors:
                    break
        if len(result) != num_errors:
            raise ReedSolomonError("Error locator degree does not match number of roots")
        return result

    def _find_error_magnitudes(self, error_evaluator: FieldPolynomial,
                               error_locations: List[int]) -> List[int]:
        # Forney's formula
        field = self.field
        result = []
        for i, xi in enumerate(error_locations):
            xi_inverse = field.inverse(xi)
            denominator = 1
            for j, xj in enumerate(error_locations):
                if i != j:
                    # 1 + X_j/X_i, written as flipping the low bit of the term
                    term = field.multiply(xj, xi_inverse)
                    term_plus_1 = term | 1 if (term & 1) == 0 else term & ~1
                    denominator = field.multiply(denominator, term_plus_1)
            magnitude = field.multiply(error_evaluator.evaluate_at(xi_inverse),
                                       field.inverse(denominator))
            if field.generator_base != 0:
                magnitude = field.multiply(magnitude, xi_inverse)
            result.append(magnitude)
        return result
