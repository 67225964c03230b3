# rsfec/model/encoder.py
# Systematic Reed-Solomon encoder
# Codeword: [data] || [parity], parity = (data(x) * x^nsym) mod g(x)
# Generator: g(x) = prod_{k=0}^{nsym-1} (x - alpha^(k+B)), B = field.generator_base

import threading
from typing import List, Optional

from rsfec.model.field_poly import FieldPolynomial
from rsfec.model.galois_field import GaloisField, QR_CODE_FIELD_256

# symbols are packed one per byte
MAX_BYTE_FIELD_SIZE = 256


class ReedSolomonEncoder:
    def __init__(self, field: GaloisField = QR_CODE_FIELD_256,
                 restrict_to: Optional[GaloisField] = QR_CODE_FIELD_256):
        if restrict_to is not None and field is not restrict_to:
            raise ValueError(f"only {restrict_to!r} is supported by this encoder, got {field!r}")
        if field.size > MAX_BYTE_FIELD_SIZE:
            raise ValueError(f"{field!r} symbols do not fit in one byte")
        self.field = field
        # cached_generators[d] is the generator for nsym = d
        self._cached_generators: List[FieldPolynomial] = [field.one]
        self._lock = threading.Lock()

    def generator(self, nsym: int) -> FieldPolynomial:
        if nsym < 0:
            raise ValueError(f"generator degree must be >= 0, got {nsym}")
        cache = self._cached_generators
        if nsym < len(cache):
            return cache[nsym]
        with self._lock:
            # another thread may have grown the cache while we waited
            field = self.field
            last = cache[-1]
            for d in range(len(cache), nsym + 1):
                root = field.exp((d - 1 + field.generator_base) % (field.size - 1))
                # (x - root) == [1, root] since subtraction is XOR
                last = last.multiply(FieldPolynomial(field, [1, root]))
                cache.append(last)
            return cache[nsym]

    def parity(self, data: bytes, nsym: int) -> bytes:
        if nsym <= 0:
            raise ValueError("No error correction bytes")
        if len(data) == 0:
            raise ValueError("No data bytes provided")
        size = self.field.size
        if len(data) + nsym > size - 1:
            # positions repeat every size-1 symbols, so a longer word cannot be decoded
            raise ValueError(f"codeword of {len(data) + nsym} symbols exceeds the {size - 1} symbol limit of {self.field!r}")
        for b in data:
            if b >= size:
                raise ValueError(f"symbol {b} outside {self.field!r}")

        info = FieldPolynomial(self.field, data).multiply_by_monomial(nsym, 1)
        _, remainder = info.divide(self.generator(nsym))
        coefficients = remainder.coefficients
        # remainder may have leading zeros stripped, pad back to nsym symbols
        return bytes(nsym - len(coefficients)) + bytes(coefficients)

    def encode(self, data: bytes, nsym: int) -> bytes:
        return bytes(data) + self.parity(data, nsym)
