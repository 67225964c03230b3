from dataclasses import dataclass
from typing import Tuple

from rsfec.model.decoder import ReedSolomonDecoder, ReedSolomonError
from rsfec.model.encoder import ReedSolomonEncoder
from rsfec.model.galois_field import GaloisField, QR_CODE_FIELD_256, get_field

__all__ = ["RSCfg", "RSCodec", "ReedSolomonError", "default_rs_cfg", "encode", "decode"]


# //////////
# Configuration for one Reed-Solomon code.
#
# field_name picks one of the standard fields by name (see
# galois_field.STANDARD_FIELDS). nsym is the number of parity symbols appended
# to every payload; the code corrects up to nsym // 2 corrupted symbols.
#
# restrict_to_qr keeps the encoder locked to the QR code field, the only one
# the byte-oriented barcode use case needs. Turn it off to encode with another
# standard field that still has byte sized symbols (e.g. Data Matrix).

@dataclass
class RSCfg:
    field_name: str = "qr_code_field_256"
    # parity symbols per codeword
    nsym: int = 10
    restrict_to_qr: bool = True


default_rs_cfg = RSCfg()


class RSCodec:
    def __init__(self, cfg: RSCfg = default_rs_cfg):
        if cfg.nsym <= 0:
            raise ValueError(f"nsym must be > 0, got {cfg.nsym}")
        self.cfg = cfg
        self.field: GaloisField = get_field(cfg.field_name)
        restrict = QR_CODE_FIELD_256 if cfg.restrict_to_qr else None
        self.encoder = ReedSolomonEncoder(self.field, restrict_to=restrict)
        self.decoder = ReedSolomonDecoder(self.field, restrict_to=restrict)

    @property
    def nsym(self) -> int:
        return self.cfg.nsym

    @property
    def max_correctable(self) -> int:
        return self.cfg.nsym // 2

    def encode(self, data: bytes) -> bytes:
        return self.encoder.encode(data, self.cfg.nsym)

    def decode(self, codeword: bytes) -> Tuple[bytes, bytes]:
        # returns (payload, corrected codeword), raises ReedSolomonError
        corrected = self.decoder.decode(codeword, self.cfg.nsym)
        return corrected[:-self.cfg.nsym], corrected


# shared QR field pair behind the module level functions
_ENCODER = ReedSolomonEncoder(QR_CODE_FIELD_256)
_DECODER = ReedSolomonDecoder(QR_CODE_FIELD_256)


def encode(payload: bytes, nsym: int) -> bytes:
    return _ENCODER.encode(payload, nsym)


def decode(codeword: bytes, nsym: int) -> bytes:
    return _DECODER.decode(codeword, nsym)
