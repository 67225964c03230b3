import numpy as np
import pytest

from rsfec.model.decoder import ReedSolomonDecoder
from rsfec.model.encoder import ReedSolomonEncoder
from rsfec.model.galois_field import QR_CODE_FIELD_256


@pytest.fixture
def rng():
    return np.random.default_rng(0x5253)


@pytest.fixture
def qr_encoder():
    return ReedSolomonEncoder(QR_CODE_FIELD_256)


@pytest.fixture
def qr_decoder():
    return ReedSolomonDecoder(QR_CODE_FIELD_256)


@pytest.fixture
def make_payload(rng):
    def _make(length):
        return bytes(rng.integers(0, 256, size=length).tolist())
    return _make
