# rsfec/model/helpers.py
# common helper functions used by the pipeline, the vector script and the tests
# provides hex formatting, symbol error counting and random corruption

from typing import List, Optional, Tuple

import numpy as np


def hex_string(data: bytes) -> str:
    return " ".join(f"{b:02X}" for b in data)


def hex_dump(data: bytes, bytes_per_line: int = 16) -> str:
    # offset-prefixed rows, as printed by the pipeline stages
    rows = chunk_bytes(data, bytes_per_line)
    return "\n".join(f"{i * bytes_per_line:08X}: {hex_string(row)}" for i, row in enumerate(rows))


def chunk_bytes(data: bytes, chunk_size: int) -> List[bytes]:
    if chunk_size <= 0:
        raise ValueError(f"chunk size must be > 0, got {chunk_size}")
    return [data[i:i + chunk_size] for i in range(0, len(data), chunk_size)]


def symbol_errors(a: bytes, b: bytes) -> int:
    if len(a) != len(b):
        raise ValueError(f"Sequences must have equal length: {len(a)} != {len(b)}")
    return sum(1 for x, y in zip(a, b) if x != y)


def symbol_error_rate(original: bytes, received: bytes) -> float:
    if len(original) == 0:
        return 0.0
    return symbol_errors(original, received) / len(original)


def inject_symbol_errors(
    data: bytes,
    count: int,
    seed: Optional[int] = None,
    max_value: int = 255,
) -> Tuple[bytes, List[int]]:
    """Corrupt `count` distinct symbols of `data`.

    Args:
        data: Codeword to corrupt (left untouched).
        count: Number of symbols to change.
        seed: Optional RNG seed to make the corruption repeatable.
        max_value: Largest symbol value of the field (255 for GF(256)).

    Returns:
        (corrupted, positions) with positions sorted ascending.
    """
    if count < 0 or count > len(data):
        raise ValueError(f"cannot corrupt {count} symbols of a {len(data)} byte buffer")
    if max_value < 1:
        raise ValueError(f"max_value must be >= 1, got {max_value}")

    rng = np.random.default_rng(seed)
    positions = np.sort(rng.choice(len(data), size=count, replace=False))
    # nonzero error values so every chosen symbol really changes
    values = rng.integers(1, max_value + 1, size=count)

    out = bytearray(data)
    for pos, val in zip(positions, values):
        out[int(pos)] ^= int(val)
    return bytes(out), [int(p) for p in positions]
