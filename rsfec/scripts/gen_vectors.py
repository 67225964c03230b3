#!/usr/bin/env python3
"""Generate payload/codeword reference vectors from the Python golden model.

Each vector lands in its own directory with ``input.hex``, ``output.hex`` and
``metadata.json`` so other implementations of the codec can be checked
against the exact same configuration.

    python -m rsfec.scripts.gen_vectors --nsym 10 --out-dir vectors
"""

from __future__ import annotations

import argparse
import json
import random
from pathlib import Path
from typing import List, Tuple

from rsfec.model.codec import RSCfg, RSCodec
from rsfec.model.galois_field import STANDARD_FIELDS
from rsfec.model.helpers import chunk_bytes, hex_string


def _write_hex_file(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for row in chunk_bytes(data, 16):
            f.write(hex_string(row) + "\n")


def _emit_vector(out_dir: Path, name: str, payload: bytes, codeword: bytes, meta: dict) -> None:
    vec_dir = out_dir / name
    vec_dir.mkdir(parents=True, exist_ok=True)
    _write_hex_file(vec_dir / "input.hex", payload)
    _write_hex_file(vec_dir / "output.hex", codeword)
    with (vec_dir / "metadata.json").open("w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)


def edge_payloads(length: int) -> List[Tuple[str, bytes]]:
    return [
        ("all_zeros", bytes([0] * length)),
        ("all_ones", bytes([0xFF] * length)),
        ("pattern_aa", bytes([0xAA] * length)),
        ("pattern_55", bytes([0x55] * length)),
        ("impulse_start", bytes([0x80] + [0] * (length - 1))),
        ("impulse_end", bytes([0] * (length - 1) + [0x01])),
        ("counter", bytes([i % 256 for i in range(length)])),
        ("reverse_counter", bytes([(255 - i) % 256 for i in range(length)])),
    ]


def generate_vectors(
    out_dir: Path,
    cfg: RSCfg,
    length: int = 32,
    num_random: int = 10,
    seed: int = 0x52535F564543,  # "RS_VEC"
) -> List[Tuple[str, bytes, bytes]]:
    if length <= 0:
        raise ValueError(f"payload length must be > 0, got {length}")
    codec = RSCodec(cfg)

    payloads = edge_payloads(length)
    rng = random.Random(seed)
    for i in range(num_random):
        payloads.append((f"random_{i:02d}", bytes(rng.randrange(256) for _ in range(length))))

    vectors = []
    for name, payload in payloads:
        codeword = codec.encode(payload)
        meta = {
            "name": name,
            "field": cfg.field_name,
            "primitive": f"{codec.field.primitive:#x}",
            "field_size": codec.field.size,
            "generator_base": codec.field.generator_base,
            "nsym": cfg.nsym,
            "payload_bytes": len(payload),
            "codeword_bytes": len(codeword),
        }
        _emit_vector(out_dir, name, payload, codeword, meta)
        vectors.append((name, payload, codeword))
    return vectors


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Generate Reed-Solomon reference vectors.")
    p.add_argument("--out-dir", default="vectors", help="Output directory (default: vectors).")
    p.add_argument("--field", default=RSCfg.field_name, choices=sorted(STANDARD_FIELDS))
    p.add_argument("--nsym", type=int, default=RSCfg.nsym)
    p.add_argument("--length", type=int, default=32, help="Payload bytes per vector (default: 32).")
    p.add_argument("--num-random", type=int, default=10)
    p.add_argument("--seed", type=lambda s: int(s, 0), default=0x52535F564543)
    args = p.parse_args(argv)

    cfg = RSCfg(field_name=args.field, nsym=args.nsym,
                restrict_to_qr=args.field == RSCfg.field_name)
    out_dir = Path(args.out_dir)
    try:
        vectors = generate_vectors(out_dir, cfg, args.length, args.num_random, args.seed)
    except ValueError as exc:
        raise SystemExit(f"Error: {exc}")

    print("RS Test Vector Generator")
    print("=" * 50)
    print(f"Generated {len(vectors)} test vectors")
    print(f"Written to: {out_dir}")
    print(f"  Field:        {cfg.field_name}")
    print(f"  Input size:   {args.length} bytes")
    print(f"  Output size:  {args.length + cfg.nsym} bytes")
    print(f"  Parity bytes: {cfg.nsym} bytes")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
