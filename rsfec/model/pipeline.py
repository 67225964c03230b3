#!/usr/bin/env python3

# Golden model pipeline runner:
# input -> RS encoder -> symbol corruption (optional) -> RS decoder -> output

# examples:
#   python -m rsfec.model.pipeline --text "HELLO WORLD"
#   python -m rsfec.model.pipeline --hex "404142" --nsym 2 --errors 1
#   python -m rsfec.model.pipeline --text "HELLO WORLD" --error-sweep 0:8 --trials 200


# Notes:
# - the codeword is [input] || [nsym parity bytes]
# - up to nsym // 2 corrupted symbols are corrected


import argparse
import csv
import sys
from typing import List, Optional, Sequence

from rsfec.model.codec import RSCfg, RSCodec
from rsfec.model.decoder import ReedSolomonError
from rsfec.model.galois_field import STANDARD_FIELDS
from rsfec.model.helpers import hex_dump, inject_symbol_errors, symbol_error_rate


def _read_input(args: argparse.Namespace) -> bytes:
    if args.text is not None:
        return args.text.encode("utf-8")
    if args.hex is not None:
        s = args.hex.replace(" ", "").replace("\n", "")
        try:
            return bytes.fromhex(s)
        except ValueError:
            print("Error: --hex contains non-hex characters.", file=sys.stderr)
            sys.exit(2)
    if args.infile is not None:
        with open(args.infile, "rb") as f:
            return f.read()
    # Fallback: read from stdin as text
    data = sys.stdin.read()
    if not data:
        print("No input provided. Use --text/--hex/--infile or pipe data via stdin.", file=sys.stderr)
        sys.exit(2)
    return data.encode("utf-8")


def _parse_value_list(spec: str, label: str) -> List[int]:
    """Parse comma/range based CLI specs (e.g., '0:10:2' or '0,5,10'), stop included."""
    if not spec:
        return []
    spec = spec.strip()
    values: List[int] = []
    if ":" in spec:
        parts = [p.strip() for p in spec.split(":")]
        if len(parts) not in (2, 3):
            raise ValueError(f"{label}: expected start:stop[:step]")
        start = int(parts[0])
        stop = int(parts[1])
        step = int(parts[2]) if len(parts) == 3 else 1
        if step <= 0:
            raise ValueError(f"{label}: step must be > 0 (got {step})")
        values = list(range(start, stop + 1, step))
    else:
        for token in spec.split(","):
            token = token.strip()
            if token:
                values.append(int(token))

    if not values:
        raise ValueError(f"{label}: no values parsed from '{spec}'")
    if any(v < 0 for v in values):
        raise ValueError(f"{label}: error counts must be >= 0")
    return values


def _print_stage(label: str, data: bytes) -> None:
    print(f"{label} (size = {len(data)}) =")
    print(hex_dump(data))
    print()


def _run_error_sweep(
    codec: RSCodec,
    payload: bytes,
    error_counts: Sequence[int],
    trials: int,
    base_seed: int,
) -> List[dict]:
    """Decode `trials` randomly corrupted codewords for every error count."""
    codeword = codec.encode(payload)
    results: List[dict] = []
    for idx, count in enumerate(error_counts):
        if count > len(codeword):
            print(f"Skipping {count} errors: codeword is only {len(codeword)} symbols", file=sys.stderr)
            continue
        corrected = 0
        miscorrected = 0
        failed = 0
        residual = 0.0
        for trial in range(trials):
            seed = base_seed + idx * trials + trial
            corrupted, _ = inject_symbol_errors(codeword, count, seed=seed,
                                                  max_value=codec.field.size - 1)
            try:
                decoded, _ = codec.decode(corrupted)
            except ReedSolomonError:
                failed += 1
                residual += symbol_error_rate(payload, corrupted[:len(payload)])
                continue
            if decoded == payload:
                corrected += 1
            else:
                miscorrected += 1
                residual += symbol_error_rate(payload, decoded)

        results.append(
            {
                "errors": count,
                "trials": trials,
                "corrected": corrected,
                "miscorrected": miscorrected,
                "failed": failed,
                "success_rate": corrected / trials if trials else 0.0,
                "residual_ser": residual / trials if trials else 0.0,
                "within_bound": count <= codec.max_correctable,
            }
        )
    return results


def _print_sweep_summary(results: Sequence[dict], codec: RSCodec) -> None:
    if not results:
        return
    print(f"\nError sweep summary (nsym = {codec.nsym}, corrects up to {codec.max_correctable}):")
    print("  errors\tsuccess\tcorrected\tmiscorrected\tfailed\tresidual SER")
    for row in results:
        marker = "" if row["within_bound"] else "  (beyond bound)"
        print(
            f"  {row['errors']:6d}\t{row['success_rate']:7.3f}\t{row['corrected']:9d}\t"
            f"{row['miscorrected']:12d}\t{row['failed']:6d}\t{row['residual_ser']:12.4f}{marker}"
        )


def _save_sweep_results(results: Sequence[dict], codec: RSCodec, prefix: str) -> None:
    if not results:
        return

    csv_path = f"{prefix}_sweep.csv"
    fieldnames = [
        "errors",
        "trials",
        "corrected",
        "miscorrected",
        "failed",
        "success_rate",
        "residual_ser",
        "within_bound",
    ]
    with open(csv_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in results:
            writer.writerow({key: row.get(key, "") for key in fieldnames})
    print(f"\nSaved error sweep data  -> {csv_path}")

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as e:
        print(f"\nWarning: sweep plot unavailable - {e}", file=sys.stderr)
        print("Install matplotlib to enable sweep plots.", file=sys.stderr)
        return

    errors = [r["errors"] for r in results]
    success = [r["success_rate"] for r in results]
    failed = [r["failed"] / r["trials"] if r["trials"] else 0.0 for r in results]
    miscorrected = [r["miscorrected"] / r["trials"] if r["trials"] else 0.0 for r in results]

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(errors, success, marker="o", linewidth=1.5, label="Corrected")
    ax.plot(errors, failed, marker="s", linestyle="--", label="Detected, not corrected")
    ax.plot(errors, miscorrected, marker="x", linestyle=":", label="Miscorrected")
    ax.axvline(codec.max_correctable + 0.5, color="gray", alpha=0.5, label="nsym // 2")
    ax.set_xlabel("Corrupted symbols per codeword")
    ax.set_ylabel("Fraction of trials")
    ax.set_ylim(-0.05, 1.05)
    ax.grid(True, alpha=0.3)
    ax.legend()
    ax.set_title(f"RS decode outcome vs. symbol errors ({codec.cfg.field_name}, nsym={codec.nsym})")
    fig.tight_layout()

    png_path = f"{prefix}_sweep.png"
    fig.savefig(png_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Saved error sweep plot -> {png_path}")


def main(argv: Optional[list] = None) -> int:
    p = argparse.ArgumentParser(description="Run the Reed-Solomon encode/corrupt/decode golden pipeline.")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--text", help="UTF-8 text input.")
    src.add_argument("--hex", help="Hex string input (spaces allowed).")
    src.add_argument("--infile", help="Binary input file.")
    p.add_argument("--field", default=RSCfg.field_name, choices=sorted(STANDARD_FIELDS),
                   help=f"Galois field (default: {RSCfg.field_name}).")
    p.add_argument("--nsym", type=int, default=RSCfg.nsym,
                   help=f"Number of parity symbols (default: {RSCfg.nsym}).")
    p.add_argument("--no-restrict", action="store_true",
                   help="Allow fields other than the QR code field.")
    p.add_argument("--out", help="Write the encoded codeword (binary) to this file.")

    noise_group = p.add_argument_group("Symbol Corruption")
    noise_group.add_argument("--errors", type=int, default=0,
                             help="Corrupt this many random symbols before decoding (default: 0).")
    noise_group.add_argument("--seed", type=int, default=0,
                             help="Seed for the corruption RNG (default: 0).")

    sweep_group = p.add_argument_group("Error Sweeps")
    sweep_group.add_argument("--error-sweep", type=str,
                             help="Evaluate multiple error counts (format: 'start:stop[:step]' or comma list).")
    sweep_group.add_argument("--trials", type=int, default=100,
                             help="Random trials per error count (default: 100).")
    sweep_group.add_argument("--sweep-save", metavar="PREFIX", default="rs",
                             help="Prefix for sweep CSV/PNG outputs (default: 'rs').")
    sweep_group.add_argument("--sweep-only", action="store_true",
                             help="Skip the single encode/decode run and only run the sweep.")

    args = p.parse_args(argv)

    data = _read_input(args)

    try:
        codec = RSCodec(RSCfg(field_name=args.field, nsym=args.nsym, restrict_to_qr=not args.no_restrict))
        codeword = codec.encode(data)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.out:
        with open(args.out, "wb") as f:
            f.write(codeword)

    status = 0
    if not args.sweep_only:
        _print_stage("input", data)
        _print_stage(f"RS output (nsym = {codec.nsym})", codeword)

        try:
            corrupted, positions = inject_symbol_errors(codeword, args.errors, seed=args.seed,
                                                         max_value=codec.field.size - 1)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 2
        if positions:
            _print_stage(f"corrupted ({len(positions)} symbols at {positions})", corrupted)

        print("=== Reverse Path (Decoding) ===")
        print()
        try:
            corrected, repaired = codec.decoder.decode_with_positions(corrupted, codec.nsym)
        except ReedSolomonError as exc:
            print(f"\nWarning: RS decode failed - {exc}", file=sys.stderr)
            print(f"{len(positions)} corrupted symbols, the code corrects at most {codec.max_correctable}.",
                  file=sys.stderr)
            status = 1
        else:
            restored = corrected[:len(data)]
            print(f"repaired positions = {repaired}")
            _print_stage("reverse RS output", restored)
            restored_text = restored.decode("utf-8", errors="replace").replace(chr(0), "\\x00")
            print(f"restored ascii = '{restored_text}'")
            if restored != data:
                print("\nWarning: decoder returned a different payload (miscorrection).", file=sys.stderr)
                status = 1

    if args.error_sweep:
        try:
            counts = _parse_value_list(args.error_sweep, "--error-sweep")
        except ValueError as exc:
            print(f"\nError parsing --error-sweep: {exc}", file=sys.stderr)
            return 2
        print(f"\n=== Running error sweep ({len(counts)} points, {args.trials} trials each) ===")
        results = _run_error_sweep(codec, data, counts, args.trials, args.seed)
        _print_sweep_summary(results, codec)
        _save_sweep_results(results, codec, args.sweep_save)

    return status


if __name__ == "__main__":
    raise SystemExit(main())
