#!/usr/bin/env python3
"""Int2048 multiplication benchmark: schoolbook vs NTT vs FFT.

Used to validate DEFAULT_MUL_THRESHOLD: for each operand size it times the
three convolution paths on the same random operands and checks that they
agree bit-for-bit.

  python3 tools/bench_mul.py
  python3 tools/bench_mul.py --digits 200,500,2000,20000 --runs 5 --write-docs

Notes:
  - schoolbook is skipped above --max-schoolbook-digits (it is O(n*m) in pure Python).
  - "n*m" is in limbs (4 decimal digits per limb), the unit of the threshold.
"""

from __future__ import annotations

import argparse
import os
import random
import sys
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from i2k_config import DEFAULT_MUL_THRESHOLD  # noqa: E402
from i2k_mul import schoolbook_multiply, transform_multiply  # noqa: E402
from int2048 import Int2048  # noqa: E402


def _rand_digits(rng: random.Random, digits: int) -> str:
    if digits <= 0:
        raise ValueError("digits must be > 0")
    first = str(rng.randint(1, 9))
    return first + "".join(str(rng.randint(0, 9)) for _ in range(digits - 1))


def _run_min_avg(fn: Callable[[], Any], runs: int) -> tuple[float, float, Any]:
    times: list[float] = []
    out: Any = None
    for _ in range(runs):
        t0 = time.perf_counter()
        out = fn()
        times.append(time.perf_counter() - t0)
    return (min(times), sum(times) / len(times), out)


def _md_table_row(cols: list[Any]) -> str:
    return "| " + " | ".join(str(c) for c in cols) + " |"


def _parse_sizes(s: str) -> list[int]:
    out = [int(tok) for tok in s.split(",") if tok.strip()]
    if not out or any(d <= 0 for d in out):
        raise ValueError("--digits: serve una lista CSV di interi positivi")
    return out


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Benchmark Int2048 multiplication paths.")
    ap.add_argument("--digits", default="100,300,500,1000,2000,5000,20000", help="CSV of operand sizes (decimal digits)")
    ap.add_argument("--runs", type=int, default=3, help="Runs per timed operation (min+avg). Default: 3")
    ap.add_argument("--seed", type=int, default=12345, help="RNG seed")
    ap.add_argument("--max-schoolbook-digits", type=int, default=5000, help="Skip schoolbook above this size")
    ap.add_argument("--write-docs", action="store_true", help="Write docs/bench_mul.md with the results")
    args = ap.parse_args(argv)

    sizes = _parse_sizes(args.digits)
    rng = random.Random(args.seed)

    lines: list[str] = []
    lines.append("# Int2048 multiplication benchmark")
    lines.append("")
    lines.append(f"- Python: `{sys.version.split()[0]}`")
    lines.append(f"- Platform: `{os.uname().sysname} {os.uname().release}`")
    lines.append(f"- Runs per operation: {args.runs} (reported min+avg)")
    lines.append(f"- Current threshold: n*m <= {DEFAULT_MUL_THRESHOLD} limbs -> schoolbook")
    lines.append("")
    lines.append("| digits | n*m | schoolbook min (s) | ntt min (s) | fft min (s) | agree |")
    lines.append("|---:|---:|---:|---:|---:|---|")

    for digits in sizes:
        a = Int2048(_rand_digits(rng, digits)).limbs
        b = Int2048(_rand_digits(rng, digits)).limbs

        ntt_min, _, ntt_out = _run_min_avg(lambda: transform_multiply(a, b, "ntt"), args.runs)
        fft_min, _, fft_out = _run_min_avg(lambda: transform_multiply(a, b, "fft"), args.runs)
        agree = ntt_out == fft_out

        if digits <= args.max_schoolbook_digits:
            sb_min, _, sb_out = _run_min_avg(lambda: schoolbook_multiply(a, b), args.runs)
            sb_col = f"{sb_min:.4f}"
            agree = agree and sb_out == ntt_out
        else:
            sb_col = "skipped"

        lines.append(
            _md_table_row([digits, len(a) * len(b), sb_col, f"{ntt_min:.4f}", f"{fft_min:.4f}", "yes" if agree else "NO"])
        )

    lines.append("")
    report = "\n".join(lines)
    print(report)

    if args.write_docs:
        docs_path = ROOT / "docs" / "bench_mul.md"
        docs_path.parent.mkdir(parents=True, exist_ok=True)
        docs_path.write_text(report + "\n", encoding="utf-8")
        print(f"[docs] wrote: {docs_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
