#!/usr/bin/env python3
"""CLI for Int2048.

Usage examples:
  - One operation:
      python3 cli.py calc 123456789012345678901234567890 / 987654321
      python3 cli.py calc -7 % 2

  - Many operations, "A OP B" triples separated by whitespace:
      python3 cli.py stream --in ops.txt
      echo "2 * 3  10 / 3" | python3 cli.py stream

  - Choose kernel strategies (flags always win over the preset):
      python3 cli.py --preset float calc 99999999 '*' 99999999
      python3 cli.py --threshold 0 --transform ntt --verbose calc 12345 '*' 6789
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from i2k_config import ESTIMATORS, PRESETS, TRANSFORMS, KernelConfig, resolve_kernel_config
from i2k_text import iter_tokens
from int2048 import Int2048

OPERATORS = ("+", "-", "*", "/", "%")


def apply_operator(a: Int2048, op: str, b: Int2048, config: KernelConfig) -> Int2048:
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a.multiply(b, config)
    if op == "/":
        return a.divrem(b, config)[0]
    if op == "%":
        return a.divrem(b, config)[1]
    raise ValueError(f"Unknown operator: {op!r}")


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="int2048",
        description="Int2048 — interi con segno a precisione arbitraria (limb base 10^4).",
    )
    ap.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Preset del kernel: default (ntt+direct), exact (ntt+binary), float (fft+direct), schoolbook.",
    )
    ap.add_argument("--threshold", type=int, default=None, help="Override: soglia n*m (limb) per la moltiplicazione diretta.")
    ap.add_argument("--transform", choices=TRANSFORMS, default=None, help="Override: trasformata per operandi grandi.")
    ap.add_argument("--estimator", choices=ESTIMATORS, default=None, help="Override: stima della cifra del quoziente.")
    ap.add_argument("--verbose", action="store_true", help="Log DEBUG del kernel su stderr.")

    sub = ap.add_subparsers(dest="cmd", required=True)

    p_calc = sub.add_parser("calc", help="Evaluate one operation A OP B")
    p_calc.add_argument("a", help="Left operand (decimal)")
    p_calc.add_argument("op", choices=OPERATORS, help="Operator")
    p_calc.add_argument("b", help="Right operand (decimal)")

    p_stream = sub.add_parser("stream", help="Evaluate whitespace-separated A OP B triples")
    p_stream.add_argument("--in", dest="inp", default=None, help="Input file (default: stdin)")

    return ap


def _cmd_calc(args: argparse.Namespace, config: KernelConfig) -> int:
    result = apply_operator(Int2048(args.a), args.op, Int2048(args.b), config)
    print(result)
    return 0


def evaluate_stream(stream: TextIO, out: TextIO, config: KernelConfig) -> int:
    """Evaluate every triple in `stream`, one result per line. Returns the count."""
    tokens = iter_tokens(stream)
    count = 0
    for tok in tokens:
        op = next(tokens, "")
        b = next(tokens, "")
        if not op or not b:
            raise ValueError(f"Triple incompleta dopo {count} operazioni: {tok!r} {op!r} {b!r}")
        apply_operator(Int2048(tok), op, Int2048(b), config).write_to(out)
        out.write("\n")
        count += 1
    return count


def _cmd_stream(args: argparse.Namespace, config: KernelConfig) -> int:
    if args.inp is None:
        evaluate_stream(sys.stdin, sys.stdout, config)
        return 0
    with open(args.inp, encoding="utf-8") as f:
        evaluate_stream(f, sys.stdout, config)
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = resolve_kernel_config(
            preset=args.preset,
            mul_threshold=args.threshold,
            transform=args.transform,
            div_estimator=args.estimator,
        )
        if args.cmd == "calc":
            return _cmd_calc(args, config)
        if args.cmd == "stream":
            return _cmd_stream(args, config)
        ap.error("unknown command")
        return 2
    except (ValueError, ArithmeticError) as e:
        print(f"[error] {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
