"""Decimal text adapter and stream-style I/O for Int2048.

Text format:
  [whitespace] [+|-] digits [whitespace]

Relaxed on purpose: leading zeros are dropped, and an empty or sign-only
string is zero. Any other character is rejected.

This module does NOT know about the Int2048 class: it speaks (negative, limbs).
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from typing import TextIO

from i2k_limbs import WIDTH

_DIGITS = re.compile(r"[0-9]*")


def parse_decimal(text: str) -> tuple[bool, list[int]]:
    """Returns (negative, limbs). Zero always comes back as (False, [])."""
    s = text.strip()
    negative = False
    if s[:1] in ("-", "+"):
        negative = s[0] == "-"
        s = s[1:]
    if not _DIGITS.fullmatch(s):
        raise ValueError(f"Int2048: testo decimale non valido: {text!r}")

    s = s.lstrip("0")
    if not s:
        return False, []

    limbs: list[int] = []
    for end in range(len(s), 0, -WIDTH):
        limbs.append(int(s[max(0, end - WIDTH) : end]))
    return negative, limbs


def format_decimal(negative: bool, limbs: Sequence[int]) -> str:
    if not limbs:
        return "0"
    parts = [str(limbs[-1])]
    parts.extend(f"{x:0{WIDTH}d}" for x in reversed(limbs[:-1]))
    return ("-" if negative else "") + "".join(parts)


def read_token(stream: TextIO) -> str:
    """
    Next whitespace-delimited token, or "" at end of stream.

    Reads character by character so nothing past the token is consumed; for
    whole files use iter_tokens.
    """
    chars: list[str] = []
    while True:
        ch = stream.read(1)
        if not ch:
            break
        if ch.isspace():
            if chars:
                break
            continue
        chars.append(ch)
    return "".join(chars)


def iter_tokens(stream: TextIO) -> Iterator[str]:
    """Whitespace-delimited tokens of the whole stream, read line by line."""
    for line in stream:
        yield from line.split()


def write_decimal(stream: TextIO, negative: bool, limbs: Sequence[int]) -> None:
    stream.write(format_decimal(negative, limbs))


__all__ = ["format_decimal", "iter_tokens", "parse_decimal", "read_token", "write_decimal"]
