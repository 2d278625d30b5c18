"""Digit store and magnitude arithmetic for Int2048.

A magnitude is a plain list of limbs, least significant first:

    value = sum(limbs[i] * BASE**i)

Invariants (checked by is_canonical):
  - every limb lies in [0, BASE)
  - no trailing zero limb; zero is the empty list

All functions here ignore signs. They return fresh lists and never alias
their inputs, except trim() which works in place.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

# --- Costanti ---------------------------------------------------------------

WIDTH: Final[int] = 4  # cifre decimali per limb
BASE: Final[int] = 10**WIDTH


# --- Forma canonica ----------------------------------------------------------


def trim(limbs: list[int]) -> list[int]:
    """Strip trailing zero limbs in place; returns the same list."""
    while limbs and limbs[-1] == 0:
        limbs.pop()
    return limbs


def is_canonical(limbs: Sequence[int]) -> bool:
    if limbs and limbs[-1] == 0:
        return False
    return all(0 <= x < BASE for x in limbs)


# --- Confronto ---------------------------------------------------------------


def compare(a: Sequence[int], b: Sequence[int]) -> int:
    """
    Unsigned compare: -1, 0 or 1.
    Length decides first (no leading zero limbs), then the limbs from the top.
    """
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return -1 if a[i] < b[i] else 1
    return 0


# --- Somma / differenza ------------------------------------------------------


def add_magnitude(a: Sequence[int], b: Sequence[int]) -> list[int]:
    if len(a) < len(b):
        a, b = b, a
    m = len(b)
    out: list[int] = []
    carry = 0
    for i in range(len(a)):
        cur = a[i] + carry
        if i < m:
            cur += b[i]
        if cur >= BASE:
            cur -= BASE
            carry = 1
        else:
            carry = 0
        out.append(cur)
    if carry:
        out.append(carry)
    return trim(out)


def sub_magnitude(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """
    a - b on magnitudes. Precondition: a >= b.

    The caller (signed add/subtract) orders the operands with compare();
    a violated precondition shows up as a leftover borrow and is rejected.
    """
    m = len(b)
    if m > len(a):
        raise ValueError("sub_magnitude: a < b (precondizione violata)")
    out: list[int] = []
    borrow = 0
    for i in range(len(a)):
        x = a[i] - borrow
        y = b[i] if i < m else 0
        if x < y:
            x += BASE
            borrow = 1
        else:
            borrow = 0
        out.append(x - y)
    if borrow:
        raise ValueError("sub_magnitude: a < b (precondizione violata)")
    return trim(out)


# --- Prodotto per un limb ------------------------------------------------------


def mul_magnitude_by_limb(a: Sequence[int], k: int) -> list[int]:
    """Scalar multiply a * k with a carry chain (k >= 0, usually k < BASE)."""
    if k < 0:
        raise ValueError(f"mul_magnitude_by_limb: k deve essere >= 0, got {k}")
    if k == 0 or not a:
        return []
    out: list[int] = []
    carry = 0
    for x in a:
        carry, limb = divmod(x * k + carry, BASE)
        out.append(limb)
    while carry:
        carry, limb = divmod(carry, BASE)
        out.append(limb)
    return trim(out)


# --- Conversioni native ------------------------------------------------------


def magnitude_from_int(n: int) -> list[int]:
    """Limbs of abs(n). Python ints have no minimum, so abs() never overflows."""
    n = abs(n)
    out: list[int] = []
    while n:
        n, limb = divmod(n, BASE)
        out.append(limb)
    return out


def magnitude_to_int(limbs: Sequence[int]) -> int:
    n = 0
    for x in reversed(limbs):
        n = n * BASE + x
    return n


__all__ = [
    "BASE",
    "WIDTH",
    "add_magnitude",
    "compare",
    "is_canonical",
    "magnitude_from_int",
    "magnitude_to_int",
    "mul_magnitude_by_limb",
    "sub_magnitude",
    "trim",
]
