#!/usr/bin/env python3
"""
int2048.py — intero con segno a precisione arbitraria su limb decimali.

Rappresentazione:
- segno (bool) + magnitudine in limb base 10^4, dal meno significativo
- lo zero è la sequenza vuota e non ha segno (negative=False)

Il kernel numerico vive nei moduli i2k_*:
- i2k_limbs.py  confronto, somma, differenza, prodotto per un limb
- i2k_mul.py    moltiplicazione: convoluzione diretta oppure NTT/FFT
- i2k_div.py    divisione lunga con stima della cifra del quoziente
- i2k_text.py   testo decimale e I/O a stream

Semantica della divisione: quoziente troncato verso zero, resto con il
segno del dividendo, come in C:
    Int2048(-7) / 2 == -3
    Int2048(-7) % 2 == -1
    a == (a / b) * b + a % b

I valori sono immutabili: `x += y` ricollega x a un nuovo Int2048.

CLI:
  python3 int2048.py calc 123456789012345678901234567890 / 987654321
  python3 int2048.py stream --in pairs.txt
"""

from __future__ import annotations

import sys
from typing import TextIO

from i2k_config import DEFAULT_CONFIG, KernelConfig
from i2k_div import DivisionByZero, divmod_magnitude
from i2k_limbs import add_magnitude, compare, magnitude_from_int, magnitude_to_int, sub_magnitude
from i2k_mul import multiply_magnitude
from i2k_text import format_decimal, parse_decimal, read_token, write_decimal


class Int2048:
    __slots__ = ("_neg", "_limbs", "_hash")

    def __init__(self, value: int | str | Int2048 = 0) -> None:
        if isinstance(value, Int2048):
            neg, limbs = value._neg, value._limbs
        elif isinstance(value, int):
            neg, limbs = value < 0, magnitude_from_int(value)
        elif isinstance(value, str):
            neg, limbs = parse_decimal(value)
        else:
            raise TypeError(f"Int2048: tipo non supportato {type(value).__name__}")
        self._limbs: tuple[int, ...] = tuple(limbs)
        self._neg: bool = bool(neg) and bool(self._limbs)
        self._hash: int | None = None

    @classmethod
    def _from_parts(cls, negative: bool, limbs: list[int] | tuple[int, ...]) -> Int2048:
        obj = cls.__new__(cls)
        obj._limbs = tuple(limbs)
        obj._neg = negative and bool(obj._limbs)
        obj._hash = None
        return obj

    # --- Accesso -----------------------------------------------------------

    @property
    def negative(self) -> bool:
        return self._neg

    @property
    def limbs(self) -> tuple[int, ...]:
        """Magnitude limbs, least significant first (empty for zero)."""
        return self._limbs

    # --- Testo / stream ------------------------------------------------------

    @classmethod
    def read_from(cls, stream: TextIO) -> Int2048:
        """Read the next whitespace-delimited token; end of stream gives zero."""
        return cls(read_token(stream))

    def write_to(self, stream: TextIO) -> None:
        write_decimal(stream, self._neg, self._limbs)

    def print(self, file: TextIO | None = None) -> None:
        self.write_to(sys.stdout if file is None else file)

    def __str__(self) -> str:
        return format_decimal(self._neg, self._limbs)

    def __repr__(self) -> str:
        return f"Int2048('{self}')"

    def __int__(self) -> int:
        n = magnitude_to_int(self._limbs)
        return -n if self._neg else n

    def __bool__(self) -> bool:
        return bool(self._limbs)

    def __hash__(self) -> int:
        # same hash as the equal int; the conversion is quadratic, so it runs once
        if self._hash is None:
            self._hash = hash(int(self))
        return self._hash

    # --- Unari ---------------------------------------------------------------

    def __pos__(self) -> Int2048:
        return self

    def __neg__(self) -> Int2048:
        return Int2048._from_parts(not self._neg, self._limbs)

    def __abs__(self) -> Int2048:
        return Int2048._from_parts(False, self._limbs)

    # --- Somma / differenza ----------------------------------------------------

    def _add(self, other: Int2048) -> Int2048:
        if self._neg == other._neg:
            return Int2048._from_parts(self._neg, add_magnitude(self._limbs, other._limbs))
        cmp = compare(self._limbs, other._limbs)
        if cmp == 0:
            return Int2048()
        if cmp > 0:
            return Int2048._from_parts(self._neg, sub_magnitude(self._limbs, other._limbs))
        return Int2048._from_parts(other._neg, sub_magnitude(other._limbs, self._limbs))

    def add(self, other: int | Int2048) -> Int2048:
        return self._add(Int2048(other))

    def minus(self, other: int | Int2048) -> Int2048:
        return self._add(-Int2048(other))

    def __add__(self, other: object) -> Int2048:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._add(o)

    def __radd__(self, other: object) -> Int2048:
        return self.__add__(other)

    def __sub__(self, other: object) -> Int2048:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._add(-o)

    def __rsub__(self, other: object) -> Int2048:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return o._add(-self)

    # --- Prodotto ----------------------------------------------------------------

    def multiply(self, other: int | Int2048, config: KernelConfig = DEFAULT_CONFIG) -> Int2048:
        o = Int2048(other)
        limbs = multiply_magnitude(self._limbs, o._limbs, config)
        return Int2048._from_parts(self._neg != o._neg, limbs)

    def __mul__(self, other: object) -> Int2048:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self.multiply(o)

    def __rmul__(self, other: object) -> Int2048:
        return self.__mul__(other)

    # --- Divisione ---------------------------------------------------------------

    def divrem(self, other: int | Int2048, config: KernelConfig = DEFAULT_CONFIG) -> tuple[Int2048, Int2048]:
        """(q, r) with q truncated toward zero and r carrying the dividend's sign."""
        o = Int2048(other)
        q, r = divmod_magnitude(self._limbs, o._limbs, config)
        return Int2048._from_parts(self._neg != o._neg, q), Int2048._from_parts(self._neg, r)

    def __truediv__(self, other: object) -> Int2048:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self.divrem(o)[0]

    def __rtruediv__(self, other: object) -> Int2048:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return o.divrem(self)[0]

    # `//` is the same truncating division: there is no floor variant.
    __floordiv__ = __truediv__
    __rfloordiv__ = __rtruediv__

    def __mod__(self, other: object) -> Int2048:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self.divrem(o)[1]

    def __rmod__(self, other: object) -> Int2048:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return o.divrem(self)[1]

    def __divmod__(self, other: object) -> tuple[Int2048, Int2048]:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self.divrem(o)

    def __rdivmod__(self, other: object) -> tuple[Int2048, Int2048]:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return o.divrem(self)

    # --- Confronti -------------------------------------------------------------

    def _cmp(self, other: Int2048) -> int:
        if self._neg != other._neg:
            return -1 if self._neg else 1
        c = compare(self._limbs, other._limbs)
        return -c if self._neg else c

    def __eq__(self, other: object) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._neg == o._neg and self._limbs == o._limbs

    def __ne__(self, other: object) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return not (self._neg == o._neg and self._limbs == o._limbs)

    def __lt__(self, other: object) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._cmp(o) < 0

    def __le__(self, other: object) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._cmp(o) <= 0

    def __gt__(self, other: object) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._cmp(o) > 0

    def __ge__(self, other: object) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._cmp(o) >= 0


def _coerce(value: object) -> Int2048 | None:
    if isinstance(value, Int2048):
        return value
    if isinstance(value, int):
        return Int2048(value)
    return None


def add(a: int | str | Int2048, b: int | str | Int2048) -> Int2048:
    return Int2048(a)._add(Int2048(b))


def minus(a: int | str | Int2048, b: int | str | Int2048) -> Int2048:
    return Int2048(a)._add(-Int2048(b))


__all__ = ["DivisionByZero", "Int2048", "add", "minus"]


if __name__ == "__main__":
    from cli import main

    raise SystemExit(main())
