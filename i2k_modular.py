"""
i2k_modular.py — utility di teoria dei numeri per la moltiplicazione modulare.

Serve al percorso NTT (i2k_ntt.py):
- inverso modulare (radici inverse, scala 1/n, costante CRT)
- certificato di primalità di Lucas per i moduli scelti: con p-1
  completamente fattorizzato, una radice primitiva g prova che p è primo
- massima potenza di 2 che divide p-1 (lunghezza massima della trasformata)

Tutto è aritmetica intera esatta su int nativi "piccoli" (< 2^64): il valore
di un Int2048 non passa mai di qui.
"""

from __future__ import annotations

from collections.abc import Sequence


def modinv(a: int, m: int) -> int:
    """Inverso modulare di a mod m (se gcd(a,m)=1)."""
    try:
        return pow(a, -1, m)
    except ValueError:
        raise ValueError(f"modinv: a={a % m} non invertibile mod {m}") from None


# --- Fattorizzazione di p-1 / radici primitive -----------------------------


def factor_small(n: int, primes: Sequence[int]) -> tuple[dict[int, int], int]:
    """
    Fattorizza n usando solo i primi in `primes`.
    Ritorna (fattori, resto). Se resto=1 => completamente fattorizzato.
    """
    f: dict[int, int] = {}
    for p in primes:
        if n == 1:
            break
        e = 0
        while n % p == 0:
            n //= p
            e += 1
        if e:
            f[p] = e
    return f, n


def is_primitive_root(g: int, p: int, factors_p_minus_1: dict[int, int]) -> bool:
    """
    True se g ha ordine esattamente p-1 modulo p.

    Con i fattori primi completi di p-1 questo è il test di Lucas: se vale,
    p è primo. Non serve alcun test probabilistico a parte.
    """
    if p <= 2 or g % p == 0:
        return False
    phi = p - 1
    if pow(g, phi, p) != 1:
        return False
    return all(pow(g, phi // q, p) != 1 for q in factors_p_minus_1)


def two_adic_order(n: int) -> int:
    """Massimo k con 2^k | n (n > 0)."""
    if n <= 0:
        raise ValueError("two_adic_order: n deve essere positivo.")
    return (n & -n).bit_length() - 1


__all__ = [
    "factor_small",
    "is_primitive_root",
    "modinv",
    "two_adic_order",
]
