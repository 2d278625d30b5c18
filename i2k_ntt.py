"""Modular transform (NTT) convolution with two-prime CRT reconstruction.

The limb sequences are transformed under two NTT-friendly primes, multiplied
pointwise, transformed back, and each coefficient is rebuilt exactly from its
two residues:

    c ≡ r1 (mod P1),  c ≡ r2 (mod P2),  0 <= c < P1*P2

Every residue fits in 30 bits, so products of two residues (< 2^60) and the
CRT value c (< P1*P2 < 2^59) stay inside numpy int64.

The transform length is bounded by the largest power of two dividing both
p-1 (2^23). No rounding is involved anywhere on this path.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

import numpy as np

from i2k_limbs import BASE
from i2k_modular import factor_small, is_primitive_root, modinv, two_adic_order

logger = logging.getLogger(__name__)

_SMALL_PRIMES: Final[tuple[int, ...]] = (2, 3, 5, 7, 11, 13, 17, 19, 23)


@dataclass(frozen=True)
class NttPrime:
    """A prime p = c * 2^k + 1 together with a primitive root g."""

    p: int
    g: int
    max_log2: int

    def root_of_unity(self, length: int, invert: bool = False) -> int:
        """Primitive `length`-th root of unity mod p (length a power of two)."""
        w = pow(self.g, (self.p - 1) // length, self.p)
        return modinv(w, self.p) if invert else w


def make_ntt_prime(p: int, g: int) -> NttPrime:
    """
    Validates p = c * 2^k + 1 and its generator g.

    p-1 must split over the small primes; g having order p-1 is then a
    Lucas certificate that p is prime.
    """
    if p < 3 or p >= 1 << 30:
        raise ValueError(f"NTT: p={p} fuori range (3 <= p < 2^30 per prodotti int64)")
    fac, rest = factor_small(p - 1, _SMALL_PRIMES)
    if rest != 1:
        raise ValueError(f"NTT: p-1 non fattorizzabile sui primi piccoli (p={p}, resto={rest})")
    if not is_primitive_root(g, p, fac):
        raise ValueError(f"NTT: g={g} non ha ordine p-1 mod {p} (p non primo o g non primitiva)")
    return NttPrime(p=p, g=g, max_log2=two_adic_order(p - 1))


PRIME_1: Final[NttPrime] = make_ntt_prime(998244353, 3)  # 119 * 2^23 + 1
PRIME_2: Final[NttPrime] = make_ntt_prime(469762049, 3)  # 7 * 2^26 + 1

MAX_LOG2: Final[int] = min(PRIME_1.max_log2, PRIME_2.max_log2)
MAX_LENGTH: Final[int] = 1 << MAX_LOG2

_P1_INV_MOD_P2: Final[int] = modinv(PRIME_1.p, PRIME_2.p)


# --- Trasformata ----------------------------------------------------------------


def _bit_reverse_permutation(n: int) -> np.ndarray:
    log_n = n.bit_length() - 1
    idx = np.arange(n, dtype=np.int64)
    rev = np.zeros(n, dtype=np.int64)
    for b in range(log_n):
        rev |= ((idx >> b) & 1) << (log_n - 1 - b)
    return rev


def _twiddles(w: int, half: int, p: int) -> np.ndarray:
    out = [1] * half
    for j in range(1, half):
        out[j] = out[j - 1] * w % p
    return np.array(out, dtype=np.int64)


def ntt(values: np.ndarray, prime: NttPrime, invert: bool = False) -> np.ndarray:
    """
    Iterative radix-2 NTT over Z/pZ. len(values) must be a power of two.
    Returns a new array; the inverse transform includes the 1/n scaling.
    """
    n = len(values)
    if n == 0 or n & (n - 1):
        raise ValueError(f"NTT: lunghezza {n} non è una potenza di 2")
    if n > 1 << prime.max_log2:
        raise ValueError(f"NTT: lunghezza {n} oltre il limite 2^{prime.max_log2} per p={prime.p}")

    p = prime.p
    a = np.asarray(values, dtype=np.int64)[_bit_reverse_permutation(n)] % p

    length = 2
    while length <= n:
        half = length >> 1
        tw = _twiddles(prime.root_of_unity(length, invert), half, p)
        blocks = a.reshape(-1, length)
        u = blocks[:, :half]
        v = blocks[:, half:] * tw % p
        a = np.concatenate(((u + v) % p, (u - v) % p), axis=1).reshape(-1)
        length <<= 1

    if invert:
        a = a * modinv(n, p) % p
    return a


def _cyclic_product(fa: np.ndarray, fb: np.ndarray, prime: NttPrime) -> np.ndarray:
    p = prime.p
    return ntt(ntt(fa, prime) * ntt(fb, prime) % p, prime, invert=True)


# --- CRT --------------------------------------------------------------------------


def crt_combine(r1: np.ndarray, r2: np.ndarray) -> np.ndarray:
    """Vectorised CRT: x = r1 + P1 * ((r2 - r1) * P1^-1 mod P2)."""
    t = (r2 - r1) % PRIME_2.p * _P1_INV_MOD_P2 % PRIME_2.p
    return r1 + PRIME_1.p * t


# --- Convoluzione -----------------------------------------------------------------


def transform_length(n: int, m: int) -> int:
    size = 1
    while size < n + m:
        size <<= 1
    return size


def convolve_ntt(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """
    Exact acyclic convolution of two limb sequences.
    Returns len(a) + len(b) - 1 raw coefficients (not yet carry-normalised).
    """
    n, m = len(a), len(b)
    if n == 0 or m == 0:
        return []
    size = transform_length(n, m)
    if size > MAX_LENGTH:
        raise ValueError(f"NTT: operandi troppo grandi (lunghezza {size} > {MAX_LENGTH})")
    # each coefficient is a sum of min(n, m) products below BASE^2
    if min(n, m) * (BASE - 1) ** 2 >= PRIME_1.p * PRIME_2.p:
        raise ValueError("NTT: coefficienti oltre il range CRT P1*P2")

    fa = np.zeros(size, dtype=np.int64)
    fb = np.zeros(size, dtype=np.int64)
    fa[:n] = a
    fb[:m] = b

    logger.debug("ntt convolve n=%d m=%d size=%d", n, m, size)
    r1 = _cyclic_product(fa, fb, PRIME_1)
    r2 = _cyclic_product(fa, fb, PRIME_2)
    return crt_combine(r1, r2)[: n + m - 1].tolist()


__all__ = [
    "MAX_LENGTH",
    "NttPrime",
    "PRIME_1",
    "PRIME_2",
    "convolve_ntt",
    "crt_combine",
    "make_ntt_prime",
    "ntt",
    "transform_length",
]
