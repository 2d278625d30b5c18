"""Multiplication engine: schoolbook or transform convolution, then carries.

Dispatch (on magnitudes, signs are the caller's job):
  - n*m <= config.mul_threshold  -> schoolbook_multiply (exact, O(n*m))
  - otherwise                    -> transform_multiply with config.transform

The float transform is only trusted up to FFT_MAX_LIMBS; above that the
dispatcher moves to the NTT, which has no rounding step at all. Products
longer than the NTT length limit are convolved block by block (blocks of
MAX_LENGTH // 2 limbs) into one coefficient accumulator, so operand size
is bounded only by memory.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import numpy as np

import i2k_ntt
from i2k_config import DEFAULT_CONFIG, KernelConfig
from i2k_fft import FFT_MAX_LIMBS, convolve_fft
from i2k_limbs import BASE, trim
from i2k_ntt import convolve_ntt, transform_length

logger = logging.getLogger(__name__)

_CONVOLVERS: dict[str, Callable[[Sequence[int], Sequence[int]], list[int]]] = {
    "ntt": convolve_ntt,
    "fft": convolve_fft,
}


def normalize_coefficients(coeffs: Sequence[int]) -> list[int]:
    """Carry propagation: raw non-negative coefficients -> canonical limbs."""
    out: list[int] = []
    carry = 0
    for c in coeffs:
        carry, limb = divmod(c + carry, BASE)
        out.append(limb)
    while carry:
        carry, limb = divmod(carry, BASE)
        out.append(limb)
    return trim(out)


def schoolbook_multiply(a: Sequence[int], b: Sequence[int]) -> list[int]:
    n, m = len(a), len(b)
    if n == 0 or m == 0:
        return []
    acc = [0] * (n + m)
    for i in range(n):
        x = a[i]
        if x == 0:
            continue
        carry = 0
        j = 0
        while j < m or carry:
            cur = acc[i + j] + carry
            if j < m:
                cur += x * b[j]
            carry, acc[i + j] = divmod(cur, BASE)
            j += 1
    return trim(acc)


def _convolve_ntt_blocks(a: Sequence[int], b: Sequence[int], block: int) -> list[int]:
    """Raw coefficients of a*b, summed from NTT products of blocks of at most `block` limbs."""
    acc = np.zeros(len(a) + len(b) - 1, dtype=np.int64)
    for i in range(0, len(a), block):
        for j in range(0, len(b), block):
            part = convolve_ntt(a[i : i + block], b[j : j + block])
            acc[i + j : i + j + len(part)] += part
    return acc.tolist()


def transform_multiply(a: Sequence[int], b: Sequence[int], transform: str = "ntt") -> list[int]:
    if transform not in _CONVOLVERS:
        raise ValueError(f"Unknown transform: {transform!r}")
    if not a or not b:
        return []
    limit = i2k_ntt.MAX_LENGTH
    if transform == "ntt" and transform_length(len(a), len(b)) > limit:
        logger.debug("ntt length over %d, convolving in blocks of %d limbs", limit, limit // 2)
        return normalize_coefficients(_convolve_ntt_blocks(a, b, limit // 2))
    return normalize_coefficients(_CONVOLVERS[transform](a, b))


def multiply_magnitude(
    a: Sequence[int],
    b: Sequence[int],
    config: KernelConfig = DEFAULT_CONFIG,
) -> list[int]:
    n, m = len(a), len(b)
    if n == 0 or m == 0:
        return []
    if n * m <= config.mul_threshold:
        return schoolbook_multiply(a, b)

    transform = config.transform
    if transform == "fft" and n + m > FFT_MAX_LIMBS:
        logger.debug("fft unsafe for n+m=%d limbs (max %d), using ntt", n + m, FFT_MAX_LIMBS)
        transform = "ntt"
    logger.debug("multiply n=%d m=%d via %s", n, m, transform)
    return transform_multiply(a, b, transform)


__all__ = ["multiply_magnitude", "normalize_coefficients", "schoolbook_multiply", "transform_multiply"]
