"""Floating-point transform convolution (numpy real FFT).

Precision contract for BASE = 10^4:
  a coefficient is a sum of up to min(n, m) products below 10^8, and the
  float64 FFT error grows roughly like  max_coef * eps * log2(size).
  With n + m <= FFT_MAX_LIMBS (2^18 limbs, ~1M decimal digits) the expected
  error stays well below FFT_ERROR_LIMIT. The multiplication dispatcher
  switches to the NTT above that size; here the error is measured anyway
  and a result that cannot be rounded safely is rejected.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

import numpy as np

from i2k_ntt import transform_length

FFT_MAX_LIMBS: Final[int] = 1 << 18
FFT_ERROR_LIMIT: Final[float] = 0.25


class TransformPrecisionError(ArithmeticError):
    pass


def round_half_away(x: np.ndarray) -> np.ndarray:
    return np.sign(x) * np.floor(np.abs(x) + 0.5)


def convolve_fft(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Acyclic convolution via rfft/irfft; returns len(a) + len(b) - 1 coefficients."""
    n, m = len(a), len(b)
    if n == 0 or m == 0:
        return []
    size = transform_length(n, m)

    fa = np.fft.rfft(np.asarray(a, dtype=np.float64), size)
    fb = np.fft.rfft(np.asarray(b, dtype=np.float64), size)
    raw = np.fft.irfft(fa * fb, size)[: n + m - 1]

    rounded = round_half_away(raw)
    err = float(np.max(np.abs(raw - rounded)))
    if err >= FFT_ERROR_LIMIT:
        raise TransformPrecisionError(
            f"FFT: errore di arrotondamento {err:.3f} >= {FFT_ERROR_LIMIT} (n={n}, m={m}, size={size})"
        )
    return rounded.astype(np.int64).tolist()


__all__ = ["FFT_ERROR_LIMIT", "FFT_MAX_LIMBS", "TransformPrecisionError", "convolve_fft", "round_half_away"]
