from __future__ import annotations

import logging
import random

import numpy as np
import pytest

from i2k_config import KernelConfig
from i2k_fft import FFT_MAX_LIMBS, convolve_fft, round_half_away
from i2k_limbs import is_canonical, magnitude_to_int
from i2k_mul import multiply_magnitude, normalize_coefficients, schoolbook_multiply, transform_multiply
from i2k_ntt import (
    MAX_LENGTH,
    PRIME_1,
    PRIME_2,
    NttPrime,
    convolve_ntt,
    crt_combine,
    ntt,
    transform_length,
)
from i2k_text import parse_decimal
from tests._helpers import rand_digits


def _limbs(s: str) -> list[int]:
    # no int(s): CPython limits str -> int conversion to 4300 digits
    return parse_decimal(s)[1]


def test_normalize_coefficients_propagates_carries():
    assert normalize_coefficients([]) == []
    assert normalize_coefficients([0, 0]) == []
    assert normalize_coefficients([12345, 99999]) == [2345, 0, 10]
    assert normalize_coefficients([10**12]) == [0, 0, 0, 1]


def test_schoolbook_small_cases():
    assert schoolbook_multiply([], [5]) == []
    assert schoolbook_multiply([9999], [9999]) == [1, 9998]
    assert schoolbook_multiply([0, 1], [0, 1]) == [0, 0, 1]


def test_ntt_forward_inverse_is_identity():
    rng = np.random.default_rng(7)
    values = rng.integers(0, 10_000, size=64, dtype=np.int64)
    for prime in (PRIME_1, PRIME_2):
        back = ntt(ntt(values, prime), prime, invert=True)
        assert back.tolist() == values.tolist()


def test_ntt_rejects_bad_lengths():
    with pytest.raises(ValueError):
        ntt(np.zeros(6, dtype=np.int64), PRIME_1)
    with pytest.raises(ValueError):
        ntt(np.zeros(16, dtype=np.int64), NttPrime(p=PRIME_1.p, g=PRIME_1.g, max_log2=3))
    assert MAX_LENGTH == 1 << 23


def test_crt_combine_rebuilds_native_values():
    rng = random.Random(11)
    coeffs = [rng.randrange(0, PRIME_1.p * PRIME_2.p) for _ in range(50)]
    r1 = np.array([c % PRIME_1.p for c in coeffs], dtype=np.int64)
    r2 = np.array([c % PRIME_2.p for c in coeffs], dtype=np.int64)
    assert crt_combine(r1, r2).tolist() == coeffs


def test_transform_length_is_power_of_two_covering_product():
    assert transform_length(1, 1) == 2
    assert transform_length(3, 5) == 8
    assert transform_length(5, 4) == 16


def test_convolutions_agree_with_direct_sum():
    a = [1, 2, 3, 9999]
    b = [9999, 0, 7]
    direct = [0] * (len(a) + len(b) - 1)
    for i, x in enumerate(a):
        for j, y in enumerate(b):
            direct[i + j] += x * y
    assert convolve_ntt(a, b) == direct
    assert convolve_fft(a, b) == direct


def test_round_half_away_from_zero():
    x = np.array([0.5, 1.5, -0.5, 2.4999, -2.5, 0.0])
    assert round_half_away(x).tolist() == [1.0, 2.0, -1.0, 2.0, -3.0, 0.0]


@pytest.mark.parametrize("transform", ["ntt", "fft"])
def test_paths_agree_around_threshold(transform):
    # 500 cifre = 125 limb: 125*125 = 15625 sta sotto la soglia di default
    rng = random.Random(500)
    for digits in (499, 500, 501):
        x, y = rand_digits(rng, digits), rand_digits(rng, digits)
        a, b = _limbs(x), _limbs(y)
        expected = schoolbook_multiply(a, b)
        assert magnitude_to_int(expected) == magnitude_to_int(a) * magnitude_to_int(b)
        assert transform_multiply(a, b, transform) == expected

        below = KernelConfig(mul_threshold=len(a) * len(b), transform=transform)
        above = KernelConfig(mul_threshold=len(a) * len(b) - 1, transform=transform)
        assert multiply_magnitude(a, b, below) == multiply_magnitude(a, b, above) == expected


def test_large_operands_both_transforms_match_reference():
    rng = random.Random(50_000)
    x, y = rand_digits(rng, 50_000), rand_digits(rng, 50_000)
    a, b = _limbs(x), _limbs(y)

    via_ntt = transform_multiply(a, b, "ntt")
    via_fft = transform_multiply(a, b, "fft")
    assert via_ntt == via_fft
    assert is_canonical(via_ntt)
    assert magnitude_to_int(via_ntt) == magnitude_to_int(a) * magnitude_to_int(b)


def test_unbalanced_operands():
    rng = random.Random(3)
    x, y = rand_digits(rng, 9000), rand_digits(rng, 7)
    a, b = _limbs(x), _limbs(y)
    product = magnitude_to_int(a) * magnitude_to_int(b)
    expected = transform_multiply(a, b, "ntt")
    assert magnitude_to_int(expected) == product
    assert schoolbook_multiply(a, b) == expected
    assert transform_multiply(b, a, "fft") == expected
    assert multiply_magnitude(a, b) == expected


def test_dispatch_logs_fft_fallback_to_ntt(caplog):
    a = [1] * (FFT_MAX_LIMBS // 2 + 1)
    b = [1] * (FFT_MAX_LIMBS // 2)
    cfg = KernelConfig(mul_threshold=0, transform="fft")
    with caplog.at_level(logging.DEBUG, logger="i2k_mul"):
        out = multiply_magnitude(a, b, cfg)
    assert "using ntt" in caplog.text
    # all-ones limbs: the low coefficients are 1, 2, 3, ... with no carry
    assert out[0] == 1 and out[1] == 2


def test_unknown_transform_rejected():
    with pytest.raises(ValueError):
        transform_multiply([1], [1], "karatsuba")


def test_fft_rejects_unsafe_rounding(monkeypatch):
    import i2k_fft

    monkeypatch.setattr(i2k_fft, "FFT_ERROR_LIMIT", 0.0)
    with pytest.raises(i2k_fft.TransformPrecisionError):
        convolve_fft([1, 2, 3], [4, 5])


@pytest.mark.parametrize("transform", ["ntt", "fft"])
def test_products_over_ntt_length_limit_use_blocks(monkeypatch, caplog, transform):
    import i2k_mul
    import i2k_ntt

    monkeypatch.setattr(i2k_ntt, "MAX_LENGTH", 64)
    monkeypatch.setattr(i2k_mul, "FFT_MAX_LIMBS", 16)
    rng = random.Random(64)
    a, b = _limbs(rand_digits(rng, 400)), _limbs(rand_digits(rng, 280))
    assert (len(a), len(b)) == (100, 70)
    with pytest.raises(ValueError):
        convolve_ntt(a, b)

    with caplog.at_level(logging.DEBUG, logger="i2k_mul"):
        out = multiply_magnitude(a, b, KernelConfig(mul_threshold=0, transform=transform))
    assert "blocks of 32 limbs" in caplog.text
    assert out == schoolbook_multiply(a, b)
    assert magnitude_to_int(out) == magnitude_to_int(a) * magnitude_to_int(b)


def test_block_boundary_at_half_the_length_limit(monkeypatch):
    import i2k_ntt

    monkeypatch.setattr(i2k_ntt, "MAX_LENGTH", 32)
    a, b = [1] * 17, [1] * 16
    assert transform_multiply(a, b, "ntt") == schoolbook_multiply(a, b)
