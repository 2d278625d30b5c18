from __future__ import annotations

import random

import pytest

from i2k_limbs import (
    BASE,
    add_magnitude,
    compare,
    is_canonical,
    magnitude_from_int,
    magnitude_to_int,
    mul_magnitude_by_limb,
    sub_magnitude,
    trim,
)


def test_trim_strips_high_zero_limbs_in_place():
    limbs = [5, 0, 7, 0, 0]
    out = trim(limbs)
    assert out is limbs
    assert limbs == [5, 0, 7]
    assert trim([0, 0]) == []


def test_magnitude_from_int_is_little_endian():
    assert magnitude_from_int(0) == []
    assert magnitude_from_int(123456789) == [6789, 2345, 1]
    assert magnitude_from_int(-123456789) == [6789, 2345, 1]
    assert magnitude_to_int([6789, 2345, 1]) == 123456789


def test_compare_length_first_then_top_limb():
    assert compare([], []) == 0
    assert compare([1], []) == 1
    assert compare([9999], [0, 1]) == -1
    assert compare([1, 2], [9, 1]) == 1
    assert compare([3, 2], [3, 2]) == 0


def test_add_carries_into_new_limb():
    assert add_magnitude([9999, 9999], [1]) == [0, 0, 1]
    assert add_magnitude([], [5]) == [5]
    assert add_magnitude([1], [2, 3]) == [3, 3]


def test_sub_borrows_and_trims():
    assert sub_magnitude([0, 0, 1], [1]) == [9999, 9999]
    assert sub_magnitude([5, 3], [5, 3]) == []
    assert sub_magnitude([7], []) == [7]


def test_sub_rejects_smaller_minuend():
    with pytest.raises(ValueError):
        sub_magnitude([1], [2])
    with pytest.raises(ValueError):
        sub_magnitude([1], [0, 1])


def test_mul_by_limb():
    assert mul_magnitude_by_limb([9999, 9999], 9999) == magnitude_from_int(99999999 * 9999)
    assert mul_magnitude_by_limb([1, 2], 0) == []
    assert mul_magnitude_by_limb([], 7) == []
    with pytest.raises(ValueError):
        mul_magnitude_by_limb([1], -1)


def test_random_magnitude_ops_against_native_ints():
    rng = random.Random(2048)
    for _ in range(300):
        x = rng.randrange(0, 10**rng.randint(1, 60))
        y = rng.randrange(0, 10**rng.randint(1, 60))
        a, b = magnitude_from_int(x), magnitude_from_int(y)

        s = add_magnitude(a, b)
        assert is_canonical(s)
        assert magnitude_to_int(s) == x + y

        expected_cmp = (x > y) - (x < y)
        assert compare(a, b) == expected_cmp

        hi, lo = (a, b) if x >= y else (b, a)
        d = sub_magnitude(hi, lo)
        assert is_canonical(d)
        assert magnitude_to_int(d) == abs(x - y)

        k = rng.randrange(BASE)
        p = mul_magnitude_by_limb(a, k)
        assert is_canonical(p)
        assert magnitude_to_int(p) == x * k
