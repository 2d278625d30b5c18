from __future__ import annotations

import pytest

from i2k_modular import factor_small, is_primitive_root, modinv, two_adic_order
from i2k_ntt import make_ntt_prime


def test_modinv():
    assert modinv(3, 11) * 3 % 11 == 1
    assert modinv(998244353, 469762049) * 998244353 % 469762049 == 1
    with pytest.raises(ValueError):
        modinv(6, 9)


def test_factor_small():
    assert factor_small(998244352, (2, 3, 5, 7)) == ({2: 23, 7: 1}, 17)
    assert factor_small(469762048, (2, 3, 5, 7)) == ({2: 26, 7: 1}, 1)
    assert factor_small(1, (2, 3)) == ({}, 1)


def test_ntt_primes_have_primitive_root_3():
    for p in (998244353, 469762049):
        fac, rest = factor_small(p - 1, (2, 3, 5, 7, 11, 13, 17))
        assert rest == 1
        assert is_primitive_root(3, p, fac)
        assert not is_primitive_root(4, p, fac)  # un quadrato non genera mai


def test_lucas_check_rejects_composites():
    # 561 = 3*11*17 (Carmichael): 560 = 2^4 * 5 * 7 si fattorizza, ma nessun g ha ordine 560
    fac, rest = factor_small(560, (2, 3, 5, 7))
    assert rest == 1
    assert not any(is_primitive_root(g, 561, fac) for g in range(2, 561))


def test_make_ntt_prime_validates_inputs():
    prime = make_ntt_prime(998244353, 3)
    assert prime.max_log2 == 23
    with pytest.raises(ValueError):
        make_ntt_prime(998244353, 4)  # non primitiva
    with pytest.raises(ValueError):
        make_ntt_prime(561, 2)  # composto
    with pytest.raises(ValueError):
        make_ntt_prime(2**31 - 1, 7)  # oltre 2^30
    with pytest.raises(ValueError):
        make_ntt_prime(2 * 29 * 31 + 1, 3)  # p-1 con fattore 31 fuori dai primi piccoli


def test_two_adic_order():
    assert two_adic_order(998244352) == 23
    assert two_adic_order(469762048) == 26
    assert two_adic_order(7) == 0
    with pytest.raises(ValueError):
        two_adic_order(0)
