"""Division engine: schoolbook long division on magnitudes.

For each limb of the dividend, from the most significant down:
  1. r <- r*BASE + limb
  2. pick the quotient limb ans with  b*ans <= r < b*(ans+1)
  3. q[i] = ans ;  r <- r - b*ans

Invariant: before step 1, r < b. Hence r < b*BASE after it, and every
quotient limb lies in [0, BASE).

Two estimators for step 2, chosen by KernelConfig.div_estimator:
  - "binary": binary search over [0, BASE-1], one scalar multiply per step
  - "direct": leading-limb estimate, then a short downward correction
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from i2k_config import DEFAULT_CONFIG, KernelConfig
from i2k_limbs import BASE, compare, magnitude_to_int, mul_magnitude_by_limb, sub_magnitude, trim


class DivisionByZero(ZeroDivisionError):
    pass


def estimate_binary(r: Sequence[int], b: Sequence[int]) -> int:
    lo, hi, ans = 0, BASE - 1, 0
    while lo <= hi:
        mid = (lo + hi) >> 1
        if compare(mul_magnitude_by_limb(b, mid), r) <= 0:
            ans = mid
            lo = mid + 1
        else:
            hi = mid - 1
    return ans


def estimate_direct(r: Sequence[int], b: Sequence[int]) -> int:
    """
    ans = floor(top(r) / top2(b)), clamped to BASE-1, then decremented while b*ans > r.

    top2(b) = the two leading limbs of b, top(r) = r // BASE^(len(b)-2).
    Since b >= top2(b) * BASE^(len(b)-2) the estimate never undershoots,
    and top2(b) >= BASE keeps the overshoot at 2 or less.
    """
    k = len(b)
    if k == 1:
        # r < b*BASE: at most two limbs, the division is exact
        return min(magnitude_to_int(r) // b[0], BASE - 1)

    top_b = b[-1] * BASE + b[-2]
    top_r = magnitude_to_int(r[k - 2 :])
    ans = min(top_r // top_b, BASE - 1)
    while ans and compare(mul_magnitude_by_limb(b, ans), r) > 0:
        ans -= 1
    return ans


_ESTIMATORS: dict[str, Callable[[Sequence[int], Sequence[int]], int]] = {
    "binary": estimate_binary,
    "direct": estimate_direct,
}


def divmod_magnitude(
    a: Sequence[int],
    b: Sequence[int],
    config: KernelConfig = DEFAULT_CONFIG,
) -> tuple[list[int], list[int]]:
    """Truncated (q, r) with a = q*b + r and 0 <= r < b. Raises DivisionByZero if b == 0."""
    if not b:
        raise DivisionByZero("Int2048: divisione per zero")
    if compare(a, b) < 0:
        return [], list(a)

    estimate = _ESTIMATORS[config.div_estimator]
    q = [0] * len(a)
    r: list[int] = []

    for i in range(len(a) - 1, -1, -1):
        if r:
            r.insert(0, a[i])
        elif a[i]:
            r.append(a[i])

        if compare(r, b) < 0:
            continue
        ans = estimate(r, b)
        q[i] = ans
        if ans:
            r = sub_magnitude(r, mul_magnitude_by_limb(b, ans))

    return trim(q), trim(r)


__all__ = ["DivisionByZero", "divmod_magnitude", "estimate_binary", "estimate_direct"]
