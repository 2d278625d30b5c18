"""Kernel configuration: multiplication threshold and strategy choices.

The numeric constants (BASE, WIDTH, NTT primes) are fixed at module level in
their own modules. What is tunable lives in a frozen KernelConfig, so a
configuration is a value that can be passed around and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

TRANSFORMS: Final[tuple[str, ...]] = ("ntt", "fft")
ESTIMATORS: Final[tuple[str, ...]] = ("direct", "binary")

# n*m (in limbs) sotto cui conviene la convoluzione diretta
DEFAULT_MUL_THRESHOLD: Final[int] = 120_000


@dataclass(frozen=True)
class KernelConfig:
    mul_threshold: int = DEFAULT_MUL_THRESHOLD
    transform: str = "ntt"
    div_estimator: str = "direct"

    def __post_init__(self) -> None:
        if self.mul_threshold < 0:
            raise ValueError("mul_threshold deve essere >= 0")
        if self.transform not in TRANSFORMS:
            raise ValueError(f"Unknown transform: {self.transform!r} (expected one of {TRANSFORMS})")
        if self.div_estimator not in ESTIMATORS:
            raise ValueError(f"Unknown div_estimator: {self.div_estimator!r} (expected one of {ESTIMATORS})")


DEFAULT_CONFIG: Final[KernelConfig] = KernelConfig()

PRESETS: Final[dict[str, KernelConfig]] = {
    # ntt + stima diretta (default)
    "default": DEFAULT_CONFIG,
    # solo aritmetica intera, stima a ricerca binaria come l'originale
    "exact": KernelConfig(transform="ntt", div_estimator="binary"),
    # trasformata in virgola mobile
    "float": KernelConfig(transform="fft", div_estimator="direct"),
    # mai trasformate: utile come riferimento nei benchmark
    "schoolbook": KernelConfig(mul_threshold=1 << 62),
}


def resolve_kernel_config(
    *,
    preset: str | None = None,
    mul_threshold: int | None = None,
    transform: str | None = None,
    div_estimator: str | None = None,
) -> KernelConfig:
    """Resolve preset + overrides. Explicit overrides always win."""
    preset_eff = "default" if preset is None else preset
    if preset_eff not in PRESETS:
        raise ValueError(f"Unknown preset: {preset_eff!r}")

    base = PRESETS[preset_eff]
    return KernelConfig(
        mul_threshold=base.mul_threshold if mul_threshold is None else int(mul_threshold),
        transform=base.transform if transform is None else transform,
        div_estimator=base.div_estimator if div_estimator is None else div_estimator,
    )


__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_MUL_THRESHOLD",
    "ESTIMATORS",
    "KernelConfig",
    "PRESETS",
    "TRANSFORMS",
    "resolve_kernel_config",
]
