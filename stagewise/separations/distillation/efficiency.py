# stagewise/separations/distillation/efficiency.py
"""Tray efficiency: theoretical to real stages"""
import math

from stagewise.core.validation import ConfigurationError, check_finite, check_non_negative


def check_efficiency(name: str, value: float) -> float:
    """Efficiency in (0, 1]"""
    v = check_finite(name, value)
    if not (0.0 < v <= 1.0):
        raise ConfigurationError(f"{name} must satisfy 0 < {name} <= 1, got {v}")
    return v


def real_stages(theoretical: float, efficiency: float) -> int:
    """
    Real trays for a uniform Murphree efficiency:

        N_real = ceil(N_theoretical / E_M)
    """
    N = check_non_negative("theoretical", theoretical)
    E = check_efficiency("efficiency", efficiency)
    return int(math.ceil(N / E - 1e-12))

