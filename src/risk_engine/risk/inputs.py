"""Input normalization shared by every public entry point.

Finite values outside the documented domain are clamped onto it. Non-finite
values are a caller bug and raise ``DomainError``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from risk_engine.risk.models import EQUITY_FLOOR


class DomainError(ValueError):
    """Raised for NaN or infinite inputs."""


def require_finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise DomainError(f"{name} must be finite, got {value!r}")
    return value


def clamp_equity(equity: float) -> float:
    return max(require_finite("equity", equity), EQUITY_FLOOR)


def clamp_win_rate(win_rate: float) -> float:
    return min(max(require_finite("win_rate", win_rate), 0.0), 1.0)


def clamp_win_rate_pct(win_rate_pct: float) -> float:
    """Convert a percentage in [0, 100] to a probability."""
    return min(max(require_finite("win_rate_pct", win_rate_pct), 0.0), 100.0) / 100.0


def clamp_reward_ratio(reward_ratio: float) -> float:
    return max(require_finite("reward_ratio", reward_ratio), 0.0)


@dataclass(frozen=True)
class EngineInputs:
    equity: float
    win_rate: float
    reward_ratio: float

    @classmethod
    def from_percent(cls, equity: float, win_rate_pct: float, reward_ratio: float) -> "EngineInputs":
        return cls(
            equity=clamp_equity(equity),
            win_rate=clamp_win_rate_pct(win_rate_pct),
            reward_ratio=clamp_reward_ratio(reward_ratio),
        )
