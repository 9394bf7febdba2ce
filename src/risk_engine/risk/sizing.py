"""Equity-dependent position sizing for the three comparison models."""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Optional

from risk_engine.risk.inputs import clamp_equity, clamp_reward_ratio, clamp_win_rate, require_finite
from risk_engine.risk.models import (
    ANCHOR_EQUITY,
    ANCHOR_FRACTION,
    EQUITY_FLOOR,
    FULL_RISK_CEILING,
    MID_BREAKPOINT,
    MID_FRACTION,
    RUIN_HORIZON_CAP,
    ModelPhase,
    RiskSeverity,
)


# The underscored variants skip input checks; simulation loops call them with
# equity already clamped to [EQUITY_FLOOR, EQUITY_CEILING].
def _power_decay(equity: float) -> float:
    if equity <= FULL_RISK_CEILING:
        return 1.0
    if equity <= MID_BREAKPOINT:
        span = MID_BREAKPOINT - FULL_RISK_CEILING
        return 1.0 - (1.0 - MID_FRACTION) * ((equity - FULL_RISK_CEILING) / span)
    if equity <= ANCHOR_EQUITY:
        span = ANCHOR_EQUITY - MID_BREAKPOINT
        return MID_FRACTION - (MID_FRACTION - ANCHOR_FRACTION) * ((equity - MID_BREAKPOINT) / span)
    return ANCHOR_FRACTION * (ANCHOR_EQUITY / equity) ** (2.0 / 3.0)


def _cube_root_decay(equity: float) -> float:
    return min(1.0, ANCHOR_FRACTION * (ANCHOR_EQUITY / max(equity, EQUITY_FLOOR)) ** (1.0 / 3.0))


def _fixed_fraction(equity: float) -> float:
    return ANCHOR_FRACTION


def risk_fraction_primary(equity: float) -> float:
    """Two-thirds power decay anchored at 0.33 of equity at $87.5K.

    Below $20K the whole account is at risk; between $20K and $87.5K the
    fraction falls linearly through 0.5 at $50K.
    """
    return _power_decay(clamp_equity(equity))


def risk_fraction_legacy(equity: float) -> float:
    """Cube-root decay kept for comparison; heavier tail than the primary model."""
    return _cube_root_decay(clamp_equity(equity))


def risk_fraction_fixed() -> float:
    return ANCHOR_FRACTION


class SizingModel(str, Enum):
    POWER_DECAY = "power_decay"
    CUBE_ROOT_DECAY = "cube_root_decay"
    FIXED_FRACTION = "fixed_fraction"

    @property
    def fraction_fn(self) -> Callable[[float], float]:
        return _FRACTION_FNS[self]

    def risk_fraction(self, equity: float) -> float:
        return self.fraction_fn(clamp_equity(equity))


_FRACTION_FNS: dict[SizingModel, Callable[[float], float]] = {
    SizingModel.POWER_DECAY: _power_decay,
    SizingModel.CUBE_ROOT_DECAY: _cube_root_decay,
    SizingModel.FIXED_FRACTION: _fixed_fraction,
}


def risk_fraction(model: SizingModel | str, equity: float) -> float:
    return SizingModel(model).risk_fraction(equity)


def dollar_risk_primary(equity: float) -> float:
    equity = clamp_equity(equity)
    return _power_decay(equity) * equity


def geometric_growth_rate(fraction: float, win_rate: float, reward_ratio: float) -> float:
    """Expected log-growth per trade when risking ``fraction`` of equity.

    Returns ``-inf`` when the fraction is 1 or more and ``0`` when nothing
    is at risk.
    """
    fraction = require_finite("risk_fraction", fraction)
    win_rate = clamp_win_rate(win_rate)
    reward_ratio = clamp_reward_ratio(reward_ratio)
    if fraction >= 1.0:
        return -math.inf
    if fraction <= 0.0:
        return 0.0
    return win_rate * math.log(1.0 + fraction * reward_ratio) + (1.0 - win_rate) * math.log(1.0 - fraction)


def is_profitable(fraction: float, win_rate: float, reward_ratio: float) -> bool:
    return geometric_growth_rate(fraction, win_rate, reward_ratio) > 0.0


def consecutive_losses_to_ruin(equity: float) -> int:
    """Losses in a row under the primary model before equity drops to the floor.

    Returns ``RUIN_HORIZON_CAP`` when no practical ruin happens within the cap.
    """
    remaining = clamp_equity(equity)
    for count in range(1, RUIN_HORIZON_CAP + 1):
        remaining *= 1.0 - _power_decay(remaining)
        if remaining <= EQUITY_FLOOR:
            return count
    return RUIN_HORIZON_CAP


def equity_after_streak(
    equity: float,
    count: int,
    is_win_streak: bool,
    reward_ratio: float,
    model: SizingModel = SizingModel.POWER_DECAY,
) -> float:
    value = clamp_equity(equity)
    reward_ratio = clamp_reward_ratio(reward_ratio)
    fraction_fn = model.fraction_fn
    for _ in range(max(0, int(count))):
        fraction = fraction_fn(value)
        if is_win_streak:
            value *= 1.0 + fraction * reward_ratio
        else:
            value *= 1.0 - fraction
        value = max(value, EQUITY_FLOOR)
    return value


def growth_per_trade_pct(growth_rate: float) -> Optional[float]:
    """Per-trade percentage growth implied by a log growth rate; ``None`` means ruin."""
    if not math.isfinite(growth_rate) or growth_rate < -10.0:
        return None
    return (math.exp(growth_rate) - 1.0) * 100.0


def phase_for(equity: float) -> ModelPhase:
    equity = clamp_equity(equity)
    if equity < ANCHOR_EQUITY * 0.95:
        return ModelPhase.PRE
    if equity <= ANCHOR_EQUITY * 1.05:
        return ModelPhase.ANCHOR
    return ModelPhase.MODEL


def risk_severity(risk_pct: float) -> RiskSeverity:
    if risk_pct <= 34:
        return RiskSeverity.SAFE
    if risk_pct <= 55:
        return RiskSeverity.ELEVATED
    return RiskSeverity.DANGER


def log_equity(value: float) -> float:
    return math.log10(max(value, EQUITY_FLOOR))
