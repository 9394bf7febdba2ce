"""Equity-dependent risk sizing."""

from risk_engine.risk.inputs import DomainError, EngineInputs
from risk_engine.risk.models import (
    ANCHOR_EQUITY,
    ANCHOR_FRACTION,
    EQUITY_CEILING,
    EQUITY_FLOOR,
    FULL_RISK_CEILING,
    MAX_EQUITY,
    ModelPhase,
    RiskSeverity,
)
from risk_engine.risk.sizing import (
    SizingModel,
    consecutive_losses_to_ruin,
    dollar_risk_primary,
    equity_after_streak,
    geometric_growth_rate,
    growth_per_trade_pct,
    is_profitable,
    log_equity,
    phase_for,
    risk_fraction,
    risk_fraction_fixed,
    risk_fraction_legacy,
    risk_fraction_primary,
    risk_severity,
)

__all__ = [
    "ANCHOR_EQUITY",
    "ANCHOR_FRACTION",
    "DomainError",
    "EQUITY_CEILING",
    "EQUITY_FLOOR",
    "EngineInputs",
    "FULL_RISK_CEILING",
    "MAX_EQUITY",
    "ModelPhase",
    "RiskSeverity",
    "SizingModel",
    "consecutive_losses_to_ruin",
    "dollar_risk_primary",
    "equity_after_streak",
    "geometric_growth_rate",
    "growth_per_trade_pct",
    "is_profitable",
    "log_equity",
    "phase_for",
    "risk_fraction",
    "risk_fraction_fixed",
    "risk_fraction_legacy",
    "risk_fraction_primary",
    "risk_severity",
]
