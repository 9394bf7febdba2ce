"""Model constants and classification enums."""

from __future__ import annotations

from enum import Enum

ANCHOR_EQUITY = 87500.0
ANCHOR_FRACTION = 0.33
FULL_RISK_CEILING = 20000.0
MID_BREAKPOINT = 50000.0
MID_FRACTION = 0.5
MAX_EQUITY = 10_000_000.0

EQUITY_FLOOR = 1.0
EQUITY_CEILING = 1e15

RUIN_HORIZON_CAP = 200


class ModelPhase(str, Enum):
    PRE = "pre"
    ANCHOR = "anchor"
    MODEL = "model"

    @property
    def label(self) -> str:
        if self == ModelPhase.PRE:
            return "Growth"
        if self == ModelPhase.ANCHOR:
            return "Anchor"
        return "Decay"


class RiskSeverity(str, Enum):
    SAFE = "safe"
    ELEVATED = "elevated"
    DANGER = "danger"
