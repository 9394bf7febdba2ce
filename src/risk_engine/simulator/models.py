"""Simulation result structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from risk_engine.risk.models import ModelPhase
from risk_engine.risk.sizing import SizingModel


@dataclass(frozen=True)
class TrajectoryPoint:
    """Log10 equity at one sampled step."""

    step: int
    fixed_median: float
    legacy_median: float
    primary_median: float
    primary_p10: float
    primary_p25: float
    primary_p75: float
    primary_p90: float

    @property
    def band_10_90(self) -> float:
        return self.primary_p90 - self.primary_p10

    @property
    def band_25_75(self) -> float:
        return self.primary_p75 - self.primary_p25


@dataclass(frozen=True)
class TerminalStats:
    median: float
    p25: float
    p75: float


@dataclass(frozen=True)
class DrawdownStats:
    median: float
    p90: float


@dataclass(frozen=True)
class FullMapRow:
    equity: float
    label: str
    phase: ModelPhase
    risk_fraction: float
    dollar_risk: float
    projected_gain: float
    equity_after_1_loss: float
    equity_after_3_losses: float
    equity_after_3_wins: float
    drawdown_1_loss_pct: float
    drawdown_3_losses_pct: float
    gain_3_wins_pct: float
    growth_rate: float
    losses_to_ruin: int


@dataclass(frozen=True)
class RecoveryStats:
    model: SizingModel
    losses: int
    drawdown_pct: float
    wins_to_recover: int


@dataclass(frozen=True)
class MetricsResult:
    trajectory: list[TrajectoryPoint]
    terminal: dict[SizingModel, TerminalStats]
    drawdown: dict[SizingModel, DrawdownStats]
    full_map: list[FullMapRow]
    survival_pct: float
    recovery: list[RecoveryStats]

    def recovery_for(self, model: SizingModel, losses: int) -> Optional[RecoveryStats]:
        for entry in self.recovery:
            if entry.model == model and entry.losses == losses:
                return entry
        return None


@dataclass(frozen=True)
class FirstPassage:
    """Crossing statistics for one threshold; timings are ``None`` when too few paths cross."""

    reach_pct: float
    median: Optional[int]
    p25: Optional[int]
    p75: Optional[int]


@dataclass(frozen=True)
class MilestoneResult:
    threshold: float
    label: str
    achieved: bool
    progress_pct: float
    best_case_wins_primary: int
    best_case_wins_fixed: int
    primary: FirstPassage
    fixed: FirstPassage
