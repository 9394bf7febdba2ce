"""Seeded Monte Carlo engines."""

from risk_engine.simulator.cancel import CancelToken, SimulationCancelled
from risk_engine.simulator.metrics import compute_heavy_metrics
from risk_engine.simulator.milestones import best_case_wins, compute_milestones
from risk_engine.simulator.models import (
    DrawdownStats,
    FirstPassage,
    FullMapRow,
    MetricsResult,
    MilestoneResult,
    RecoveryStats,
    TerminalStats,
    TrajectoryPoint,
)
from risk_engine.simulator.paths import first_passage, simulate_batch, simulate_path, step_equity
from risk_engine.simulator.prng import Mulberry32
from risk_engine.simulator.stats import max_drawdown, percentile

__all__ = [
    "CancelToken",
    "DrawdownStats",
    "FirstPassage",
    "FullMapRow",
    "MetricsResult",
    "MilestoneResult",
    "Mulberry32",
    "RecoveryStats",
    "SimulationCancelled",
    "TerminalStats",
    "TrajectoryPoint",
    "best_case_wins",
    "compute_heavy_metrics",
    "compute_milestones",
    "first_passage",
    "max_drawdown",
    "percentile",
    "simulate_batch",
    "simulate_path",
    "step_equity",
]
