"""Position sizing model and seeded Monte Carlo projections."""

from risk_engine.risk import SizingModel, risk_fraction
from risk_engine.simulator import compute_heavy_metrics, compute_milestones

__all__ = [
    "SizingModel",
    "compute_heavy_metrics",
    "compute_milestones",
    "risk_fraction",
]
