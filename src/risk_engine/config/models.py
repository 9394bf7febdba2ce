"""Configuration models for reproducible projection runs."""

from __future__ import annotations

from dataclasses import dataclass, field

from risk_engine.risk.models import ANCHOR_EQUITY, FULL_RISK_CEILING


@dataclass(frozen=True)
class EquityLevel:
    equity: float
    label: str


def _reference_levels() -> tuple[EquityLevel, ...]:
    return (
        EquityLevel(20000, "$20K"),
        EquityLevel(50000, "$50K"),
        EquityLevel(87500, "$87.5K"),
        EquityLevel(100000, "$100K"),
        EquityLevel(250000, "$250K"),
        EquityLevel(500000, "$500K"),
        EquityLevel(1000000, "$1M"),
        EquityLevel(3000000, "$3M"),
        EquityLevel(5000000, "$5M"),
        EquityLevel(10000000, "$10M"),
    )


def _milestone_levels() -> tuple[EquityLevel, ...]:
    return (
        EquityLevel(100000, "$100K"),
        EquityLevel(250000, "$250K"),
        EquityLevel(500000, "$500K"),
        EquityLevel(1000000, "$1M"),
        EquityLevel(4000000, "$4M"),
        EquityLevel(10000000, "$10M"),
    )


@dataclass(frozen=True)
class MetricsConfig:
    path_count: int = 500
    step_count: int = 100
    sample_every: int = 2
    primary_seed: int = 42
    legacy_seed: int = 42
    fixed_seed: int = 42
    survival_path_count: int = 2000
    survival_step_count: int = 200
    survival_seed: int = 777
    survival_start_equity: float = FULL_RISK_CEILING
    survival_target_equity: float = ANCHOR_EQUITY
    recovery_streaks: tuple[int, ...] = (3, 5)
    recovery_target_ratio: float = 0.999
    recovery_win_cap: int = 500
    reference_levels: tuple[EquityLevel, ...] = field(default_factory=_reference_levels)


@dataclass(frozen=True)
class MilestoneConfig:
    path_count: int = 500
    step_count: int = 400
    comparison_seed_offset: int = 111
    best_case_cap: int = 9999
    min_crossings: int = 3
    thresholds: tuple[EquityLevel, ...] = field(default_factory=_milestone_levels)


@dataclass(frozen=True)
class SettingsConfig:
    win_rate_pct: float = 60.0
    reward_ratio: float = 1.5
    initial_equity: float = 20000.0
    milestone_seed: int = 555


@dataclass(frozen=True)
class EngineConfig:
    name: str = "risk-engine"
    version: str = "1"
    run_id_prefix: str = "risk-engine"
    metrics: MetricsConfig = MetricsConfig()
    milestones: MilestoneConfig = MilestoneConfig()
    settings: SettingsConfig = SettingsConfig()
    audit_log_path: str = "runtime/audit.log"
