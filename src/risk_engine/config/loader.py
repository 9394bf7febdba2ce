"""Load and hash engine configuration files."""

from __future__ import annotations

import hashlib
from dataclasses import asdict
from pathlib import Path
from typing import Any

import yaml

from risk_engine.config.models import (
    EngineConfig,
    EquityLevel,
    MetricsConfig,
    MilestoneConfig,
    SettingsConfig,
)


def load_config(path: str | Path) -> EngineConfig:
    path = Path(path)
    data = _load_yaml(path)

    name = str(_require(data, "name"))
    version = str(_require(data, "version"))
    run_id_prefix = str(data.get("run_id_prefix", name))

    return EngineConfig(
        name=name,
        version=version,
        run_id_prefix=run_id_prefix,
        metrics=_parse_metrics(data.get("metrics", {})),
        milestones=_parse_milestones(data.get("milestones", {})),
        settings=_parse_settings(data.get("settings", {})),
        audit_log_path=str(data.get("audit_log_path", "runtime/audit.log")),
    )


def compute_config_hash(path: str | Path) -> str:
    path = Path(path)
    return hashlib.sha256(path.read_bytes()).hexdigest()


def serialize_config(config: EngineConfig) -> dict[str, Any]:
    return asdict(config)


def _load_yaml(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Missing required config key: {key}")
    return data[key]


def _positive_int(data: dict[str, Any], key: str, default: int) -> int:
    value = int(data.get(key, default))
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


def _parse_levels(raw: Any, key: str) -> tuple[EquityLevel, ...]:
    if not isinstance(raw, list) or not raw:
        raise ValueError(f"{key} must be a non-empty list")
    levels = []
    for item in raw:
        if isinstance(item, dict):
            equity = float(_require(item, "equity"))
            label = str(item.get("label", f"${equity:,.0f}"))
        else:
            equity = float(item)
            label = f"${equity:,.0f}"
        if equity <= 0:
            raise ValueError(f"{key} entries must be positive, got {equity}")
        levels.append(EquityLevel(equity=equity, label=label))
    return tuple(levels)


def _parse_metrics(data: dict[str, Any]) -> MetricsConfig:
    defaults = MetricsConfig()
    reference_levels = defaults.reference_levels
    if "reference_levels" in data:
        reference_levels = _parse_levels(data["reference_levels"], "reference_levels")
    streaks = tuple(int(n) for n in data.get("recovery_streaks", defaults.recovery_streaks))
    return MetricsConfig(
        path_count=_positive_int(data, "path_count", defaults.path_count),
        step_count=_positive_int(data, "step_count", defaults.step_count),
        sample_every=_positive_int(data, "sample_every", defaults.sample_every),
        primary_seed=int(data.get("primary_seed", defaults.primary_seed)),
        legacy_seed=int(data.get("legacy_seed", defaults.legacy_seed)),
        fixed_seed=int(data.get("fixed_seed", defaults.fixed_seed)),
        survival_path_count=_positive_int(data, "survival_path_count", defaults.survival_path_count),
        survival_step_count=_positive_int(data, "survival_step_count", defaults.survival_step_count),
        survival_seed=int(data.get("survival_seed", defaults.survival_seed)),
        survival_start_equity=float(data.get("survival_start_equity", defaults.survival_start_equity)),
        survival_target_equity=float(data.get("survival_target_equity", defaults.survival_target_equity)),
        recovery_streaks=streaks,
        recovery_target_ratio=float(data.get("recovery_target_ratio", defaults.recovery_target_ratio)),
        recovery_win_cap=_positive_int(data, "recovery_win_cap", defaults.recovery_win_cap),
        reference_levels=reference_levels,
    )


def _parse_milestones(data: dict[str, Any]) -> MilestoneConfig:
    defaults = MilestoneConfig()
    thresholds = defaults.thresholds
    if "thresholds" in data:
        thresholds = _parse_levels(data["thresholds"], "thresholds")
    return MilestoneConfig(
        path_count=_positive_int(data, "path_count", defaults.path_count),
        step_count=_positive_int(data, "step_count", defaults.step_count),
        comparison_seed_offset=int(data.get("comparison_seed_offset", defaults.comparison_seed_offset)),
        best_case_cap=_positive_int(data, "best_case_cap", defaults.best_case_cap),
        min_crossings=int(data.get("min_crossings", defaults.min_crossings)),
        thresholds=thresholds,
    )


def _parse_settings(data: dict[str, Any]) -> SettingsConfig:
    defaults = SettingsConfig()
    win_rate_pct = float(data.get("win_rate_pct", defaults.win_rate_pct))
    if not 0.0 <= win_rate_pct <= 100.0:
        raise ValueError(f"win_rate_pct must be within [0, 100], got {win_rate_pct}")
    reward_ratio = float(data.get("reward_ratio", defaults.reward_ratio))
    if reward_ratio <= 0:
        raise ValueError(f"reward_ratio must be positive, got {reward_ratio}")
    initial_equity = float(data.get("initial_equity", defaults.initial_equity))
    if initial_equity <= 0:
        raise ValueError(f"initial_equity must be positive, got {initial_equity}")
    return SettingsConfig(
        win_rate_pct=win_rate_pct,
        reward_ratio=reward_ratio,
        initial_equity=initial_equity,
        milestone_seed=int(data.get("milestone_seed", defaults.milestone_seed)),
    )
