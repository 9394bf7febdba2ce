from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from risk_engine.config import EngineConfig, load_config
from risk_engine.logger import get_logger, setup_logging
from risk_engine.monitoring import AuditLog
from risk_engine.risk import SizingModel, dollar_risk_primary, risk_fraction
from risk_engine.runtime import create_run_context, projection_key
from risk_engine.simulator import compute_heavy_metrics, compute_milestones

logger = get_logger("run_projection")


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(getattr(key, "value", key)): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return getattr(value, "value", value)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default=None)
    parser.add_argument("--output", required=True)
    parser.add_argument("--equity", type=float, default=None)
    parser.add_argument("--win-rate", type=float, default=None, help="Win rate in percent")
    parser.add_argument("--reward-ratio", type=float, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--json-logs", action="store_true")
    args = parser.parse_args()

    setup_logging(args.log_level, json_output=args.json_logs)

    config_path: Optional[Path] = Path(args.config) if args.config else None
    config = load_config(config_path) if config_path else EngineConfig()
    context = create_run_context(config_path, config.run_id_prefix)

    settings = config.settings
    equity = args.equity if args.equity is not None else settings.initial_equity
    win_rate_pct = args.win_rate if args.win_rate is not None else settings.win_rate_pct
    reward_ratio = args.reward_ratio if args.reward_ratio is not None else settings.reward_ratio
    seed = args.seed if args.seed is not None else settings.milestone_seed

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info("projection started", run_id=context.run_id, equity=equity, seed=seed)
    metrics = compute_heavy_metrics(equity, win_rate_pct, reward_ratio, config=config.metrics)
    milestones = compute_milestones(equity, win_rate_pct, reward_ratio, seed, config=config.milestones)
    key = projection_key(equity, win_rate_pct, reward_ratio, seed)

    report = {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "run_id": context.run_id,
        "config_path": str(config_path) if config_path else None,
        "config_hash": context.config_hash,
        "projection_key": key,
        "inputs": {
            "equity": equity,
            "win_rate_pct": win_rate_pct,
            "reward_ratio": reward_ratio,
            "seed": seed,
        },
        "headline": {
            "risk_fraction": {model.value: risk_fraction(model, equity) for model in SizingModel},
            "dollar_risk": dollar_risk_primary(equity),
            "survival_pct": metrics.survival_pct,
        },
        "metrics": _plain(asdict(metrics)),
        "milestones": [_plain(asdict(milestone)) for milestone in milestones],
    }

    output_path.write_text(json.dumps(report, indent=2, default=str), encoding="utf-8")

    audit = AuditLog(config.audit_log_path, run_id=context.run_id, config_hash=context.config_hash)
    audit.log(
        "projection",
        {
            "output": str(output_path),
            "equity": equity,
            "win_rate_pct": win_rate_pct,
            "reward_ratio": reward_ratio,
            "seed": seed,
            "survival_pct": metrics.survival_pct,
        },
        projection_key=key,
    )
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
