"""Run identity for projection runs."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from risk_engine.config.loader import compute_config_hash


@dataclass(frozen=True)
class RunContext:
    run_id: str
    config_path: Optional[Path]
    config_hash: str
    started_at: datetime


def projection_key(equity: float, win_rate_pct: float, reward_ratio: float, seed: int) -> str:
    """Stable key for memoizing engine output; the engines are pure in these inputs."""
    payload = json.dumps(
        [float(equity), float(win_rate_pct), float(reward_ratio), int(seed)],
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def create_run_context(
    config_path: Optional[str | Path],
    run_id_prefix: str,
    run_id: Optional[str] = None,
) -> RunContext:
    path = Path(config_path) if config_path is not None else None
    config_hash = compute_config_hash(path) if path is not None else "defaults"
    started_at = datetime.now(timezone.utc)
    if run_id is None:
        stamp = started_at.strftime("%Y%m%dT%H%M%SZ")
        run_id = f"{run_id_prefix}-{stamp}-{config_hash[:8]}"
    return RunContext(
        run_id=run_id,
        config_path=path,
        config_hash=config_hash,
        started_at=started_at,
    )
