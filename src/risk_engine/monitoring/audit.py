"""Append-only audit log of projection runs."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


class AuditLog:
    """JSONL trail with one record per projection, tagged by run and inputs."""

    def __init__(self, path: str | Path, run_id: Optional[str] = None, config_hash: Optional[str] = None) -> None:
        self.path = Path(path)
        self.run_id = run_id
        self.config_hash = config_hash
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, event: str, payload: dict[str, Any], projection_key: Optional[str] = None) -> None:
        record = {
            "recorded_at_utc": datetime.now(timezone.utc).isoformat(),
            "run_id": self.run_id,
            "config_hash": self.config_hash,
            "projection_key": projection_key,
            "event": event,
            "payload": payload,
        }
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, default=str) + "\n")

    def read(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as handle:
            return [json.loads(line) for line in handle if line.strip()]

    def for_projection(self, projection_key: str) -> list[dict[str, Any]]:
        """Records written for one set of engine inputs, oldest first."""
        return [record for record in self.read() if record.get("projection_key") == projection_key]
