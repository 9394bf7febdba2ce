"""Cooperative cancellation for long simulation batches."""

from __future__ import annotations

import threading


class SimulationCancelled(RuntimeError):
    pass


class CancelToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SimulationCancelled("Simulation cancelled")
