"""Single-step and batch equity path generation shared by both engines."""

from __future__ import annotations

from typing import Callable, Optional

from risk_engine.risk.models import EQUITY_CEILING, EQUITY_FLOOR
from risk_engine.risk.sizing import SizingModel
from risk_engine.simulator.cancel import CancelToken
from risk_engine.simulator.prng import Mulberry32

FractionFn = Callable[[float], float]


def step_equity(
    equity: float,
    fraction_fn: FractionFn,
    draw: float,
    win_rate: float,
    reward_ratio: float,
) -> float:
    """Apply one trade outcome; a win iff ``draw < win_rate``."""
    fraction = fraction_fn(equity)
    if draw < win_rate:
        equity = equity * (1.0 + fraction * reward_ratio)
    else:
        equity = equity * (1.0 - fraction)
    return min(max(equity, EQUITY_FLOOR), EQUITY_CEILING)


def simulate_path(
    start_equity: float,
    model: SizingModel,
    rng: Mulberry32,
    win_rate: float,
    reward_ratio: float,
    step_count: int,
) -> list[float]:
    fraction_fn = model.fraction_fn
    equity = min(max(start_equity, EQUITY_FLOOR), EQUITY_CEILING)
    path = [equity]
    for _ in range(step_count):
        equity = step_equity(equity, fraction_fn, rng(), win_rate, reward_ratio)
        path.append(equity)
    return path


def simulate_batch(
    start_equity: float,
    model: SizingModel,
    seed: int,
    win_rate: float,
    reward_ratio: float,
    path_count: int,
    step_count: int,
    cancel: Optional[CancelToken] = None,
) -> list[list[float]]:
    """Simulate ``path_count`` paths drawn in order from one stream seeded with ``seed``."""
    rng = Mulberry32(seed)
    paths: list[list[float]] = []
    for _ in range(path_count):
        if cancel is not None:
            cancel.raise_if_cancelled()
        paths.append(simulate_path(start_equity, model, rng, win_rate, reward_ratio, step_count))
    return paths


def first_passage(
    start_equity: float,
    model: SizingModel,
    rng: Mulberry32,
    win_rate: float,
    reward_ratio: float,
    max_steps: int,
    thresholds: tuple[float, ...],
    stop_at: Optional[float] = None,
) -> dict[float, int]:
    """Step index at which each threshold is first reached.

    Thresholds met at the start map to 0. The path halts on the ruin floor,
    or as soon as equity reaches ``stop_at``.
    """
    fraction_fn = model.fraction_fn
    equity = min(max(start_equity, EQUITY_FLOOR), EQUITY_CEILING)
    crossings = {threshold: 0 for threshold in thresholds if equity >= threshold}
    for step in range(1, max_steps + 1):
        equity = step_equity(equity, fraction_fn, rng(), win_rate, reward_ratio)
        for threshold in thresholds:
            if threshold not in crossings and equity >= threshold:
                crossings[threshold] = step
        if equity <= EQUITY_FLOOR:
            break
        if stop_at is not None and equity >= stop_at:
            break
    return crossings
