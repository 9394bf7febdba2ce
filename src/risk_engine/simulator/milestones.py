"""Milestone roadmap: deterministic best case plus simulated first-passage times."""

from __future__ import annotations

import math
from typing import Callable, Optional

from risk_engine.config.models import MilestoneConfig
from risk_engine.logger import get_logger, log_performance
from risk_engine.risk.inputs import EngineInputs
from risk_engine.risk.sizing import SizingModel
from risk_engine.simulator.cancel import CancelToken
from risk_engine.simulator.models import FirstPassage, MilestoneResult
from risk_engine.simulator.paths import first_passage
from risk_engine.simulator.prng import Mulberry32
from risk_engine.simulator.stats import percentile

logger = get_logger(__name__)

PassageLookup = Callable[[float], FirstPassage]


def compute_milestones(
    equity: float,
    win_rate_pct: float,
    reward_ratio: float,
    seed: int,
    config: Optional[MilestoneConfig] = None,
    cancel: Optional[CancelToken] = None,
) -> list[MilestoneResult]:
    """Project how soon each milestone is reached from ``equity``.

    The primary model runs on ``seed`` and the fixed-fraction comparison on
    ``seed + comparison_seed_offset``. Changing the seed resamples the
    simulated statistics; best-case win counts depend only on equity and
    reward ratio.
    """
    config = config or MilestoneConfig()
    inputs = EngineInputs.from_percent(equity, win_rate_pct, reward_ratio)
    seed = int(seed)

    with log_performance(logger, "milestones", equity=inputs.equity, seed=seed):
        primary = _run_passages(inputs, SizingModel.POWER_DECAY, seed, config, cancel)
        fixed = _run_passages(
            inputs,
            SizingModel.FIXED_FRACTION,
            seed + config.comparison_seed_offset,
            config,
            cancel,
        )
        results = []
        for level in config.thresholds:
            target = level.equity
            results.append(
                MilestoneResult(
                    threshold=target,
                    label=level.label,
                    achieved=inputs.equity >= target,
                    progress_pct=min(100.0, inputs.equity / target * 100.0),
                    best_case_wins_primary=best_case_wins(
                        inputs.equity, target, inputs.reward_ratio, SizingModel.POWER_DECAY, config.best_case_cap
                    ),
                    best_case_wins_fixed=best_case_wins(
                        inputs.equity, target, inputs.reward_ratio, SizingModel.FIXED_FRACTION, config.best_case_cap
                    ),
                    primary=primary(target),
                    fixed=fixed(target),
                )
            )
    return results


def best_case_wins(
    equity: float,
    target: float,
    reward_ratio: float,
    model: SizingModel = SizingModel.POWER_DECAY,
    cap: int = 9999,
) -> int:
    """Consecutive wins needed to reach ``target`` with no losses; ``cap`` means unreachable."""
    if equity >= target:
        return 0
    fraction_fn = model.fraction_fn
    wins = 0
    while equity < target and wins < cap:
        equity *= 1.0 + fraction_fn(equity) * reward_ratio
        wins += 1
    return wins


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _run_passages(
    inputs: EngineInputs,
    model: SizingModel,
    seed: int,
    config: MilestoneConfig,
    cancel: Optional[CancelToken],
) -> PassageLookup:
    rng = Mulberry32(seed)
    thresholds = tuple(level.equity for level in config.thresholds)
    crossings = []
    for _ in range(config.path_count):
        if cancel is not None:
            cancel.raise_if_cancelled()
        crossings.append(
            first_passage(
                inputs.equity,
                model,
                rng,
                inputs.win_rate,
                inputs.reward_ratio,
                config.step_count,
                thresholds,
            )
        )
    logger.debug("passages simulated", model=model.value, seed=seed, paths=config.path_count)

    def lookup(target: float) -> FirstPassage:
        if inputs.equity >= target:
            return FirstPassage(reach_pct=100.0, median=0, p25=0, p75=0)
        times = [float(path[target]) for path in crossings if target in path]
        reach_pct = len(times) / config.path_count * 100.0
        if len(times) <= config.min_crossings:
            return FirstPassage(reach_pct=reach_pct, median=None, p25=None, p75=None)
        return FirstPassage(
            reach_pct=reach_pct,
            median=_round_half_up(percentile(times, 0.5)),
            p25=_round_half_up(percentile(times, 0.25)),
            p75=_round_half_up(percentile(times, 0.75)),
        )

    return lookup
