"""Monte Carlo comparison of the three sizing models."""

from __future__ import annotations

from typing import Optional

from risk_engine.config.models import EquityLevel, MetricsConfig
from risk_engine.logger import get_logger, log_performance
from risk_engine.risk.inputs import EngineInputs
from risk_engine.risk.models import EQUITY_FLOOR
from risk_engine.risk.sizing import (
    SizingModel,
    consecutive_losses_to_ruin,
    equity_after_streak,
    geometric_growth_rate,
    log_equity,
    phase_for,
    risk_fraction_primary,
)
from risk_engine.simulator.cancel import CancelToken
from risk_engine.simulator.models import (
    DrawdownStats,
    FullMapRow,
    MetricsResult,
    RecoveryStats,
    TerminalStats,
    TrajectoryPoint,
)
from risk_engine.simulator.paths import first_passage, simulate_batch
from risk_engine.simulator.prng import Mulberry32
from risk_engine.simulator.stats import max_drawdown, percentile

logger = get_logger(__name__)

Paths = list[list[float]]


def compute_heavy_metrics(
    equity: float,
    win_rate_pct: float,
    reward_ratio: float,
    config: Optional[MetricsConfig] = None,
    cancel: Optional[CancelToken] = None,
) -> MetricsResult:
    """Simulate every sizing model from ``equity`` and summarize the outcomes.

    Seeds come from ``config`` and never from hidden state, so identical
    arguments give identical results.
    """
    config = config or MetricsConfig()
    inputs = EngineInputs.from_percent(equity, win_rate_pct, reward_ratio)

    with log_performance(
        logger,
        "heavy metrics",
        equity=inputs.equity,
        win_rate=inputs.win_rate,
        reward_ratio=inputs.reward_ratio,
    ):
        seeds = {
            SizingModel.FIXED_FRACTION: config.fixed_seed,
            SizingModel.CUBE_ROOT_DECAY: config.legacy_seed,
            SizingModel.POWER_DECAY: config.primary_seed,
        }
        batches: dict[SizingModel, Paths] = {}
        for model, seed in seeds.items():
            batches[model] = simulate_batch(
                inputs.equity,
                model,
                seed,
                inputs.win_rate,
                inputs.reward_ratio,
                config.path_count,
                config.step_count,
                cancel=cancel,
            )
            logger.debug("batch simulated", model=model.value, seed=seed, paths=config.path_count)

        result = MetricsResult(
            trajectory=_trajectory(batches, config.step_count, config.sample_every),
            terminal={model: _terminal(paths) for model, paths in batches.items()},
            drawdown={
                model: _drawdown(batches[model])
                for model in (SizingModel.FIXED_FRACTION, SizingModel.POWER_DECAY)
            },
            full_map=[_full_map_row(level, inputs) for level in config.reference_levels],
            survival_pct=_survival_pct(inputs, config, cancel),
            recovery=[
                _recovery(inputs, model, losses, config)
                for losses in config.recovery_streaks
                for model in (
                    SizingModel.FIXED_FRACTION,
                    SizingModel.CUBE_ROOT_DECAY,
                    SizingModel.POWER_DECAY,
                )
            ],
        )
    return result


def _column(paths: Paths, step: int) -> list[float]:
    return [path[step] for path in paths]


def _trajectory(batches: dict[SizingModel, Paths], step_count: int, sample_every: int) -> list[TrajectoryPoint]:
    points = []
    for step in range(0, step_count + 1, sample_every):
        primary = _column(batches[SizingModel.POWER_DECAY], step)
        points.append(
            TrajectoryPoint(
                step=step,
                fixed_median=log_equity(percentile(_column(batches[SizingModel.FIXED_FRACTION], step), 0.5)),
                legacy_median=log_equity(percentile(_column(batches[SizingModel.CUBE_ROOT_DECAY], step), 0.5)),
                primary_median=log_equity(percentile(primary, 0.5)),
                primary_p10=log_equity(percentile(primary, 0.1)),
                primary_p25=log_equity(percentile(primary, 0.25)),
                primary_p75=log_equity(percentile(primary, 0.75)),
                primary_p90=log_equity(percentile(primary, 0.9)),
            )
        )
    return points


def _terminal(paths: Paths) -> TerminalStats:
    final = [path[-1] for path in paths]
    return TerminalStats(
        median=percentile(final, 0.5),
        p25=percentile(final, 0.25),
        p75=percentile(final, 0.75),
    )


def _drawdown(paths: Paths) -> DrawdownStats:
    drawdowns = [max_drawdown(path) for path in paths]
    return DrawdownStats(median=percentile(drawdowns, 0.5), p90=percentile(drawdowns, 0.9))


def _pct_change(start: float, end: float) -> float:
    return (end - start) / start * 100.0


def _full_map_row(level: EquityLevel, inputs: EngineInputs) -> FullMapRow:
    equity = level.equity
    fraction = risk_fraction_primary(equity)
    dollar_risk = fraction * equity
    after_1_loss = max(EQUITY_FLOOR, equity * (1.0 - fraction))
    after_3_losses = equity_after_streak(equity, 3, False, inputs.reward_ratio)
    after_3_wins = equity_after_streak(equity, 3, True, inputs.reward_ratio)
    return FullMapRow(
        equity=equity,
        label=level.label,
        phase=phase_for(equity),
        risk_fraction=fraction,
        dollar_risk=dollar_risk,
        projected_gain=dollar_risk * inputs.reward_ratio,
        equity_after_1_loss=after_1_loss,
        equity_after_3_losses=after_3_losses,
        equity_after_3_wins=after_3_wins,
        drawdown_1_loss_pct=-_pct_change(equity, after_1_loss),
        drawdown_3_losses_pct=-_pct_change(equity, after_3_losses),
        gain_3_wins_pct=_pct_change(equity, after_3_wins),
        growth_rate=geometric_growth_rate(fraction, inputs.win_rate, inputs.reward_ratio),
        losses_to_ruin=consecutive_losses_to_ruin(equity),
    )


def _survival_pct(inputs: EngineInputs, config: MetricsConfig, cancel: Optional[CancelToken]) -> float:
    """Share of accounts starting at the survival floor that reach the target before ruin."""
    rng = Mulberry32(config.survival_seed)
    target = config.survival_target_equity
    thresholds = (target,)
    reached = 0
    for _ in range(config.survival_path_count):
        if cancel is not None:
            cancel.raise_if_cancelled()
        crossings = first_passage(
            config.survival_start_equity,
            SizingModel.POWER_DECAY,
            rng,
            inputs.win_rate,
            inputs.reward_ratio,
            config.survival_step_count,
            thresholds,
            stop_at=target,
        )
        if target in crossings:
            reached += 1
    return reached / config.survival_path_count * 100.0


def _recovery(inputs: EngineInputs, model: SizingModel, losses: int, config: MetricsConfig) -> RecoveryStats:
    start = inputs.equity
    trough = equity_after_streak(start, losses, False, inputs.reward_ratio, model=model)
    drawdown_pct = 100.0 if trough <= EQUITY_FLOOR else -_pct_change(start, trough)
    return RecoveryStats(
        model=model,
        losses=losses,
        drawdown_pct=drawdown_pct,
        wins_to_recover=_wins_to_recover(
            trough,
            start * config.recovery_target_ratio,
            inputs.reward_ratio,
            config.recovery_win_cap,
        ),
    )


def _wins_to_recover(trough: float, target: float, reward_ratio: float, cap: int) -> int:
    # A wiped account never recovers.
    if trough <= EQUITY_FLOOR:
        return cap
    fraction_fn = SizingModel.POWER_DECAY.fraction_fn
    equity = trough
    wins = 0
    while equity < target and wins < cap:
        equity *= 1.0 + fraction_fn(equity) * reward_ratio
        wins += 1
    return wins
