"""Performance statistics over the trade ledger."""

from __future__ import annotations

import math
from typing import Callable, Iterable, Sequence

from risk_engine.journal.models import (
    AdvancedMetrics,
    TagAnalytics,
    TagSummary,
    TimeAnalytics,
    TimeBucket,
    TradeRecord,
)
from risk_engine.risk.models import EQUITY_FLOOR


def current_equity(trades: Sequence[TradeRecord], initial_equity: float) -> float:
    if not trades:
        return max(initial_equity, EQUITY_FLOOR)
    return max(trades[-1].equity_after, EQUITY_FLOOR)


def peak_equity(trades: Sequence[TradeRecord], initial_equity: float) -> float:
    peak = initial_equity
    for trade in trades:
        peak = max(peak, trade.equity_after)
    return peak


def _win_pct(trades: Sequence[TradeRecord]) -> float:
    if not trades:
        return 0.0
    return sum(1 for trade in trades if trade.is_win) / len(trades) * 100.0


def calc_advanced_metrics(trades: Sequence[TradeRecord]) -> AdvancedMetrics:
    if not trades:
        return AdvancedMetrics()

    wins = [trade.pnl for trade in trades if trade.is_win]
    losses = [trade.pnl for trade in trades if not trade.is_win]
    avg_win = sum(wins) / len(wins) if wins else 0.0
    avg_loss = abs(sum(losses)) / len(losses) if losses else 0.0
    if avg_loss > 0:
        payoff_ratio = avg_win / avg_loss
    else:
        payoff_ratio = math.inf if avg_win > 0 else 0.0

    returns = [trade.pnl / trade.equity_before if trade.equity_before > 0 else 0.0 for trade in trades]
    mean_return = sum(returns) / len(returns)
    variance = sum((value - mean_return) ** 2 for value in returns) / len(returns)
    stddev = math.sqrt(variance)
    sharpe = mean_return / stddev if stddev > 0 else 0.0

    downside = [value for value in returns if value < 0]
    downside_dev = math.sqrt(sum(value**2 for value in downside) / len(downside)) if downside else 0.0
    sortino = mean_return / downside_dev if downside_dev > 0 else 0.0

    initial = trades[0].equity_before
    final = trades[-1].equity_after
    total_return = (final - initial) / initial if initial > 0 else 0.0
    peak = initial
    max_dd = 0.0
    for trade in trades:
        peak = max(peak, trade.equity_after)
        if peak > 0:
            max_dd = max(max_dd, (peak - trade.equity_after) / peak)
    calmar = total_return / max_dd if max_dd > 0 else 0.0

    holds = [trade.hold_days for trade in trades if trade.hold_days is not None]
    avg_hold = sum(holds) / len(holds) if holds else 0.0

    max_wins = max_losses = run_wins = run_losses = 0
    for trade in trades:
        if trade.is_win:
            run_wins += 1
            run_losses = 0
            max_wins = max(max_wins, run_wins)
        else:
            run_losses += 1
            run_wins = 0
            max_losses = max(max_losses, run_losses)

    return AdvancedMetrics(
        avg_win=avg_win,
        avg_loss=avg_loss,
        payoff_ratio=payoff_ratio,
        sharpe_ratio=sharpe,
        sortino_ratio=sortino,
        calmar_ratio=calmar,
        avg_hold_days=avg_hold,
        long_win_pct=_win_pct([trade for trade in trades if trade.direction == "long"]),
        short_win_pct=_win_pct([trade for trade in trades if trade.direction == "short"]),
        max_consecutive_wins=max_wins,
        max_consecutive_losses=max_losses,
    )


def _summarize_tags(trades: Sequence[TradeRecord], tags_of: Callable[[TradeRecord], Iterable[str]]) -> list[TagSummary]:
    totals: dict[str, list[float]] = {}
    for trade in trades:
        for tag in tags_of(trade):
            bucket = totals.setdefault(tag, [0.0, 0, 0])
            bucket[0] += trade.pnl
            bucket[1] += 1
            if trade.is_win:
                bucket[2] += 1
    summaries = [
        TagSummary(tag=tag, pnl=pnl, count=int(count), win_rate_pct=wins / count * 100.0)
        for tag, (pnl, count, wins) in totals.items()
    ]
    return sorted(summaries, key=lambda item: item.pnl, reverse=True)


def calc_tag_analytics(trades: Sequence[TradeRecord]) -> TagAnalytics:
    """P&L and win rate per setup, emotion and mistake tag, best performer first."""
    return TagAnalytics(
        setup=_summarize_tags(trades, lambda trade: trade.setup_tags),
        emotion=_summarize_tags(trades, lambda trade: trade.emotion_tags),
        mistakes=_summarize_tags(trades, lambda trade: trade.mistakes),
    )


DAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _bucket(key: str, trades: list[TradeRecord]) -> TimeBucket:
    return TimeBucket(
        key=key,
        pnl=sum(trade.pnl for trade in trades),
        count=len(trades),
        wins=sum(1 for trade in trades if trade.is_win),
    )


def calc_time_analytics(trades: Sequence[TradeRecord]) -> TimeAnalytics:
    """P&L by weekday (Sunday first, all seven days) and by entry hour (hours with trades only)."""
    by_day: list[list[TradeRecord]] = [[] for _ in DAY_LABELS]
    by_hour: list[list[TradeRecord]] = [[] for _ in range(24)]
    for trade in trades:
        traded_on = trade.trade_date
        if traded_on is not None:
            # date.weekday() counts from Monday
            by_day[(traded_on.weekday() + 1) % 7].append(trade)
        if trade.entry_hour is not None and 0 <= trade.entry_hour < 24:
            by_hour[trade.entry_hour].append(trade)
    return TimeAnalytics(
        by_day=[_bucket(label, bucket) for label, bucket in zip(DAY_LABELS, by_day)],
        by_hour=[_bucket(f"{hour:02d}", bucket) for hour, bucket in enumerate(by_hour) if bucket],
    )
