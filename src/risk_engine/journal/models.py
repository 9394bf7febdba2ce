"""Closed-trade records supplied by the trade ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class TradeRecord:
    pnl: float
    equity_before: float
    equity_after: float
    direction: str = "long"  # "long" or "short"
    opened: Optional[date] = None
    closed: Optional[date] = None
    risk_dollars: float = 0.0
    setup_tags: tuple[str, ...] = field(default_factory=tuple)
    emotion_tags: tuple[str, ...] = field(default_factory=tuple)
    mistakes: tuple[str, ...] = field(default_factory=tuple)
    entry_hour: Optional[int] = None

    @property
    def is_win(self) -> bool:
        return self.pnl > 0

    @property
    def r_multiple(self) -> float:
        if self.risk_dollars <= 0:
            return 0.0
        return self.pnl / self.risk_dollars

    @property
    def hold_days(self) -> Optional[float]:
        if self.opened is None or self.closed is None:
            return None
        return float(max(0, (self.closed - self.opened).days))

    @property
    def trade_date(self) -> Optional[date]:
        return self.closed if self.closed is not None else self.opened


@dataclass(frozen=True)
class AdvancedMetrics:
    avg_win: float = 0.0
    avg_loss: float = 0.0
    payoff_ratio: float = 0.0
    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    calmar_ratio: float = 0.0
    avg_hold_days: float = 0.0
    long_win_pct: float = 0.0
    short_win_pct: float = 0.0
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0


@dataclass(frozen=True)
class TagSummary:
    tag: str
    pnl: float
    count: int
    win_rate_pct: float


@dataclass(frozen=True)
class TagAnalytics:
    setup: list[TagSummary] = field(default_factory=list)
    emotion: list[TagSummary] = field(default_factory=list)
    mistakes: list[TagSummary] = field(default_factory=list)


@dataclass(frozen=True)
class TimeBucket:
    """P&L for one weekday or entry hour."""

    key: str
    pnl: float = 0.0
    count: int = 0
    wins: int = 0

    @property
    def avg_pnl(self) -> float:
        return self.pnl / self.count if self.count else 0.0

    @property
    def win_rate_pct(self) -> float:
        return self.wins / self.count * 100.0 if self.count else 0.0


@dataclass(frozen=True)
class TimeAnalytics:
    by_day: list[TimeBucket] = field(default_factory=list)
    by_hour: list[TimeBucket] = field(default_factory=list)
