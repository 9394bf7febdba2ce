import math
from datetime import date

import pytest

from risk_engine.journal import (
    AdvancedMetrics,
    TagAnalytics,
    TradeRecord,
    calc_advanced_metrics,
    calc_tag_analytics,
    calc_time_analytics,
    current_equity,
    peak_equity,
)


def _ledger():
    return [
        TradeRecord(pnl=2000, equity_before=20000, equity_after=22000, direction="long",
                    opened=date(2024, 6, 1), closed=date(2024, 6, 3), risk_dollars=1000, setup_tags=("breakout",),
                    emotion_tags=("calm",), entry_hour=9),
        TradeRecord(pnl=-1100, equity_before=22000, equity_after=20900, direction="short",
                    opened=date(2024, 6, 4), closed=date(2024, 6, 4), risk_dollars=1100, setup_tags=("fade",),
                    emotion_tags=("fomo",), mistakes=("chased",), entry_hour=15),
        TradeRecord(pnl=-900, equity_before=20900, equity_after=20000, direction="long",
                    risk_dollars=900, setup_tags=("breakout",), emotion_tags=("fomo",),
                    mistakes=("chased", "oversized")),
        TradeRecord(pnl=3000, equity_before=20000, equity_after=23000, direction="long",
                    opened=date(2024, 6, 6), closed=date(2024, 6, 10), risk_dollars=1000, setup_tags=("breakout",),
                    emotion_tags=("calm",), entry_hour=9),
    ]


def test_empty_ledger():
    assert calc_advanced_metrics([]) == AdvancedMetrics()
    assert calc_tag_analytics([]) == TagAnalytics()
    assert [bucket.count for bucket in calc_time_analytics([]).by_day] == [0] * 7
    assert calc_time_analytics([]).by_hour == []
    assert current_equity([], 20000) == 20000


def test_ledger_equity():
    trades = _ledger()
    assert current_equity(trades, 20000) == 23000
    assert peak_equity(trades, 20000) == 23000
    assert peak_equity(trades[:3], 20000) == 22000


def test_advanced_metrics():
    metrics = calc_advanced_metrics(_ledger())
    assert metrics.avg_win == pytest.approx(2500)
    assert metrics.avg_loss == pytest.approx(1000)
    assert metrics.payoff_ratio == pytest.approx(2.5)
    assert metrics.max_consecutive_wins == 1
    assert metrics.max_consecutive_losses == 2
    assert metrics.long_win_pct == pytest.approx(200 / 3)
    assert metrics.short_win_pct == 0.0
    assert metrics.avg_hold_days == pytest.approx(2.0)
    assert metrics.calmar_ratio == pytest.approx((23000 - 20000) / 20000 / (2000 / 22000))
    assert metrics.sharpe_ratio > 0
    assert metrics.sortino_ratio > 0


def test_payoff_ratio_without_losses():
    metrics = calc_advanced_metrics([TradeRecord(pnl=100, equity_before=1000, equity_after=1100)])
    assert metrics.payoff_ratio == math.inf
    assert metrics.sortino_ratio == 0.0


def test_setup_tags_sorted_by_pnl():
    setup = calc_tag_analytics(_ledger()).setup
    assert [item.tag for item in setup] == ["breakout", "fade"]
    breakout = setup[0]
    assert breakout.pnl == pytest.approx(4100)
    assert breakout.count == 3
    assert breakout.win_rate_pct == pytest.approx(200 / 3)


def test_emotion_tags_grouped():
    emotion = calc_tag_analytics(_ledger()).emotion
    assert [item.tag for item in emotion] == ["calm", "fomo"]
    assert emotion[0].pnl == pytest.approx(5000)
    assert emotion[0].win_rate_pct == pytest.approx(100.0)
    assert emotion[1].pnl == pytest.approx(-2000)
    assert emotion[1].count == 2
    assert emotion[1].win_rate_pct == 0.0


def test_mistakes_grouped():
    mistakes = calc_tag_analytics(_ledger()).mistakes
    assert [(item.tag, item.count) for item in mistakes] == [("oversized", 1), ("chased", 2)]
    assert mistakes[1].pnl == pytest.approx(-2000)


def test_time_analytics_by_weekday_and_hour():
    analytics = calc_time_analytics(_ledger())
    assert [bucket.key for bucket in analytics.by_day] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    monday = analytics.by_day[1]
    assert monday.count == 2
    assert monday.pnl == pytest.approx(5000)
    assert monday.avg_pnl == pytest.approx(2500)
    assert monday.win_rate_pct == pytest.approx(100.0)
    assert analytics.by_day[2].pnl == pytest.approx(-1100)
    assert sum(bucket.count for bucket in analytics.by_day) == 3
    assert [(bucket.key, bucket.count) for bucket in analytics.by_hour] == [("09", 2), ("15", 1)]


def test_r_multiple():
    trade = TradeRecord(pnl=-500, equity_before=10000, equity_after=9500, risk_dollars=250)
    assert trade.r_multiple == pytest.approx(-2.0)
    assert TradeRecord(pnl=10, equity_before=10, equity_after=20).r_multiple == 0.0
