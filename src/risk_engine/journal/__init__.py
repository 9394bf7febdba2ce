"""Trade ledger analytics."""

from risk_engine.journal.analytics import (
    calc_advanced_metrics,
    calc_tag_analytics,
    calc_time_analytics,
    current_equity,
    peak_equity,
)
from risk_engine.journal.models import (
    AdvancedMetrics,
    TagAnalytics,
    TagSummary,
    TimeAnalytics,
    TimeBucket,
    TradeRecord,
)

__all__ = [
    "AdvancedMetrics",
    "TagAnalytics",
    "TagSummary",
    "TimeAnalytics",
    "TimeBucket",
    "TradeRecord",
    "calc_advanced_metrics",
    "calc_tag_analytics",
    "calc_time_analytics",
    "current_equity",
    "peak_equity",
]
