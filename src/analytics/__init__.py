"""
Analytics module.

Dashboard counters, landing statistics and the best-idea spotlight.
"""

from src.analytics.dashboard import (
    AnalyticsService,
    DashboardSnapshot,
    category_display_label,
    share_link,
)

__all__ = [
    "AnalyticsService",
    "DashboardSnapshot",
    "category_display_label",
    "share_link",
]
