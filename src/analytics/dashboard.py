"""
Analytics dashboard and landing-page statistics.

Reads the pre-aggregated counters (per-category submissions, daily visitors)
and the user/idea totals. Dashboard reads are best-effort: a failing store
yields an empty snapshot rather than an error page.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from urllib.parse import quote

from src.brainstorm.categories import get_category_label
from src.models.analytics import CategoryCount, VisitorCount
from src.models.category import Category
from src.models.idea import Idea
from src.storage.base import Store

logger = logging.getLogger(__name__)

VISITOR_DAYS = 7


@dataclass
class DashboardSnapshot:
    """Everything the analytics dashboard shows."""
    visitors: List[VisitorCount] = field(default_factory=list)
    ideas_by_category: List[CategoryCount] = field(default_factory=list)
    total_users: int = 0
    total_ideas: int = 0
    error: Optional[str] = None

    @property
    def today_visitors(self) -> int:
        """Visitor count of the most recent day (0 if none)."""
        return self.visitors[-1].visitor_count if self.visitors else 0

    @property
    def total_submissions(self) -> int:
        return sum(c.submission_count for c in self.ideas_by_category)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_users": self.total_users,
            "total_ideas": self.total_ideas,
            "today_visitors": self.today_visitors,
            "total_submissions": self.total_submissions,
            "visitors": [v.to_dict() for v in self.visitors],
            "ideas_by_category": [c.to_dict() for c in self.ideas_by_category],
        }


def category_display_label(category: str) -> str:
    """Label for a known category, the raw identifier otherwise."""
    if Category.is_valid(category):
        return get_category_label(category)
    return category


class AnalyticsService:
    """Dashboard reads, visitor tracking and best-idea lookup."""

    def __init__(self, store: Store):
        self.store = store

    def snapshot(self) -> DashboardSnapshot:
        """
        Collect dashboard data.

        Any store failure is logged; the returned snapshot then carries
        whatever was read before the failure plus an error message.
        """
        snapshot = DashboardSnapshot()

        try:
            snapshot.visitors = self.store.get_visitor_analytics(limit=VISITOR_DAYS)

            counts = self.store.get_idea_analytics()
            for count in counts:
                count.label = category_display_label(count.category)
            snapshot.ideas_by_category = counts

            snapshot.total_users = self.store.count_users()
            snapshot.total_ideas = self.store.count_ideas()
        except Exception as e:
            logger.error("Error fetching analytics: %s", e)
            snapshot.error = str(e)

        return snapshot

    def landing_stats(self) -> Dict[str, Any]:
        """Headline numbers for the landing page."""
        snapshot = self.snapshot()
        return {
            "total_users": snapshot.total_users,
            "total_ideas": snapshot.total_ideas,
            "total_submissions": snapshot.total_submissions,
            "today_visitors": snapshot.today_visitors,
            "categories": len(Category),
        }

    def record_visit(self) -> bool:
        """Increment today's visitor counter. Failures are logged only."""
        try:
            self.store.increment_visitor_count()
            return True
        except Exception as e:
            logger.warning("Visitor count update failed: %s", e)
            return False

    def best_idea(self) -> Optional[Idea]:
        """
        Most-voted idea (newest on a tie), or None when there are none.

        Raises:
            StoreError: If the data store cannot be read.
        """
        return self.store.get_best_idea()


def share_link(idea: Idea) -> str:
    """Build a mailto: link that shares an idea by email."""
    author = idea.author.name if idea.author and idea.author.name else "Anonymous"
    subject = f"Check out this innovative idea: {idea.title}"
    body = (
        "I thought you'd be interested in this idea:\n\n"
        f"Title: {idea.title}\n"
        f"Category: {category_display_label(idea.category)}\n"
        f"Description: {idea.description}\n"
        f"Votes: {idea.votes}\n"
        f"Submitted by: {author}\n\n"
        "This idea was shared from our innovation platform!"
    )
    return f"mailto:?subject={quote(subject)}&body={quote(body)}"
