"""
Pre-aggregated analytics rows read by the dashboard.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional


@dataclass
class CategoryCount:
    """Submission counter for one idea category (`idea_analytics` row)."""

    category: str
    submission_count: int
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "count": self.submission_count,
            "label": self.label or self.category,
        }


@dataclass
class VisitorCount:
    """Visitor counter for one day (`visitor_analytics` row)."""

    date: date
    visitor_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "visitors": self.visitor_count}
