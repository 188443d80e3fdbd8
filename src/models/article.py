"""
Knowledge base article model.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Any, Dict

from src.models.idea import parse_timestamp


# Article categories offered in the knowledge base (separate from idea categories)
ARTICLE_CATEGORIES: Dict[str, str] = {
    "general": "General SCM",
    "technology": "Technology",
    "logistics": "Logistics",
    "procurement": "Procurement",
    "inventory": "Inventory Management",
    "sustainability": "Sustainability",
}

DEFAULT_ARTICLE_CATEGORY = "general"


@dataclass
class Article:
    """A knowledge base article. Only "published" ones are listed."""

    id: str
    title: str
    content: str
    category: str = DEFAULT_ARTICLE_CATEGORY
    article_type: str = "user_submitted"
    status: str = "published"
    votes: int = 0
    created_at: datetime = field(default_factory=datetime.now)
    user_id: Optional[str] = None

    @property
    def category_label(self) -> str:
        return ARTICLE_CATEGORIES.get(self.category, self.category)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "article_type": self.article_type,
            "status": self.status,
            "votes": self.votes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "user_id": self.user_id,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Article":
        return cls(
            id=str(record["id"]),
            title=record.get("title") or "",
            content=record.get("content") or "",
            category=record.get("category") or DEFAULT_ARTICLE_CATEGORY,
            article_type=record.get("article_type") or "user_submitted",
            status=record.get("status") or "published",
            votes=int(record.get("votes") or 0),
            created_at=parse_timestamp(record.get("created_at")) or datetime.now(),
            user_id=record.get("user_id"),
        )
