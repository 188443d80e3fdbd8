"""
Core data models for submitted ideas and their authors.

Mirrors the `users` and `ideas` tables of the data store.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Any, Dict

from src.models.category import Category


# Seconds fraction of any length; normalized to microseconds before parsing
_FRACTION = re.compile(r"(:\d{2})\.(\d+)")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO timestamp from the data store.

    Accepts datetime objects as-is, tolerates a trailing "Z", and pads or
    trims the seconds fraction to six digits (Postgres drops trailing
    zeros, e.g. "10:20:30.12345+00:00").

    Returns:
        The datetime, or None if value is empty.

    Raises:
        ValueError: If a non-empty value is not an ISO timestamp.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value

    text = str(value).replace("Z", "+00:00")
    text = _FRACTION.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", text)
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ValueError(f"Invalid timestamp: {value!r}") from e


@dataclass
class User:
    """
    A person who submitted at least one idea.

    Email is the natural dedup key: it is looked up before a new user is
    created.
    """

    id: str
    name: str
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email}

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "User":
        return cls(
            id=str(record["id"]),
            name=record.get("name") or "",
            email=record.get("email") or "",
        )


@dataclass
class Idea:
    """
    A submitted innovation idea.

    Attributes:
        id: Store-assigned identifier.
        user_id: Reference to the owning User.
        title: Short idea title.
        description: Free-text description.
        category: Category identifier (see Category).
        votes: Vote count, mutated outside this application. Never negative.
        status: Review status as stored (e.g. "pending").
        created_at: Creation timestamp.
        author: Owning user when the store joined it in, else None.
    """

    id: str
    user_id: str
    title: str
    description: str
    category: str
    votes: int = 0
    status: str = "pending"
    created_at: datetime = field(default_factory=datetime.now)
    author: Optional[User] = None

    def __post_init__(self) -> None:
        if self.votes is None:
            self.votes = 0
        if self.votes < 0:
            raise ValueError(f"votes cannot be negative, got {self.votes}")

    @property
    def category_enum(self) -> Category:
        return Category.parse(self.category)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "votes": self.votes,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if self.author:
            data["author"] = {"name": self.author.name, "email": self.author.email}
        return data

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Idea":
        """
        Build an Idea from a data store row.

        A joined `users` object (PostgREST embedding) becomes `author`. A
        missing `created_at` defaults to now.

        Raises:
            ValueError: If `created_at` is present but not a timestamp.
        """
        author = None
        joined = record.get("users")
        if isinstance(joined, dict):
            author = User(
                id=str(record.get("user_id", "")),
                name=joined.get("name") or "",
                email=joined.get("email") or "",
            )

        return cls(
            id=str(record["id"]),
            user_id=str(record.get("user_id", "")),
            title=record.get("title") or "",
            description=record.get("description") or "",
            category=record.get("category") or Category.default().value,
            votes=int(record.get("votes") or 0),
            status=record.get("status") or "pending",
            created_at=parse_timestamp(record.get("created_at")) or datetime.now(),
            author=author,
        )

    def __str__(self) -> str:
        return f"[{self.category}] {self.title} ({self.votes} votes)"
