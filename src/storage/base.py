"""
Base storage abstraction for the Innovation Hub.

Defines the abstract interface that all data store backends must implement.
This allows swapping between Supabase, an in-memory store for tests, etc.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from src.models.article import Article
from src.models.analytics import CategoryCount, VisitorCount
from src.models.idea import Idea, User


class StoreError(Exception):
    """A data store operation failed (transport, non-2xx, malformed data)."""


class Store(ABC):
    """
    Abstract base class for all data store backends.

    Implementations must provide:
    - User lookup by email and user creation
    - Idea insertion and listing
    - Article listing and insertion
    - Aggregate counters (per-category submissions, daily visitors)

    Failed operations raise StoreError; they are never silently swallowed
    here. Deciding which failures are fatal is the caller's job.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this storage backend.

        Used for logging and debugging.
        """

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @abstractmethod
    def find_user_by_email(self, email: str) -> Optional[User]:
        """
        Look up a user by exact email match.

        Returns:
            The User if found, None otherwise.
        """

    @abstractmethod
    def create_user(self, name: str, email: str) -> User:
        """Create a user and return it with its assigned id."""

    def count_users(self) -> int:
        """Total number of users."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Ideas
    # -------------------------------------------------------------------------

    @abstractmethod
    def insert_idea(self, user_id: str, title: str, description: str, category: str) -> Idea:
        """Insert an idea row owned by user_id and return it."""

    @abstractmethod
    def increment_idea_count(self, category: str) -> None:
        """Increment the per-category submission counter."""

    def list_ideas(self) -> List[Idea]:
        """All ideas, newest first."""
        return []

    def get_best_idea(self) -> Optional[Idea]:
        """
        The idea with the most votes (newest wins a tie), with its author.

        Returns:
            The Idea, or None if there are no ideas.
        """
        return None

    def count_ideas(self) -> int:
        """Total number of ideas."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Articles
    # -------------------------------------------------------------------------

    def list_published_articles(self) -> List[Article]:
        """Published articles, newest first."""
        return []

    def insert_article(
        self,
        title: str,
        content: str,
        category: str,
        article_type: str = "user_submitted",
        user_id: Optional[str] = None,
    ) -> Article:
        """Insert an article and return it."""
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Analytics counters
    # -------------------------------------------------------------------------

    def get_idea_analytics(self) -> List[CategoryCount]:
        """Per-category submission counters, highest first."""
        return []

    def get_visitor_analytics(self, limit: int = 7) -> List[VisitorCount]:
        """Daily visitor counters, oldest first, at most `limit` rows."""
        return []

    def increment_visitor_count(self) -> None:
        """Increment today's visitor counter."""

    def __str__(self) -> str:
        return f"Store({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
