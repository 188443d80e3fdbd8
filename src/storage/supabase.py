"""
Supabase storage backend for the Innovation Hub.

Implements the Store interface against a Supabase project through its
PostgREST API (`/rest/v1`). All calls go through `requests`.

PostgREST Documentation: https://postgrest.org/en/stable/references/api.html

=============================================================================
SUPABASE SCHEMA
=============================================================================

| Table             | Columns                                                        |
|-------------------|----------------------------------------------------------------|
| users             | id, name, email                                                |
| ideas             | id, user_id -> users.id, title, description, category,         |
|                   | votes (default 0), status, created_at                          |
| articles          | id, title, content, category, article_type, status, votes,     |
|                   | created_at, user_id                                            |
| idea_analytics    | category, submission_count                                     |
| visitor_analytics | date, visitor_count                                            |

Stored procedures (called via /rest/v1/rpc/<name>):
- increment_idea_count(idea_category text)
- increment_visitor_count()

=============================================================================
"""

import logging
import uuid
from dataclasses import replace
from datetime import datetime, date
from typing import List, Optional, Dict, Any

import requests

from src.config import SUPABASE_URL, SUPABASE_KEY, REQUEST_TIMEOUT
from src.models.article import Article
from src.models.analytics import CategoryCount, VisitorCount
from src.models.idea import Idea, User
from src.storage.base import Store, StoreError

logger = logging.getLogger(__name__)

IDEA_COLUMNS = "id,user_id,title,description,category,votes,status,created_at"


class SupabaseStore(Store):
    """
    Supabase-backed store.

    Configuration is pulled from environment variables via src.config:
    - SUPABASE_URL: Project URL
    - SUPABASE_KEY: API key (sent as "apikey" and as bearer token)
    """

    def __init__(
        self,
        url: str = None,
        api_key: str = None,
        timeout: int = None,
    ):
        """
        Initialize SupabaseStore.

        Args:
            url: Project URL. Defaults to config.SUPABASE_URL.
            api_key: API key. Defaults to config.SUPABASE_KEY.
            timeout: Request timeout in seconds. Defaults to config.REQUEST_TIMEOUT.
        """
        # Use provided values, or fall back to config if None (not empty string)
        self.url = (url if url is not None else SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else SUPABASE_KEY
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT

    @property
    def name(self) -> str:
        return "supabase"

    @property
    def _rest_url(self) -> str:
        return f"{self.url}/rest/v1"

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _validate_config(self) -> None:
        """Validate that required configuration is present."""
        if not self.url:
            raise StoreError("SUPABASE_URL is not configured")
        if not self.api_key:
            raise StoreError("SUPABASE_KEY is not configured")

    # =========================================================================
    # Transport
    # =========================================================================

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] = None,
        json: Any = None,
        prefer: str = None,
    ) -> requests.Response:
        """
        Perform one PostgREST call.

        Raises:
            StoreError: On transport errors and non-2xx responses.
        """
        self._validate_config()

        headers = self._headers
        if prefer:
            headers["Prefer"] = prefer

        logger.debug("%s %s params=%s", method, path, params)

        try:
            response = requests.request(
                method,
                f"{self._rest_url}/{path}",
                headers=headers,
                params=params,
                json=json,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Supabase %s %s failed: %s", method, path, e)
            raise StoreError(f"{method} {path} failed: {e}") from e

        return response

    def _rows(self, response: requests.Response) -> List[Dict[str, Any]]:
        """Decode a JSON array body."""
        try:
            data = response.json()
        except ValueError as e:
            raise StoreError(f"Malformed response body: {e}") from e
        if not isinstance(data, list):
            raise StoreError("Expected a JSON array from the data store")
        return data

    def _single(self, response: requests.Response) -> Dict[str, Any]:
        rows = self._rows(response)
        if not rows:
            raise StoreError("Insert returned no row")
        return rows[0]

    def _count(self, table: str) -> int:
        """Exact row count via the Content-Range header ("0-0/42" or "*/42")."""
        response = self._request(
            "HEAD",
            table,
            params={"select": "id"},
            prefer="count=exact",
        )
        content_range = response.headers.get("Content-Range", "")
        try:
            return int(content_range.rsplit("/", 1)[1])
        except (IndexError, ValueError) as e:
            raise StoreError(f"Missing row count for {table}: {content_range!r}") from e

    def _rpc(self, function: str, args: Dict[str, Any] = None) -> None:
        self._request("POST", f"rpc/{function}", json=args or {})

    # =========================================================================
    # Store Interface Implementation
    # =========================================================================

    def find_user_by_email(self, email: str) -> Optional[User]:
        response = self._request(
            "GET",
            "users",
            params={"select": "id,name,email", "email": f"eq.{email}", "limit": 1},
        )
        rows = self._rows(response)
        return _from_record(User, rows[0]) if rows else None

    def create_user(self, name: str, email: str) -> User:
        response = self._request(
            "POST",
            "users",
            json={"name": name, "email": email},
            prefer="return=representation",
        )
        return _from_record(User, self._single(response))

    def count_users(self) -> int:
        return self._count("users")

    def insert_idea(self, user_id: str, title: str, description: str, category: str) -> Idea:
        response = self._request(
            "POST",
            "ideas",
            json={
                "user_id": user_id,
                "title": title,
                "description": description,
                "category": category,
            },
            prefer="return=representation",
        )
        return _from_record(Idea, self._single(response))

    def increment_idea_count(self, category: str) -> None:
        self._rpc("increment_idea_count", {"idea_category": category})

    def list_ideas(self) -> List[Idea]:
        response = self._request(
            "GET",
            "ideas",
            params={"select": "*", "order": "created_at.desc"},
        )
        return [_from_record(Idea, row) for row in self._rows(response)]

    def get_best_idea(self) -> Optional[Idea]:
        response = self._request(
            "GET",
            "ideas",
            params={
                "select": f"{IDEA_COLUMNS},users(name,email)",
                "order": "votes.desc,created_at.desc",
                "limit": 1,
            },
        )
        rows = self._rows(response)
        return _from_record(Idea, rows[0]) if rows else None

    def count_ideas(self) -> int:
        return self._count("ideas")

    def list_published_articles(self) -> List[Article]:
        response = self._request(
            "GET",
            "articles",
            params={"select": "*", "status": "eq.published", "order": "created_at.desc"},
        )
        return [_from_record(Article, row) for row in self._rows(response)]

    def insert_article(
        self,
        title: str,
        content: str,
        category: str,
        article_type: str = "user_submitted",
        user_id: Optional[str] = None,
    ) -> Article:
        response = self._request(
            "POST",
            "articles",
            json={
                "title": title,
                "content": content,
                "category": category,
                "article_type": article_type,
                "user_id": user_id or str(uuid.uuid4()),
            },
            prefer="return=representation",
        )
        return _from_record(Article, self._single(response))

    def get_idea_analytics(self) -> List[CategoryCount]:
        response = self._request(
            "GET",
            "idea_analytics",
            params={"select": "category,submission_count", "order": "submission_count.desc"},
        )
        return [
            CategoryCount(
                category=row.get("category", ""),
                submission_count=int(row.get("submission_count") or 0),
            )
            for row in self._rows(response)
        ]

    def get_visitor_analytics(self, limit: int = 7) -> List[VisitorCount]:
        # Newest `limit` days, returned oldest first
        response = self._request(
            "GET",
            "visitor_analytics",
            params={"select": "date,visitor_count", "order": "date.desc", "limit": limit},
        )
        counts = []
        for row in self._rows(response):
            day = _parse_date(row.get("date"))
            if day is None:
                continue
            counts.append(VisitorCount(date=day, visitor_count=int(row.get("visitor_count") or 0)))
        counts.sort(key=lambda c: c.date)
        return counts

    def increment_visitor_count(self) -> None:
        self._rpc("increment_visitor_count")


def _from_record(model, row: Dict[str, Any]):
    """Build a model from a row; a malformed row is a store error."""
    try:
        return model.from_record(row)
    except (KeyError, TypeError, ValueError) as e:
        raise StoreError(f"Malformed {model.__name__.lower()} row: {e}") from e


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


class MockSupabaseStore(Store):
    """
    In-memory store for testing and development.

    Use this when Supabase is not configured or for testing.
    Data is stored in memory and lost when the process ends.
    """

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.ideas: Dict[str, Idea] = {}
        self.articles: Dict[str, Article] = {}
        self.idea_counts: Dict[str, int] = {}
        self.visitor_counts: Dict[date, int] = {}

    @property
    def name(self) -> str:
        return "mock"

    def find_user_by_email(self, email: str) -> Optional[User]:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def create_user(self, name: str, email: str) -> User:
        user = User(id=str(uuid.uuid4()), name=name, email=email)
        self.users[user.id] = user
        return user

    def count_users(self) -> int:
        return len(self.users)

    def insert_idea(self, user_id: str, title: str, description: str, category: str) -> Idea:
        idea = Idea(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title,
            description=description,
            category=category,
            created_at=datetime.now(),
        )
        self.ideas[idea.id] = idea
        return idea

    def increment_idea_count(self, category: str) -> None:
        self.idea_counts[category] = self.idea_counts.get(category, 0) + 1

    def list_ideas(self) -> List[Idea]:
        return sorted(self.ideas.values(), key=lambda i: i.created_at, reverse=True)

    def get_best_idea(self) -> Optional[Idea]:
        if not self.ideas:
            return None
        best = max(self.ideas.values(), key=lambda i: (i.votes, i.created_at))
        return replace(best, author=self.users.get(best.user_id))

    def count_ideas(self) -> int:
        return len(self.ideas)

    def list_published_articles(self) -> List[Article]:
        published = [a for a in self.articles.values() if a.status == "published"]
        return sorted(published, key=lambda a: a.created_at, reverse=True)

    def insert_article(
        self,
        title: str,
        content: str,
        category: str,
        article_type: str = "user_submitted",
        user_id: Optional[str] = None,
    ) -> Article:
        article = Article(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            category=category,
            article_type=article_type,
            user_id=user_id or str(uuid.uuid4()),
        )
        self.articles[article.id] = article
        return article

    def get_idea_analytics(self) -> List[CategoryCount]:
        counts = [CategoryCount(category=c, submission_count=n) for c, n in self.idea_counts.items()]
        counts.sort(key=lambda c: c.submission_count, reverse=True)
        return counts

    def get_visitor_analytics(self, limit: int = 7) -> List[VisitorCount]:
        days = sorted(self.visitor_counts)[-limit:] if limit > 0 else []
        return [VisitorCount(date=d, visitor_count=self.visitor_counts[d]) for d in days]

    def increment_visitor_count(self) -> None:
        today = date.today()
        self.visitor_counts[today] = self.visitor_counts.get(today, 0) + 1

    def clear(self) -> None:
        """Clear all records (for testing)."""
        self.users.clear()
        self.ideas.clear()
        self.articles.clear()
        self.idea_counts.clear()
        self.visitor_counts.clear()
