"""
Knowledge base for the Innovation Hub.

Combines published articles and submitted ideas into one searchable
collection, accepts user-submitted articles, and exports everything to CSV.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from src.models.article import Article, ARTICLE_CATEGORIES, DEFAULT_ARTICLE_CATEGORY
from src.models.idea import Idea
from src.storage.base import Store
from src.submission.workflow import FormValidationError, clean_text

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "knowledge_base_export.csv"
EXPORT_COLUMNS = ["Type", "Title", "Content", "Category", "Votes", "Author", "Date"]
EXPORT_CONTENT_CHARS = 100


@dataclass
class KnowledgeResults:
    """Articles and ideas, optionally filtered by a search term."""
    articles: List[Article] = field(default_factory=list)
    ideas: List[Idea] = field(default_factory=list)
    query: str = ""

    @property
    def total(self) -> int:
        return len(self.articles) + len(self.ideas)


def _matches(term: str, *values: Optional[str]) -> bool:
    return any(term in (value or "").lower() for value in values)


def filter_articles(articles: List[Article], term: str) -> List[Article]:
    """Case-insensitive substring match on title, content or category."""
    term = (term or "").strip().lower()
    if not term:
        return list(articles)
    return [a for a in articles if _matches(term, a.title, a.content, a.category)]


def filter_ideas(ideas: List[Idea], term: str) -> List[Idea]:
    """Case-insensitive substring match on title, description or category."""
    term = (term or "").strip().lower()
    if not term:
        return list(ideas)
    return [i for i in ideas if _matches(term, i.title, i.description, i.category)]


def _excerpt(text: str) -> str:
    return (text or "")[:EXPORT_CONTENT_CHARS] + "..."


def _export_date(value: Optional[datetime]) -> str:
    if not value:
        return ""
    return f"{value.month}/{value.day}/{value.year}"


def export_csv(articles: List[Article], ideas: List[Idea]) -> str:
    """
    Render articles and ideas as CSV text.

    Every value is quoted. Content is cut to the first 100 characters and
    followed by "...". With no rows, only the header is written.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)

    for article in articles:
        writer.writerow([
            "Article",
            article.title,
            _excerpt(article.content),
            article.category,
            article.votes,
            "Anonymous",
            _export_date(article.created_at),
        ])

    for idea in ideas:
        writer.writerow([
            "Idea",
            idea.title,
            _excerpt(idea.description),
            idea.category,
            idea.votes,
            "Anonymous",
            _export_date(idea.created_at),
        ])

    return buffer.getvalue()


class KnowledgeBase:
    """
    Read/search/export view over articles and ideas.

    Usage:
        kb = KnowledgeBase(store)
        results = kb.search("rfid")
        csv_text = kb.export()
    """

    def __init__(self, store: Store):
        self.store = store

    def load(self) -> KnowledgeResults:
        """
        Fetch published articles and all ideas, newest first.

        Raises:
            StoreError: If the data store cannot be read.
        """
        articles = self.store.list_published_articles()
        ideas = self.store.list_ideas()
        return KnowledgeResults(articles=articles, ideas=ideas)

    def search(self, term: str = "") -> KnowledgeResults:
        """Load and filter by a search term (empty term returns everything)."""
        loaded = self.load()
        return KnowledgeResults(
            articles=filter_articles(loaded.articles, term),
            ideas=filter_ideas(loaded.ideas, term),
            query=(term or "").strip(),
        )

    def export(self, term: str = "") -> str:
        """CSV export of the (optionally filtered) knowledge base."""
        results = self.search(term)
        logger.info("Exporting %d knowledge base rows", results.total)
        return export_csv(results.articles, results.ideas)

    def submit_article(
        self,
        title: str,
        content: str,
        category: str = DEFAULT_ARTICLE_CATEGORY,
    ) -> Article:
        """
        Add a user-submitted article.

        Unknown categories are stored as "general".

        Raises:
            FormValidationError: If title or content is blank or not text.
            StoreError: If the insert fails.
        """
        title = clean_text(title)
        content = clean_text(content)

        errors = []
        for field_name, value in (("title", title), ("content", content)):
            if not isinstance(value, str):
                errors.append(f"{field_name} must be text")
            elif not value:
                errors.append(f"{field_name} is required")
        if errors:
            raise FormValidationError(errors)

        if not isinstance(category, str) or category not in ARTICLE_CATEGORIES:
            category = DEFAULT_ARTICLE_CATEGORY

        return self.store.insert_article(
            title=title,
            content=content,
            category=category,
            article_type="user_submitted",
        )
