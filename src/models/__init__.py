"""
Data models module.

Defines data structures for users, ideas, articles, categories,
conversation history and analytics counters.
"""

from src.models.category import Category
from src.models.idea import User, Idea, parse_timestamp
from src.models.article import Article, ARTICLE_CATEGORIES, DEFAULT_ARTICLE_CATEGORY
from src.models.conversation import ConversationTurn, Exchange, ConversationHistory
from src.models.analytics import CategoryCount, VisitorCount

__all__ = [
    "Category",
    "User",
    "Idea",
    "parse_timestamp",
    "Article",
    "ARTICLE_CATEGORIES",
    "DEFAULT_ARTICLE_CATEGORY",
    "ConversationTurn",
    "Exchange",
    "ConversationHistory",
    "CategoryCount",
    "VisitorCount",
]
