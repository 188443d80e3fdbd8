"""
Knowledge base module.

Search and CSV export over articles and submitted ideas.
"""

from src.knowledge.knowledge_base import (
    KnowledgeBase,
    KnowledgeResults,
    filter_articles,
    filter_ideas,
    export_csv,
    EXPORT_FILENAME,
)

__all__ = [
    "KnowledgeBase",
    "KnowledgeResults",
    "filter_articles",
    "filter_ideas",
    "export_csv",
    "EXPORT_FILENAME",
]
