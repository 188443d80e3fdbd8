"""
Idea categories.

The fixed set of supply-chain platform and domain tags an idea can be filed
under. The string values are what the data store and the web API carry.
"""

from enum import Enum
from typing import Optional


class Category(str, Enum):
    """Supply-chain platform or domain an idea belongs to."""

    DAILY_HURDLES = "daily_hurdles"
    BLUE_YONDER = "blue_yonder"
    KINAXIS = "kinaxis"
    COUPA = "coupa"
    MANHATTAN = "manhattan"
    OTHER_SCM = "other_scm"

    @classmethod
    def default(cls) -> "Category":
        """Category used for anything unrecognised."""
        return cls.OTHER_SCM

    @classmethod
    def parse(cls, value: Optional[str]) -> "Category":
        """
        Map an identifier to a Category, never failing.

        Matching is case-insensitive and ignores surrounding whitespace.
        Unknown, empty or non-string identifiers map to the default category.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value:
            return cls.default()
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.default()

    @classmethod
    def is_valid(cls, value: Optional[str]) -> bool:
        """True if value names one of the known categories exactly."""
        return isinstance(value, str) and value in {c.value for c in cls}

    def __str__(self) -> str:
        return self.value
