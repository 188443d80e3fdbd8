"""
Category knowledge table for brainstorming.

This file is the single source of truth for how each idea category is
described to the idea-generation endpoint and to users. Each entry is used
for two purposes:
1. Prompting: the guidance text conditions the generated idea
2. Display: the label and summary are shown in the chat and the dashboard

CUSTOMIZATION:

To add a new category:
    1. Add a member to src.models.category.Category
    2. Add a CategoryContext entry to CATEGORY_KNOWLEDGE
    3. Add a fallback template in src.brainstorm.fallback
    Importing this module fails if step 2 was skipped.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from src.models.category import Category


@dataclass(frozen=True)
class CategoryContext:
    """Static description of one category."""

    category: Category
    label: str
    guidance: str
    summary: str


# =============================================================================
# Category Knowledge
# =============================================================================

CATEGORY_KNOWLEDGE: Dict[Category, CategoryContext] = {
    Category.DAILY_HURDLES: CategoryContext(
        category=Category.DAILY_HURDLES,
        label="Daily Hurdles",
        guidance=(
            "Focus on everyday challenges, personal productivity, lifestyle "
            "improvements, and common problems people face in their daily lives."
        ),
        summary="Everyday challenges and lifestyle improvements",
    ),
    Category.BLUE_YONDER: CategoryContext(
        category=Category.BLUE_YONDER,
        label="Blue Yonder",
        guidance=(
            "Focus on supply chain optimization, demand planning, inventory "
            "management, warehouse management, and Blue Yonder platform "
            "specific solutions."
        ),
        summary="Blue Yonder supply chain optimization",
    ),
    Category.KINAXIS: CategoryContext(
        category=Category.KINAXIS,
        label="Kinaxis",
        guidance=(
            "Focus on supply chain planning, demand sensing, supply planning, "
            "inventory optimization, and Kinaxis RapidResponse platform "
            "capabilities."
        ),
        summary="Kinaxis supply chain planning solutions",
    ),
    Category.COUPA: CategoryContext(
        category=Category.COUPA,
        label="Coupa",
        guidance=(
            "Focus on procurement, spend management, supplier management, "
            "contract management, and business spend optimization using "
            "Coupa platform."
        ),
        summary="Coupa business spend management",
    ),
    Category.MANHATTAN: CategoryContext(
        category=Category.MANHATTAN,
        label="Manhattan",
        guidance=(
            "Focus on warehouse management, transportation management, "
            "distributed order management, and Manhattan Associates solutions."
        ),
        summary="Manhattan supply chain commerce",
    ),
    Category.OTHER_SCM: CategoryContext(
        category=Category.OTHER_SCM,
        label="Other SCM",
        guidance=(
            "Focus on general supply chain management, logistics, "
            "transportation, distribution, and emerging supply chain "
            "technologies."
        ),
        summary="General supply chain management",
    ),
}

_missing = [c.value for c in Category if c not in CATEGORY_KNOWLEDGE]
if _missing:
    raise RuntimeError(f"CATEGORY_KNOWLEDGE is missing entries for: {', '.join(_missing)}")


# =============================================================================
# Lookup Functions
# =============================================================================

def get_category_context(category: Optional[str]) -> CategoryContext:
    """
    Get the knowledge entry for a category identifier.

    Unknown identifiers get the default ("Other SCM") entry; this never fails.
    """
    return CATEGORY_KNOWLEDGE[Category.parse(category)]


def get_category_label(category: Optional[str]) -> str:
    """Human-readable label, e.g. "blue_yonder" -> "Blue Yonder"."""
    return get_category_context(category).label


def get_category_guidance(category: Optional[str]) -> str:
    """Guidance text used to condition prompts."""
    return get_category_context(category).guidance


def all_categories() -> List[CategoryContext]:
    """All entries in declaration order."""
    return [CATEGORY_KNOWLEDGE[c] for c in Category]
