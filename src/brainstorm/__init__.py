"""
Brainstorming module.

AI-assisted idea generation with a deterministic local fallback.
"""

from src.brainstorm.categories import (
    CategoryContext,
    CATEGORY_KNOWLEDGE,
    get_category_context,
    get_category_label,
    get_category_guidance,
    all_categories,
)
from src.brainstorm.fallback import (
    FALLBACK_TEMPLATES,
    fallback_idea,
    fallback_refinement,
)
from src.brainstorm.client import (
    IdeaGenerator,
    RemoteIdeaClient,
    GenerationResult,
    RemoteUnavailableError,
)
from src.brainstorm.orchestrator import (
    BrainstormingOrchestrator,
    NotInitializedError,
)

__all__ = [
    # Category knowledge
    "CategoryContext",
    "CATEGORY_KNOWLEDGE",
    "get_category_context",
    "get_category_label",
    "get_category_guidance",
    "all_categories",
    # Fallback
    "FALLBACK_TEMPLATES",
    "fallback_idea",
    "fallback_refinement",
    # Remote client
    "IdeaGenerator",
    "RemoteIdeaClient",
    "GenerationResult",
    "RemoteUnavailableError",
    # Orchestrator
    "BrainstormingOrchestrator",
    "NotInitializedError",
]
