"""
Fallback responder.

Deterministic, pre-written brainstorming replies used when the remote
idea-generation call fails. One template per category; each interpolates the
user's text verbatim.
"""

from typing import Dict, Optional

from src.models.category import Category


FALLBACK_TEMPLATES: Dict[Category, str] = {
    Category.DAILY_HURDLES: (
        "Here's a practical way to tackle \"{text}\": break the problem into the "
        "smallest recurring step, automate or template that step first, and "
        "track the time saved for a week. Start with a simple checklist or "
        "shared tracker, then look for the one hand-off that causes most of "
        "the delay and remove it."
    ),
    Category.BLUE_YONDER: (
        "Idea for \"{text}\" on Blue Yonder: use the platform's demand sensing "
        "signals to trigger an exception workflow before the issue reaches "
        "the warehouse. Pair machine-learning forecasts with autonomous "
        "replenishment rules, and measure impact on inventory turns and "
        "service level over one planning cycle."
    ),
    Category.KINAXIS: (
        "Idea for \"{text}\" on Kinaxis RapidResponse: build a what-if scenario "
        "that models the problem across supply, demand and capacity, then "
        "publish it to a control-tower alert so planners can compare options "
        "concurrently. Track resolution time and forecast accuracy before "
        "and after."
    ),
    Category.COUPA: (
        "Idea for \"{text}\" on Coupa: route the affected spend through a "
        "guided buying channel with pre-approved suppliers, attach supplier "
        "risk scores to each request, and use spend analytics to flag "
        "off-contract purchases. Report savings and cycle time monthly."
    ),
    Category.MANHATTAN: (
        "Idea for \"{text}\" on Manhattan: add a real-time exception lane in the "
        "warehouse and transportation flow, re-slot or re-route automatically "
        "when the issue is detected, and balance labor against the revised "
        "plan. Measure dock-to-stock time and on-time shipment rate."
    ),
    Category.OTHER_SCM: (
        "Here's a supply chain idea for \"{text}\": map the end-to-end flow, "
        "identify the single point where visibility is lost, and add a shared "
        "event feed (IoT, EDI or API) so partners react to the same signal. "
        "Pilot it on one lane or supplier before scaling."
    ),
}

_missing = [c.value for c in Category if c not in FALLBACK_TEMPLATES]
if _missing:
    raise RuntimeError(f"FALLBACK_TEMPLATES is missing entries for: {', '.join(_missing)}")


def fallback_response(text: str, category: Optional[str]) -> str:
    """Fill the category's template with the raw input text."""
    template = FALLBACK_TEMPLATES[Category.parse(category)]
    return template.format(text=text)


def fallback_idea(problem: str, category: Optional[str]) -> str:
    """Fallback reply for a generate request."""
    return fallback_response(problem, category)


def fallback_refinement(current_idea: str, feedback: str, category: Optional[str]) -> str:
    """Fallback reply for a refine request."""
    return fallback_response(refinement_text(current_idea, feedback), category)


def refinement_text(current_idea: str, feedback: str) -> str:
    """Input text for a refinement: the current idea followed by the feedback."""
    return f"{current_idea}\n\nFeedback: {feedback}"
