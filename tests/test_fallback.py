"""
Tests for the fallback responder.

The fallback reply is what users see whenever the idea-generation endpoint
is unavailable, so it must always be non-empty and contain their text.
"""

import pytest

from src.models.category import Category
from src.brainstorm.fallback import (
    FALLBACK_TEMPLATES,
    fallback_idea,
    fallback_refinement,
    fallback_response,
    refinement_text,
)
from tests.test_config import CONFIG, TEST_DATA


class TestFallbackTemplates:
    """Tests for the template table."""

    def test_every_category_has_a_template(self):
        for category in Category:
            assert category in FALLBACK_TEMPLATES

    def test_templates_quote_the_input(self):
        for template in FALLBACK_TEMPLATES.values():
            assert '"{text}"' in template


class TestFallbackResponse:
    """Tests for fallback reply generation."""

    def test_manhattan_reply_contains_problem(self):
        problem = TEST_DATA["problems"]["manhattan"]

        reply = fallback_response(problem, "manhattan")

        assert reply.startswith(f'Idea for "{problem}" on Manhattan')
        assert problem in reply

    @pytest.mark.parametrize("category", CONFIG["available_categories"])
    def test_reply_is_non_empty_and_contains_text(self, category):
        reply = fallback_response("Pallets go missing", category)

        assert reply
        assert "Pallets go missing" in reply

    def test_unknown_category_uses_default_template(self):
        assert fallback_response("x", "foo") == fallback_response("x", "other_scm")

    def test_same_input_same_output(self):
        first = fallback_response("Late invoices", "coupa")
        second = fallback_response("Late invoices", "coupa")

        assert first == second

    def test_text_with_braces_is_inserted_verbatim(self):
        reply = fallback_response("Use {placeholder} values", "kinaxis")

        assert "Use {placeholder} values" in reply

    def test_empty_text_still_gives_reply(self):
        assert fallback_response("", "daily_hurdles")


class TestFallbackIdeaAndRefinement:
    """Tests for the generate/refine wrappers."""

    def test_fallback_idea_matches_response(self):
        assert fallback_idea("Slow picking", "manhattan") == fallback_response("Slow picking", "manhattan")

    def test_refinement_text_combines_idea_and_feedback(self):
        text = refinement_text("Use RFID tagging", "Cheaper please")

        assert text == "Use RFID tagging\n\nFeedback: Cheaper please"

    def test_fallback_refinement_contains_idea_and_feedback(self):
        reply = fallback_refinement("Use RFID tagging", "Cheaper please", "manhattan")

        assert "Use RFID tagging" in reply
        assert "Cheaper please" in reply
