"""
Tests for the Web API.

Tests the Flask routes, status codes, JSON bodies and error handling.
The data store and AI services are replaced with in-memory doubles.
"""

import pytest
from unittest.mock import Mock, patch
from pathlib import Path

# Import the Flask app
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

import web.app as web_app
from web.app import app
from src.brainstorm.orchestrator import BrainstormingOrchestrator
from src.services.supply_chain_ai import AssistantReply
from src.storage.base import StoreError
from src.storage.supabase import MockSupabaseStore
from tests.test_config import EXPECTED, TEST_DATA


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def client():
    """Flask test client."""
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def store():
    """Fresh in-memory store used by every route."""
    store = MockSupabaseStore()
    with patch("web.app.get_store", return_value=store):
        yield store


@pytest.fixture
def sessions(mock_generator):
    """Brainstorm sessions backed by the mock generator."""
    def create():
        orchestrator = BrainstormingOrchestrator(mock_generator)
        orchestrator.initialize()
        return orchestrator

    with patch("web.app.create_orchestrator", side_effect=create):
        yield web_app._sessions
    web_app._sessions.clear()


def start_session(client, category="manhattan"):
    """Open a brainstorming session and return its id."""
    response = client.post("/api/brainstorm/start", json={"category": category})
    return response.get_json()["session_id"]


# =============================================================================
# Landing and Analytics
# =============================================================================

class TestLandingRoutes:
    """Tests for stats, visits and analytics."""

    def test_stats(self, client, store):
        response = client.get("/api/stats")

        assert response.status_code == 200
        assert response.get_json()["categories"] == 6

    def test_record_visit(self, client, store):
        response = client.post("/api/visits")

        assert response.get_json() == {"recorded": True}
        assert store.get_visitor_analytics()[-1].visitor_count == 1

    def test_analytics(self, client, store, sample_submission):
        client.post("/api/ideas", json=sample_submission)

        data = client.get("/api/analytics").get_json()

        assert data["total_ideas"] == 1
        assert data["ideas_by_category"][0]["label"] == "Manhattan"

    def test_categories(self, client):
        data = client.get("/api/categories").get_json()

        labels = [c["label"] for c in data["categories"]]
        assert labels == list(EXPECTED["labels"].values())


# =============================================================================
# Ideas
# =============================================================================

class TestIdeaRoutes:
    """Tests for idea submission and the best idea."""

    def test_submit_idea(self, client, store, sample_submission):
        response = client.post("/api/ideas", json=sample_submission)

        assert response.status_code == 201
        data = response.get_json()
        assert data["success"] is True
        assert data["user_created"] is True
        assert store.count_ideas() == 1

    def test_submit_invalid_idea(self, client, store, sample_submission):
        sample_submission["category"] = "foo"

        response = client.post("/api/ideas", json=sample_submission)

        assert response.status_code == 400
        assert response.get_json()["details"]
        assert store.count_ideas() == 0

    def test_submit_non_string_fields(self, client, store, sample_submission):
        sample_submission["name"] = 1
        sample_submission["category"] = ["manhattan"]

        response = client.post("/api/ideas", json=sample_submission)

        assert response.status_code == 400
        details = response.get_json()["details"]
        assert "name must be text" in details
        assert "category must be text" in details
        assert store.count_ideas() == 0
        assert store.users == {}

    def test_submit_store_failure(self, client, store, sample_submission):
        store.insert_idea = Mock(side_effect=StoreError("down"))

        response = client.post("/api/ideas", json=sample_submission)

        assert response.status_code == 500
        assert response.get_json()["success"] is False

    def test_best_idea_none(self, client, store):
        response = client.get("/api/ideas/best")

        assert response.status_code == 404

    def test_best_idea(self, client, store, sample_submission):
        client.post("/api/ideas", json=sample_submission)

        response = client.get("/api/ideas/best")

        data = response.get_json()
        assert response.status_code == 200
        assert data["idea"]["title"] == sample_submission["title"]
        assert data["idea"]["author"]["name"] == sample_submission["name"]
        assert data["share_link"].startswith("mailto:")

    def test_best_idea_store_failure(self, client, store):
        store.get_best_idea = Mock(side_effect=StoreError("down"))

        assert client.get("/api/ideas/best").status_code == 500


# =============================================================================
# Knowledge Base
# =============================================================================

class TestKnowledgeRoutes:
    """Tests for knowledge base search, articles and export."""

    def test_submit_and_search(self, client, store):
        response = client.post("/api/articles", json={
            "title": "RFID primer",
            "content": "How tags work",
            "category": "technology",
        })
        assert response.status_code == 201

        data = client.get("/api/knowledge?q=rfid").get_json()

        assert data["count"] == 1
        assert data["articles"][0]["title"] == "RFID primer"

    def test_submit_blank_article(self, client, store):
        response = client.post("/api/articles", json={"title": "", "content": ""})

        assert response.status_code == 400

    def test_submit_non_string_article(self, client, store):
        response = client.post("/api/articles", json={"title": 1, "content": {"text": "x"}})

        assert response.status_code == 400
        assert len(response.get_json()["details"]) == 2
        assert store.articles == {}

    def test_export(self, client, store):
        response = client.get("/api/knowledge/export")

        assert response.status_code == 200
        assert response.mimetype == "text/csv"
        assert EXPECTED["export"]["filename"] in response.headers["Content-Disposition"]
        assert response.get_data(as_text=True).startswith('"Type"')

    def test_knowledge_store_failure(self, client, store):
        store.list_ideas = Mock(side_effect=StoreError("down"))

        assert client.get("/api/knowledge").status_code == 500


# =============================================================================
# Brainstorming
# =============================================================================

class TestBrainstormRoutes:
    """Tests for brainstorming sessions."""

    def test_start_session(self, client, sessions):
        data = client.post("/api/brainstorm/start", json={"category": "kinaxis"}).get_json()

        assert data["session_id"] in sessions
        assert data["category_label"] == "Kinaxis"
        assert "Kinaxis" in data["message"]

    def test_start_unknown_category_uses_default(self, client, sessions):
        data = client.post("/api/brainstorm/start", json={"category": "foo"}).get_json()

        assert data["category"] == "other_scm"

    def test_start_non_string_category_uses_default(self, client, sessions):
        response = client.post("/api/brainstorm/start", json={"category": 5})

        assert response.status_code == 200
        assert response.get_json()["category"] == "other_scm"

    def test_generate(self, client, sessions):
        session_id = start_session(client)

        response = client.post("/api/brainstorm/generate", json={
            "session_id": session_id,
            "problem": TEST_DATA["problems"]["manhattan"],
            "category": "manhattan",
        })

        data = response.get_json()
        assert data["idea"] == TEST_DATA["endpoint_replies"]["rfid"]
        assert data["source"] == "remote"
        assert len(sessions[session_id].history) == 1

    def test_generate_non_string_category(self, client, sessions, mock_generator):
        session_id = start_session(client)

        response = client.post("/api/brainstorm/generate", json={
            "session_id": session_id,
            "problem": "Trucks arrive late",
            "category": 5,
        })

        assert response.status_code == 200
        assert response.get_json()["idea"] == TEST_DATA["endpoint_replies"]["rfid"]

    def test_generate_requires_problem(self, client, sessions):
        session_id = start_session(client)

        response = client.post("/api/brainstorm/generate", json={
            "session_id": session_id,
            "problem": "  ",
        })

        assert response.status_code == 400

    def test_generate_non_string_problem(self, client, sessions):
        session_id = start_session(client)

        response = client.post("/api/brainstorm/generate", json={
            "session_id": session_id,
            "problem": ["Trucks arrive late"],
        })

        assert response.status_code == 400

    def test_refine_uses_session_idea(self, client, sessions, mock_generator):
        session_id = start_session(client, "manhattan")
        client.post("/api/brainstorm/generate", json={
            "session_id": session_id,
            "problem": "Trucks arrive late",
            "category": "manhattan",
        })

        data = client.post("/api/brainstorm/refine", json={
            "session_id": session_id,
            "feedback": "At the dock doors",
            "category": "manhattan",
        }).get_json()

        assert data["idea"] == TEST_DATA["endpoint_replies"]["refined"]
        assert mock_generator.refine.call_args.args[0] == TEST_DATA["endpoint_replies"]["rfid"]

    def test_refine_requires_feedback(self, client, sessions):
        session_id = start_session(client)

        response = client.post("/api/brainstorm/refine", json={
            "session_id": session_id,
            "current_idea": "x",
        })

        assert response.status_code == 400

    def test_message_then_end(self, client, sessions):
        session_id = start_session(client, "manhattan")

        data = client.post("/api/brainstorm/message", json={
            "session_id": session_id,
            "message": "Trucks arrive late",
            "category": "manhattan",
        }).get_json()
        assert data["reply"] == TEST_DATA["endpoint_replies"]["rfid"]

        response = client.delete(f"/api/brainstorm/{session_id}")

        assert response.get_json() == {"success": True}
        assert session_id not in sessions

    @pytest.mark.parametrize("route", ["generate", "refine", "message"])
    def test_unknown_session_is_404(self, client, sessions, route):
        response = client.post(f"/api/brainstorm/{route}", json={
            "session_id": "not-a-session",
            "problem": "x",
            "feedback": "x",
            "current_idea": "x",
            "message": "x",
        })

        assert response.status_code == 404
        assert len(sessions) == 0

    def test_missing_session_id_is_404(self, client, sessions):
        response = client.post("/api/brainstorm/message", json={"message": "x"})

        assert response.status_code == 404
        assert len(sessions) == 0

    def test_random_session_ids_do_not_create_sessions(self, client, sessions):
        for i in range(50):
            client.post("/api/brainstorm/message", json={
                "session_id": f"session-{i}",
                "message": "Trucks arrive late",
            })

        assert len(sessions) == 0

    def test_sessions_are_capped_least_recently_used_first(self, client, sessions):
        with patch("web.app.MAX_SESSIONS", 2):
            first = start_session(client)
            second = start_session(client)
            # Touch the first session so the second becomes the oldest
            client.post("/api/brainstorm/message", json={"session_id": first, "message": "x"})
            third = start_session(client)

        assert list(sessions) == [first, third]
        assert second not in sessions

    def test_end_unknown_session_is_404(self, client, sessions):
        response = client.delete("/api/brainstorm/not-a-session")

        assert response.status_code == 404


# =============================================================================
# Idea Generation Endpoint
# =============================================================================

class TestSupplyChainAIEndpoint:
    """Tests for the endpoint the remote client talks to."""

    def test_options_returns_cors_headers(self, client):
        response = client.options("/api/supply-chain-ai")

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_requires_message(self, client):
        response = client.post("/api/supply-chain-ai", json={"category": "Kinaxis"})

        assert response.status_code == 400

    @patch("web.app.SupplyChainAssistant")
    def test_success(self, mock_assistant_cls, client):
        mock_assistant_cls.return_value.respond.return_value = AssistantReply(
            success=True, response="Use RFID tagging", category="Manhattan"
        )

        response = client.post("/api/supply-chain-ai", json={
            "message": "Trucks arrive late",
            "category": "Manhattan",
            "context": [{"role": "user", "content": "earlier"}],
        })

        assert response.status_code == 200
        assert response.get_json() == {"response": "Use RFID tagging", "category": "Manhattan"}
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        kwargs = mock_assistant_cls.return_value.respond.call_args.kwargs
        assert kwargs["context"] == [{"role": "user", "content": "earlier"}]

    @patch("web.app.SupplyChainAssistant")
    def test_failure_returns_500_with_error(self, mock_assistant_cls, client):
        mock_assistant_cls.return_value.respond.return_value = AssistantReply(
            success=False, response="", error="OpenAI API error (500): boom"
        )

        response = client.post("/api/supply-chain-ai", json={"message": "x"})

        assert response.status_code == 500
        assert "error" in response.get_json()

    def test_ai_status(self, client):
        data = client.get("/api/ai/status").get_json()

        assert set(data) == {"assistant_available", "model", "endpoint_configured"}
