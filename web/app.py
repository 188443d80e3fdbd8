"""
Innovation Hub - Web API

A Flask-based JSON API for submitting ideas, browsing the knowledge base,
reading analytics and brainstorming with AI.

Run with: python -m web.app
Or: cd web && python app.py
"""

import logging
import sys
import uuid
from pathlib import Path
from collections import OrderedDict
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, Response, request, jsonify

from src.analytics import AnalyticsService, share_link
from src.brainstorm import (
    BrainstormingOrchestrator,
    RemoteIdeaClient,
    all_categories,
    get_category_context,
)
from src.config import SUPABASE_URL, SUPABASE_KEY, WEB_PORT, setup_logging
from src.knowledge import KnowledgeBase, EXPORT_FILENAME
from src.models.category import Category
from src.services.supply_chain_ai import SupplyChainAssistant
from src.storage import Store, StoreError, SupabaseStore, MockSupabaseStore
from src.submission import IdeaSubmissionWorkflow, SubmissionError, FormValidationError

logger = logging.getLogger(__name__)

app = Flask(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


# =============================================================================
# Store and Session Tracking
# =============================================================================

# In-memory store used when Supabase is not configured (development)
_mock_store: Optional[MockSupabaseStore] = None

# Brainstorming sessions (one orchestrator per chat session), least recently
# used first. Ids are only minted by /api/brainstorm/start.
MAX_SESSIONS = 200
_sessions: "OrderedDict[str, BrainstormingOrchestrator]" = OrderedDict()


def get_store() -> Store:
    """Get the configured data store (in-memory when Supabase is not set up)."""
    global _mock_store
    if SUPABASE_URL and SUPABASE_KEY:
        return SupabaseStore()
    if _mock_store is None:
        logger.warning("Supabase not configured; using in-memory store")
        _mock_store = MockSupabaseStore()
    return _mock_store


def create_orchestrator() -> BrainstormingOrchestrator:
    """Build and initialize an orchestrator for a new session."""
    orchestrator = BrainstormingOrchestrator(RemoteIdeaClient())
    orchestrator.initialize()
    return orchestrator


def start_session() -> tuple[str, BrainstormingOrchestrator]:
    """Open a new session, evicting the least recently used past MAX_SESSIONS."""
    session_id = str(uuid.uuid4())
    _sessions[session_id] = create_orchestrator()

    while len(_sessions) > MAX_SESSIONS:
        evicted, _ = _sessions.popitem(last=False)
        logger.info("Evicted idle brainstorming session %s", evicted)

    return session_id, _sessions[session_id]


def get_session(session_id) -> Optional[BrainstormingOrchestrator]:
    """Look up an open session, or None if the id is unknown."""
    if not isinstance(session_id, str) or session_id not in _sessions:
        return None
    _sessions.move_to_end(session_id)
    return _sessions[session_id]


def _session_not_found():
    return jsonify({"error": "Unknown session. Start one with /api/brainstorm/start"}), 404


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text(data: dict, key: str) -> str:
    """Stripped string value of a JSON field ("" when missing or not text)."""
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


# =============================================================================
# Landing and Analytics
# =============================================================================

@app.route("/api/stats")
def api_stats():
    """Headline statistics for the landing page."""
    return jsonify(AnalyticsService(get_store()).landing_stats())


@app.route("/api/visits", methods=["POST"])
def api_record_visit():
    """Track a visitor (best-effort)."""
    recorded = AnalyticsService(get_store()).record_visit()
    return jsonify({"recorded": recorded})


@app.route("/api/analytics")
def api_analytics():
    """Dashboard data: visitors, submissions by category, totals."""
    snapshot = AnalyticsService(get_store()).snapshot()
    return jsonify(snapshot.to_dict())


@app.route("/api/categories")
def api_categories():
    """Idea categories with labels and descriptions."""
    return jsonify({
        "categories": [
            {"value": c.category.value, "label": c.label, "description": c.summary}
            for c in all_categories()
        ]
    })


# =============================================================================
# Ideas
# =============================================================================

@app.route("/api/ideas", methods=["POST"])
def api_submit_idea():
    """Submit an idea from the submission form."""
    data = _json_body()
    workflow = IdeaSubmissionWorkflow(get_store())

    try:
        result = workflow.submit(
            name=data.get("name", ""),
            email=data.get("email", ""),
            title=data.get("title", ""),
            description=data.get("description", ""),
            category=data.get("category", ""),
        )
    except FormValidationError as e:
        return jsonify({"success": False, "error": "Invalid submission", "details": e.errors}), 400
    except SubmissionError as e:
        return jsonify({"success": False, "error": str(e)}), 500

    return jsonify({
        "success": True,
        "message": "Your idea has been submitted and a confirmation email will be sent shortly.",
        "idea": result.idea.to_dict(),
        "user_created": result.user_created,
    }), 201


@app.route("/api/ideas/best")
def api_best_idea():
    """The most-voted idea, with a share-by-email link."""
    try:
        idea = AnalyticsService(get_store()).best_idea()
    except StoreError as e:
        logger.error("Error fetching best idea: %s", e)
        return jsonify({"error": "Failed to fetch the best idea. Please try again."}), 500

    if idea is None:
        return jsonify({
            "error": "No ideas found",
            "message": "No ideas have been submitted yet. Be the first to share your innovation!",
        }), 404

    return jsonify({"idea": idea.to_dict(), "share_link": share_link(idea)})


# =============================================================================
# Knowledge Base
# =============================================================================

@app.route("/api/knowledge")
def api_knowledge():
    """Published articles and ideas, filtered by ?q=."""
    query = request.args.get("q", "")

    try:
        results = KnowledgeBase(get_store()).search(query)
    except StoreError as e:
        logger.error("Error loading knowledge base: %s", e)
        return jsonify({"error": "Failed to load knowledge base data."}), 500

    return jsonify({
        "query": results.query,
        "count": results.total,
        "articles": [a.to_dict() for a in results.articles],
        "ideas": [i.to_dict() for i in results.ideas],
    })


@app.route("/api/articles", methods=["POST"])
def api_submit_article():
    """Submit a knowledge base article."""
    data = _json_body()

    try:
        article = KnowledgeBase(get_store()).submit_article(
            title=data.get("title", ""),
            content=data.get("content", ""),
            category=data.get("category", "general"),
        )
    except FormValidationError as e:
        return jsonify({"success": False, "error": "Please fill in all fields.", "details": e.errors}), 400
    except StoreError as e:
        logger.error("Error submitting article: %s", e)
        return jsonify({"success": False, "error": "Failed to submit article. Please try again."}), 500

    return jsonify({"success": True, "article": article.to_dict()}), 201


@app.route("/api/knowledge/export")
def api_knowledge_export():
    """Download the knowledge base as CSV."""
    try:
        csv_text = KnowledgeBase(get_store()).export(request.args.get("q", ""))
    except StoreError as e:
        logger.error("Error exporting knowledge base: %s", e)
        return jsonify({"error": "Failed to export knowledge base."}), 500

    return Response(
        csv_text,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


# =============================================================================
# Brainstorming
# =============================================================================

@app.route("/api/brainstorm/start", methods=["POST"])
def api_brainstorm_start():
    """Open a brainstorming session and return the welcome message."""
    data = _json_body()
    category = Category.parse(data.get("category")).value
    session_id, orchestrator = start_session()

    return jsonify({
        "session_id": session_id,
        "category": category,
        "category_label": get_category_context(category).label,
        "remote_ready": orchestrator.remote_ready,
        "message": orchestrator.welcome_message(category),
    })


@app.route("/api/brainstorm/generate", methods=["POST"])
def api_brainstorm_generate():
    """Generate an idea for a problem statement."""
    data = _json_body()
    session_id = data.get("session_id")
    orchestrator = get_session(session_id)
    if orchestrator is None:
        return _session_not_found()

    problem = _text(data, "problem")
    if not problem:
        return jsonify({"error": "Problem statement required"}), 400

    idea = orchestrator.generate_idea(problem, data.get("category"))
    orchestrator.current_idea = idea

    return jsonify({"session_id": session_id, "idea": idea, "source": orchestrator.last_source})


@app.route("/api/brainstorm/refine", methods=["POST"])
def api_brainstorm_refine():
    """Refine an idea with user feedback."""
    data = _json_body()
    session_id = data.get("session_id")
    orchestrator = get_session(session_id)
    if orchestrator is None:
        return _session_not_found()

    current_idea = _text(data, "current_idea") or (orchestrator.current_idea or "").strip()
    feedback = _text(data, "feedback")
    if not current_idea or not feedback:
        return jsonify({"error": "Current idea and feedback required"}), 400

    idea = orchestrator.refine_idea(current_idea, feedback, data.get("category"))
    orchestrator.current_idea = idea

    return jsonify({"session_id": session_id, "idea": idea, "source": orchestrator.last_source})


@app.route("/api/brainstorm/message", methods=["POST"])
def api_brainstorm_message():
    """Chat message: refines the current idea if any, else generates one."""
    data = _json_body()
    session_id = data.get("session_id")
    orchestrator = get_session(session_id)
    if orchestrator is None:
        return _session_not_found()

    message = _text(data, "message")
    if not message:
        return jsonify({"error": "Message required"}), 400

    reply = orchestrator.respond(message, data.get("category"))

    return jsonify({"session_id": session_id, "reply": reply, "source": orchestrator.last_source})


@app.route("/api/brainstorm/<session_id>", methods=["DELETE"])
def api_brainstorm_end(session_id):
    """Close a brainstorming session."""
    if _sessions.pop(session_id, None) is None:
        return _session_not_found()
    return jsonify({"success": True})


# =============================================================================
# Idea Generation Endpoint (serverless function equivalent)
# =============================================================================

@app.route("/api/supply-chain-ai", methods=["POST", "OPTIONS"])
def api_supply_chain_ai():
    """
    Idea generation endpoint.

    Accepts {message, category, context}; returns {response, category} or
    500 with {error}.
    """
    if request.method == "OPTIONS":
        return Response(status=200, headers=CORS_HEADERS)

    data = _json_body()
    message = data.get("message")
    if not isinstance(message, str) or not message.strip():
        return jsonify({"error": "Message required"}), 400, CORS_HEADERS

    context = data.get("context")
    reply = SupplyChainAssistant().respond(
        message,
        category=data.get("category"),
        context=context if isinstance(context, list) else None,
    )

    if not reply.success:
        return jsonify({"error": reply.error or "Failed to generate AI response"}), 500, CORS_HEADERS

    return jsonify({"response": reply.response, "category": reply.category}), 200, CORS_HEADERS


@app.route("/api/ai/status")
def api_ai_status():
    """Check which AI paths are available."""
    assistant = SupplyChainAssistant()
    client = RemoteIdeaClient()
    return jsonify({
        "assistant_available": assistant.is_available(),
        "model": assistant.model if assistant.is_available() else None,
        "endpoint_configured": client.is_available(),
    })


if __name__ == "__main__":
    setup_logging()
    print("=" * 50)
    print("Innovation Hub API")
    print("=" * 50)
    print(f"Listening on http://localhost:{WEB_PORT}")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=True, port=WEB_PORT)
