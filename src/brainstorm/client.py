"""
Remote idea-generation client.

Sends brainstorming requests to the supply-chain AI endpoint (a serverless
function wrapping a chat-completion API) and reports the outcome as a
GenerationResult. Failures are returned, never raised, so the caller can fall
back to a local reply.

Request body:  {"message": str, "category": str, "context": [{"role", "content"}]}
Response body: {"response": str, "category": str}
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any

import requests

from src.brainstorm.categories import get_category_context
from src.config import SUPPLY_CHAIN_AI_URL, SUPABASE_KEY
from src.models.conversation import ConversationHistory, DEFAULT_CONTEXT_TURNS

logger = logging.getLogger(__name__)


class RemoteUnavailableError(Exception):
    """The remote generation path cannot be used (e.g. not configured)."""


@dataclass
class GenerationResult:
    """Result of a remote generate/refine request."""
    success: bool
    text: str
    error: Optional[str] = None
    category: Optional[str] = None


class IdeaGenerator(ABC):
    """
    Narrow interface the brainstorming orchestrator depends on.

    Implemented by RemoteIdeaClient and by test doubles.
    """

    def prepare(self) -> None:
        """
        Get ready to serve requests.

        Raises:
            RemoteUnavailableError: If the generator cannot be used.
        """

    @abstractmethod
    def generate(
        self,
        problem: str,
        category: str,
        history: ConversationHistory,
    ) -> GenerationResult:
        """Generate an idea for a problem statement."""

    @abstractmethod
    def refine(
        self,
        current_idea: str,
        feedback: str,
        category: str,
        history: ConversationHistory,
    ) -> GenerationResult:
        """Refine an existing idea based on user feedback."""


class RemoteIdeaClient(IdeaGenerator):
    """Idea generation over HTTP against the supply-chain AI endpoint."""

    def __init__(self, endpoint_url: Optional[str] = None, api_key: Optional[str] = None):
        self.endpoint_url = endpoint_url if endpoint_url is not None else SUPPLY_CHAIN_AI_URL
        self.api_key = api_key if api_key is not None else SUPABASE_KEY

    def is_available(self) -> bool:
        """Check if an endpoint is configured."""
        return bool(self.endpoint_url)

    def prepare(self) -> None:
        if not self.is_available():
            raise RemoteUnavailableError(
                "Idea generation endpoint not configured. Set SUPPLY_CHAIN_AI_URL or SUPABASE_URL in .env"
            )

    def generate(
        self,
        problem: str,
        category: str,
        history: ConversationHistory,
    ) -> GenerationResult:
        message = self._build_generate_prompt(problem, category)
        return self._send(message, category, history)

    def refine(
        self,
        current_idea: str,
        feedback: str,
        category: str,
        history: ConversationHistory,
    ) -> GenerationResult:
        message = self._build_refine_prompt(current_idea, feedback, category)
        return self._send(message, category, history)

    # =========================================================================
    # Prompt Building
    # =========================================================================

    @staticmethod
    def _build_generate_prompt(problem: str, category: str) -> str:
        """Build the message for a new idea."""
        context = get_category_context(category)
        return f"""{context.guidance}

Problem Statement: {problem}

Generate a creative and practical solution idea that addresses this problem. Provide a clear, actionable idea with specific benefits and implementation approach."""

    @staticmethod
    def _build_refine_prompt(current_idea: str, feedback: str, category: str) -> str:
        """Build the message for refining an idea."""
        context = get_category_context(category)
        return f"""{context.guidance}

Current Idea: {current_idea}

User Feedback: {feedback}

Based on the feedback, refine and improve the idea. Make it more specific, practical, and aligned with the user's needs."""

    # =========================================================================
    # Transport
    # =========================================================================

    @property
    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
            headers["apikey"] = self.api_key
        return headers

    def build_payload(
        self,
        message: str,
        category: str,
        history: ConversationHistory,
    ) -> Dict[str, Any]:
        """Request body: message, category display label, recent turns."""
        return {
            "message": message,
            "category": get_category_context(category).label,
            "context": history.context(DEFAULT_CONTEXT_TURNS),
        }

    def _send(
        self,
        message: str,
        category: str,
        history: ConversationHistory,
    ) -> GenerationResult:
        if not self.is_available():
            return GenerationResult(
                success=False,
                text="",
                error="Idea generation endpoint not configured",
            )

        payload = self.build_payload(message, category, history)

        try:
            # No timeout: the caller relies on the transport default
            response = requests.post(
                self.endpoint_url,
                headers=self._headers,
                json=payload,
            )
        except Exception as e:
            logger.warning("Idea generation request failed: %s", e)
            return GenerationResult(success=False, text="", error=f"Request error: {e}")

        if not 200 <= response.status_code < 300:
            logger.warning("Idea generation endpoint returned %s", response.status_code)
            return GenerationResult(
                success=False,
                text="",
                error=f"Endpoint error ({response.status_code}): {response.text[:200]}",
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Idea generation endpoint returned invalid JSON: %s", e)
            return GenerationResult(success=False, text="", error="Malformed response body")

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            logger.warning("Idea generation response has no text")
            return GenerationResult(success=False, text="", error="Malformed response body")

        return GenerationResult(
            success=True,
            text=text,
            category=data.get("category"),
        )
