"""
Brainstorming orchestrator.

Coordinates "generate" and "refine" requests for one brainstorming session:

    request -> remote generation (one attempt) -> fallback template on failure

Each call returns exactly one reply, either the remote text or the fallback
text, and never raises once the orchestrator is initialized. Successful
remote exchanges are kept in a rolling history (oldest evicted first) that is
sent back as context on the next request.

Usage:
    orchestrator = BrainstormingOrchestrator(RemoteIdeaClient())
    orchestrator.initialize()
    idea = orchestrator.generate_idea("Trucks arrive late", "manhattan")
"""

import logging
from typing import Optional

from src.brainstorm.categories import get_category_context
from src.brainstorm.client import IdeaGenerator, GenerationResult
from src.brainstorm.fallback import fallback_idea, fallback_refinement
from src.models.conversation import ConversationHistory, DEFAULT_HISTORY_LIMIT

logger = logging.getLogger(__name__)

SOURCE_REMOTE = "remote"
SOURCE_FALLBACK = "fallback"


class NotInitializedError(RuntimeError):
    """Raised when the orchestrator is used before initialize()."""

    def __init__(self, message: str = "not initialized"):
        super().__init__(message)


class BrainstormingOrchestrator:
    """
    Two-tier idea generation for a single session.

    Owned by the caller (one per chat session); holds no process-wide state.
    """

    def __init__(
        self,
        generator: Optional[IdeaGenerator] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        """
        Args:
            generator: Remote generation path. None means fallback only.
            history_limit: Maximum number of exchanges kept in history.
        """
        self.generator = generator
        self.history = ConversationHistory(limit=history_limit)
        self.current_idea: Optional[str] = None
        self.last_source: Optional[str] = None
        self._initialized = False
        self._remote_ready = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def remote_ready(self) -> bool:
        return self._remote_ready

    def initialize(self) -> None:
        """
        Prepare the remote path. Safe to call more than once.

        A failure here is not fatal: the orchestrator is still marked
        initialized and every call degrades to the fallback reply.
        """
        if self._initialized:
            return

        if self.generator is None:
            logger.warning("No idea generator configured; brainstorming will use fallback replies")
        else:
            try:
                self.generator.prepare()
                self._remote_ready = True
                logger.info("Remote idea generation ready")
            except Exception as e:
                logger.warning("Remote idea generation unavailable, using fallback replies: %s", e)

        self._initialized = True

    def generate_idea(self, problem: str, category: str) -> str:
        """
        Generate an idea for a problem statement.

        Raises:
            NotInitializedError: If initialize() has not been called.
        """
        self._require_initialized()

        result = self._attempt(
            lambda: self.generator.generate(problem, category, self.history)
        )
        if result is not None:
            self.history.append(problem, result.text)
            return self._remote(result.text)

        return self._fallback(fallback_idea(problem, category))

    def refine_idea(self, current_idea: str, feedback: str, category: str) -> str:
        """
        Refine an idea based on feedback.

        Raises:
            NotInitializedError: If initialize() has not been called.
        """
        self._require_initialized()

        result = self._attempt(
            lambda: self.generator.refine(current_idea, feedback, category, self.history)
        )
        if result is not None:
            self.history.append(feedback, result.text)
            return self._remote(result.text)

        return self._fallback(fallback_refinement(current_idea, feedback, category))

    def respond(self, message: str, category: str) -> str:
        """
        Chat entry point: refine the current idea if there is one, else
        generate a new one. The reply becomes the current idea.
        """
        if self.current_idea:
            reply = self.refine_idea(self.current_idea, message, category)
        else:
            reply = self.generate_idea(message, category)
        self.current_idea = reply
        return reply

    def reset(self) -> None:
        """Forget the conversation and the current idea."""
        self.history.clear()
        self.current_idea = None
        self.last_source = None

    @staticmethod
    def welcome_message(category: str) -> str:
        """Greeting shown when a session opens."""
        context = get_category_context(category)
        return (
            f"Hello! I'm your AI brainstorming assistant for {context.label}. "
            f"{context.summary}.\n\n"
            "Tell me about the problem or challenge you're facing, and I'll help "
            "you generate innovative solutions!"
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError()

    def _attempt(self, call) -> Optional[GenerationResult]:
        """Single remote attempt. Returns the result on success, else None."""
        if not self._remote_ready:
            return None

        try:
            result = call()
        except Exception as e:
            logger.warning("Idea generator raised, using fallback reply: %s", e)
            return None

        if result is None or not result.success:
            reason = result.error if result is not None else "no result"
            logger.warning("Remote generation failed, using fallback reply: %s", reason)
            return None

        return result

    def _remote(self, text: str) -> str:
        self.last_source = SOURCE_REMOTE
        return text

    def _fallback(self, text: str) -> str:
        self.last_source = SOURCE_FALLBACK
        return text
