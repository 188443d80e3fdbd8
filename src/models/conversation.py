"""
Brainstorming conversation state.

A ConversationHistory is a bounded FIFO of prompt/response exchanges. It lives
inside a single brainstorming session and is never persisted.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List

DEFAULT_HISTORY_LIMIT = 4
DEFAULT_CONTEXT_TURNS = 4

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """One message in the chat, as sent to the chat-completion API."""

    role: str
    content: str

    def __post_init__(self) -> None:
        if self.role not in (USER_ROLE, ASSISTANT_ROLE):
            raise ValueError(f"role must be 'user' or 'assistant', got {self.role!r}")

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class Exchange:
    """A prompt and the response it produced."""

    prompt: str
    response: str

    def turns(self) -> List[ConversationTurn]:
        return [
            ConversationTurn(USER_ROLE, self.prompt),
            ConversationTurn(ASSISTANT_ROLE, self.response),
        ]


class ConversationHistory:
    """
    Rolling window of the most recent exchanges.

    Holds at most `limit` exchanges; appending past the limit evicts the
    oldest one.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self.limit = limit
        self._exchanges: Deque[Exchange] = deque(maxlen=limit)

    def append(self, prompt: str, response: str) -> None:
        self._exchanges.append(Exchange(prompt, response))

    def exchanges(self) -> List[Exchange]:
        return list(self._exchanges)

    def turns(self) -> List[ConversationTurn]:
        return [turn for exchange in self._exchanges for turn in exchange.turns()]

    def context(self, max_turns: int = DEFAULT_CONTEXT_TURNS) -> List[Dict[str, str]]:
        """Last `max_turns` turns as role/content dicts, oldest first."""
        if max_turns <= 0:
            return []
        return [turn.to_dict() for turn in self.turns()[-max_turns:]]

    def clear(self) -> None:
        self._exchanges.clear()

    def __len__(self) -> int:
        return len(self._exchanges)

    def __repr__(self) -> str:
        return f"ConversationHistory(limit={self.limit}, size={len(self)})"
