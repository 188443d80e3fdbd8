"""
Supply-chain AI assistant using OpenAI.

Server side of the idea-generation endpoint: builds a supply-chain expert
system prompt for the requested platform, forwards the conversation to the
chat-completions API and returns the reply.
"""

import json
import logging
import requests
from typing import Optional, List, Dict, Any
from dataclasses import dataclass

from src.config import (
    OPENAI_API_KEY,
    OPENAI_MODEL,
    OPENAI_TEMPERATURE,
    OPENAI_MAX_TOKENS,
    REQUEST_TIMEOUT,
)

logger = logging.getLogger(__name__)


# Platform knowledge, keyed by the category display label the client sends
PLATFORM_KNOWLEDGE: Dict[str, Dict[str, Any]] = {
    "Blue Yonder": {
        "description": "AI-driven supply chain solutions focusing on demand planning, inventory optimization, and autonomous supply chains",
        "capabilities": ["Demand sensing", "Inventory optimization", "Supply planning", "Warehouse management", "Transportation optimization", "Price optimization"],
        "features": ["Machine learning algorithms", "Real-time analytics", "Autonomous replenishment", "Multi-echelon inventory optimization"],
    },
    "Kinaxis": {
        "description": "RapidResponse platform for concurrent supply chain planning with real-time visibility and scenario modeling",
        "capabilities": ["Demand planning", "Supply planning", "S&OP", "Risk management", "Scenario modeling", "Real-time collaboration"],
        "features": ["Concurrent planning", "What-if analysis", "Supply chain control tower", "Risk monitoring", "Multi-tier visibility"],
    },
    "Coupa": {
        "description": "Business Spend Management platform covering procurement, invoicing, expenses, and supply chain collaboration",
        "capabilities": ["Procurement", "Supplier management", "Contract management", "Invoice processing", "Expense management", "Supply chain collaboration"],
        "features": ["AI-powered insights", "Supplier risk management", "Spend analytics", "Contract lifecycle management", "Community intelligence"],
    },
    "Manhattan": {
        "description": "Supply chain commerce solutions for warehouse management, transportation, and omnichannel fulfillment",
        "capabilities": ["Warehouse management", "Transportation management", "Distributed order management", "Labor management", "Yard management"],
        "features": ["Real-time inventory tracking", "Advanced fulfillment", "Labor optimization", "Route optimization", "Multi-channel distribution"],
    },
    "Daily Hurdles": {
        "description": "Common operational challenges in supply chain and business operations",
        "areas": ["Process inefficiencies", "Communication gaps", "Resource constraints", "Technology limitations", "Compliance issues"],
    },
}


@dataclass
class AssistantReply:
    """Result of an assistant request."""
    success: bool
    response: str
    category: Optional[str] = None
    error: Optional[str] = None
    model: Optional[str] = None
    tokens_used: int = 0


class SupplyChainAssistant:
    """Supply-chain brainstorming assistant backed by OpenAI chat completions."""

    API_URL = "https://api.openai.com/v1/chat/completions"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key or OPENAI_API_KEY
        self.model = model or OPENAI_MODEL

    def is_available(self) -> bool:
        """Check if the assistant is available (API key configured)."""
        return bool(self.api_key)

    def respond(
        self,
        message: str,
        category: Optional[str] = None,
        context: Optional[List[Dict[str, str]]] = None,
    ) -> AssistantReply:
        """
        Answer a brainstorming message.

        Args:
            message: The user's message (already a full prompt from the client)
            category: Category display label, e.g. "Kinaxis"
            context: Prior turns as {"role", "content"} dicts

        Returns:
            AssistantReply with the generated text or error
        """
        if not self.is_available():
            return AssistantReply(
                success=False,
                response="",
                category=category,
                error="AI assistant not configured. Add OPENAI_API_KEY to .env",
            )

        messages = [{"role": "system", "content": self.build_system_prompt(category)}]
        messages.extend(_clean_context(context))
        messages.append({"role": "user", "content": message})

        try:
            return self._call_api(messages, category)
        except Exception as e:
            logger.error("Supply chain AI request failed: %s", e)
            return AssistantReply(
                success=False,
                response="",
                category=category,
                error=f"API error: {str(e)}",
            )

    @staticmethod
    def build_system_prompt(category: Optional[str]) -> str:
        """Build the expert system prompt, focused on one platform when known."""
        focus = ""
        knowledge = PLATFORM_KNOWLEDGE.get(category) if isinstance(category, str) else None
        if knowledge:
            focus = f"""
CURRENT FOCUS: {category}
{json.dumps(knowledge, indent=2)}
"""

        return f"""You are a specialized AI assistant for supply chain management and innovation. You have deep expertise in the following platforms and areas:
{focus}
SUPPLY CHAIN PLATFORMS EXPERTISE:
- Kinaxis RapidResponse: Concurrent planning, real-time visibility, scenario modeling, S&OP
- Blue Yonder: AI-driven demand planning, inventory optimization, autonomous supply chains
- Coupa: Business spend management, procurement, supplier management, contract management
- Manhattan: Warehouse management, transportation, omnichannel fulfillment, labor optimization

Your role is to:
1. Help users brainstorm innovative solutions for supply chain challenges
2. Provide specific insights related to the selected platform/category
3. Suggest practical implementation approaches
4. Consider integration possibilities between different platforms
5. Focus on real-world business value and ROI

Be specific, actionable, and innovative in your responses. Consider both technical and business perspectives."""

    def _call_api(self, messages: List[Dict[str, str]], category: Optional[str]) -> AssistantReply:
        """Make API call to OpenAI."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": OPENAI_TEMPERATURE,
            "max_tokens": OPENAI_MAX_TOKENS,
        }

        response = requests.post(
            self.API_URL,
            headers=headers,
            json=payload,
            timeout=REQUEST_TIMEOUT,
        )

        if response.status_code != 200:
            try:
                error_msg = response.json().get("error", {}).get("message", response.text)
            except ValueError:
                error_msg = response.text
            logger.warning("OpenAI API error (%s): %s", response.status_code, error_msg)
            return AssistantReply(
                success=False,
                response="",
                category=category,
                error=f"OpenAI API error ({response.status_code}): {error_msg}",
            )

        data = response.json()
        content = data["choices"][0]["message"]["content"]
        tokens = data.get("usage", {}).get("total_tokens", 0)

        return AssistantReply(
            success=True,
            response=content,
            category=category,
            model=self.model,
            tokens_used=tokens,
        )


def _clean_context(context: Optional[List[Dict[str, str]]]) -> List[Dict[str, str]]:
    """Keep only well-formed user/assistant turns."""
    cleaned = []
    for turn in context or []:
        if not isinstance(turn, dict):
            continue
        role = turn.get("role")
        content = turn.get("content")
        if role in ("user", "assistant") and isinstance(content, str):
            cleaned.append({"role": role, "content": content})
    return cleaned
