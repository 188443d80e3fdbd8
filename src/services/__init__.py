"""
Services module.

Contains external service integrations like the supply-chain AI assistant.
"""

from src.services.supply_chain_ai import (
    SupplyChainAssistant,
    AssistantReply,
    PLATFORM_KNOWLEDGE,
)

__all__ = [
    "SupplyChainAssistant",
    "AssistantReply",
    "PLATFORM_KNOWLEDGE",
]
