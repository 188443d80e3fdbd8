"""
Configuration module.

Handles environment variables, API keys, and application settings.
"""

from src.config.config import (
    APP_ENV,
    DEBUG,
    LOG_LEVEL,
    SUPABASE_URL,
    SUPABASE_KEY,
    REQUEST_TIMEOUT,
    SUPPLY_CHAIN_AI_URL,
    OPENAI_API_KEY,
    OPENAI_MODEL,
    OPENAI_TEMPERATURE,
    OPENAI_MAX_TOKENS,
    WEB_PORT,
    is_production,
    is_development,
    validate_config,
    print_config_summary,
    setup_logging,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "LOG_LEVEL",
    "SUPABASE_URL",
    "SUPABASE_KEY",
    "REQUEST_TIMEOUT",
    "SUPPLY_CHAIN_AI_URL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_TEMPERATURE",
    "OPENAI_MAX_TOKENS",
    "WEB_PORT",
    "is_production",
    "is_development",
    "validate_config",
    "print_config_summary",
    "setup_logging",
]
