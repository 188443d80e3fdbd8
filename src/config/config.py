"""
Configuration module for the Innovation Hub.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of src/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
# Default: "development" for safe local testing
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug mode for verbose logging (only in development)
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

# Root log level for the CLI and web entry points
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


# =============================================================================
# Supabase Configuration
# =============================================================================

# Project URL, e.g. https://abcd1234.supabase.co
# Required for production; empty string as default for development
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").rstrip("/")

# Anon or service key, sent as both "apikey" and bearer token
SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")

# HTTP request timeout in seconds for data store and OpenAI calls
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))


# =============================================================================
# Idea Generation Endpoint
# =============================================================================

# Serverless function that wraps the chat-completion API.
# Defaults to the Supabase edge function when a project URL is configured.
SUPPLY_CHAIN_AI_URL: str = os.getenv(
    "SUPPLY_CHAIN_AI_URL",
    f"{SUPABASE_URL}/functions/v1/supply-chain-ai" if SUPABASE_URL else "",
)


# =============================================================================
# OpenAI (server-side assistant only)
# =============================================================================

OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_TEMPERATURE: float = float(os.getenv("OPENAI_TEMPERATURE", "0.7"))
OPENAI_MAX_TOKENS: int = int(os.getenv("OPENAI_MAX_TOKENS", "1000"))


# =============================================================================
# Web Dashboard
# =============================================================================

WEB_PORT: int = int(os.getenv("WEB_PORT", "5001"))


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return APP_ENV == "development"


def validate_config() -> list[str]:
    """
    Validate that required configuration is present for production.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production():
        if not SUPABASE_URL:
            errors.append("SUPABASE_URL is required in production")
        if not SUPABASE_KEY:
            errors.append("SUPABASE_KEY is required in production")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if OPENAI_MAX_TOKENS < 1:
        errors.append("OPENAI_MAX_TOKENS must be at least 1")

    if not (0.0 <= OPENAI_TEMPERATURE <= 2.0):
        errors.append("OPENAI_TEMPERATURE must be between 0.0 and 2.0")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  LOG_LEVEL: {LOG_LEVEL}")
    print(f"  SUPABASE_URL: {SUPABASE_URL or '(not set)'}")
    print(f"  SUPABASE_KEY: {'***' if SUPABASE_KEY else '(not set)'}")
    print(f"  SUPPLY_CHAIN_AI_URL: {SUPPLY_CHAIN_AI_URL or '(not set)'}")
    print(f"  OPENAI_API_KEY: {'***' if OPENAI_API_KEY else '(not set)'}")
    print(f"  OPENAI_MODEL: {OPENAI_MODEL}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")


def setup_logging(level: str = None) -> None:
    """Configure root logging for the CLI and web entry points."""
    if DEBUG:
        level = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
