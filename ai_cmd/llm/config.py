"""
Provider defaults and credential lookup for AI Cmd.

API keys come from ~/.config/ai-cmd/config.toml when set there, otherwise
from environment variables, optionally loaded from a .env file.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# .env in the project root (ai_cmd/llm/config.py -> ai_cmd/ -> project root), then CWD
_env_paths = [
    Path(__file__).parent.parent.parent / ".env",
    Path.cwd() / ".env",
]

DEFAULT_PROVIDER = "anthropic"

DEFAULT_API_URLS: Dict[str, str] = {
    "anthropic": "https://api.anthropic.com/v1/messages",
    "openai": "https://api.openai.com/v1/chat/completions",
}

DEFAULT_MODELS: Dict[str, str] = {
    "anthropic": "claude-3-5-sonnet-20241022",
    "openai": "gpt-4",
}

API_KEY_ENV_VARS: Dict[str, str] = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}

DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.1

# Deadline for one HTTP exchange, in seconds
HTTP_TIMEOUT = 60


def load_env() -> bool:
    """Load the first .env file found. Returns True if one was loaded."""
    for env_path in _env_paths:
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)
            logger.debug(f"Loaded .env from {env_path}")
            return True
    logger.debug(".env not found; using environment variables if set.")
    return False


def api_key_from_env(provider: str) -> Optional[str]:
    """Credential for a provider from its environment variable, if any."""
    var = API_KEY_ENV_VARS.get(provider)
    if not var:
        return None
    return os.getenv(var) or None
