"""
Anthropic Provider Implementation.

Messages API: credential in `x-api-key` plus a pinned `anthropic-version`
header; generated text is the first element of the `content` list.
"""

from typing import Any, Dict, Optional

from .base_provider import BaseProvider
from ..utils import extract_text_from_content

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(BaseProvider):
    """Anthropic Messages API."""

    name = "anthropic"
    display_name = "Anthropic"

    def auth_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key or "",
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        return extract_text_from_content(data.get("content"))
