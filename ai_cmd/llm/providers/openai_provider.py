"""
OpenAI Provider Implementation.

Chat Completions API: bearer token in `Authorization`; generated text is
`choices[0].message.content`. Any OpenAI-compatible endpoint works by
overriding api_url.
"""

from typing import Any, Dict, Optional

from .base_provider import BaseProvider
from ..utils import first_choice_content


class OpenAIProvider(BaseProvider):
    """OpenAI Chat Completions API."""

    name = "openai"
    display_name = "OpenAI"

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key or ''}"}

    def extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        return first_choice_content(data.get("choices"))
