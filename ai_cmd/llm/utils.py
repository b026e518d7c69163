"""
Utility functions for LLM providers.

Response body decoding, truncation and text extraction helpers shared by
the provider implementations.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

# Longest excerpt of a raw response body quoted in an error message
MAX_ERROR_BODY_CHARS = 1500


def decode_body(body: Union[bytes, str]) -> str:
    """Decode a raw response body as UTF-8, replacing invalid bytes."""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def truncate_body(text: str, limit: int = MAX_ERROR_BODY_CHARS) -> str:
    """Return at most `limit` characters of a raw body."""
    return text[:limit]


def parse_json_body(text: str) -> Optional[Dict[str, Any]]:
    """
    Parse a response body as a JSON object.

    Returns None when the body is not valid JSON or is not an object.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        logger.debug(f"Response body is JSON but not an object: {type(data).__name__}")
        return None
    return data


def extract_error_message(data: Dict[str, Any]) -> Optional[str]:
    """
    Return the provider's error message when the body carries an error object.

    Both supported providers use {"error": {"message": "..."}}. An error
    object without a message yields "Unknown error".
    """
    error = data.get("error")
    if error is None:
        return None
    if isinstance(error, dict):
        message = error.get("message")
        return str(message) if message else "Unknown error"
    # Some gateways return {"error": "text"}
    return str(error) or "Unknown error"


def extract_text_from_content(content: Any) -> Optional[str]:
    """
    Extract the text of the first content block.

    Handles both a plain string and a list of content blocks
    ({"type": "text", "text": "..."}).
    """
    if isinstance(content, str):
        return content or None
    if isinstance(content, list) and content:
        first = content[0]
        if isinstance(first, dict):
            text = first.get("text")
            if isinstance(text, str) and text:
                return text
    return None


def first_choice_content(choices: Any) -> Optional[str]:
    """Return choices[0].message.content from a chat completion body."""
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if isinstance(content, list):
        return extract_text_from_content(content)
    if isinstance(content, str) and content:
        return content
    return None


def user_messages(text: str) -> List[Dict[str, str]]:
    """Build the single-turn message list used by both request schemas."""
    return [{"role": "user", "content": text}]
