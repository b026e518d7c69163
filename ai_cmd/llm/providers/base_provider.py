"""
Base Provider Abstract Class for LLM APIs.

A provider translates between the generic GenerationRequest/GenerationResult
model and one backend's wire format. It never performs I/O itself; the
ApiClient hands the encoded request to a transport.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from ..types import (
    ErrorKind,
    Failure,
    GenerationRequest,
    GenerationResult,
    HttpRequest,
    ProviderConfig,
    Success,
)
from ..utils import (
    decode_body,
    extract_error_message,
    parse_json_body,
    truncate_body,
    user_messages,
)

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """
    Abstract base class for all LLM providers.

    Subclasses declare their identifier and display name, the credential
    headers they need, and where the generated text lives in a success body.
    """

    name: str = ""
    display_name: str = ""

    def __init__(self, config: ProviderConfig):
        self.config = config

    @property
    def api_key(self) -> Optional[str]:
        return self.config.api_key

    @property
    def model(self) -> str:
        return self.config.model

    @abstractmethod
    def auth_headers(self) -> Dict[str, str]:
        """Provider-specific credential header(s)."""
        pass

    @abstractmethod
    def extract_text(self, data: Dict[str, Any]) -> Optional[str]:
        """Pull the generated text out of a success body, or None."""
        pass

    def format_body(self, request: GenerationRequest) -> Dict[str, Any]:
        """Encode the request in the provider's schema."""
        return {
            "model": request.model,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
            "messages": user_messages(request.user_message),
        }

    def build_request(self, request: GenerationRequest) -> HttpRequest:
        """Build {url, headers, body} for a generation request."""
        headers = {"Content-Type": "application/json"}
        headers.update(self.auth_headers())
        return HttpRequest(
            url=self.config.api_url,
            headers=headers,
            body=json.dumps(self.format_body(request)),
        )

    def parse_response(self, body: Union[bytes, str]) -> GenerationResult:
        """Turn a raw response body into Success or a classified Failure."""
        text = decode_body(body)
        data = parse_json_body(text)
        if data is None:
            return Failure(ErrorKind.PARSE_ERROR, truncate_body(text))

        error_message = extract_error_message(data)
        if error_message is not None:
            logger.debug(f"{self.name} returned an error object: {error_message}")
            return Failure(ErrorKind.API_ERROR, error_message)

        generated = self.extract_text(data)
        if not generated:
            return Failure(
                ErrorKind.EMPTY_RESPONSE,
                f"No content found in {self.display_name} API response",
            )
        return Success(generated)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(model='{self.model}')"
