"""
Value types shared by the providers, the API client and the pipeline.

All of them are immutable and built fresh for each call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union


class ErrorKind(str, Enum):
    """Classification of a failed generation."""
    CONFIG_ERROR = "ConfigError"
    TRANSPORT_ERROR = "TransportError"
    PARSE_ERROR = "ParseError"
    API_ERROR = "ApiError"
    EMPTY_RESPONSE = "EmptyResponse"


@dataclass(frozen=True)
class ProviderConfig:
    """Per-provider settings. api_key may be absent."""
    api_url: str
    model: str
    api_key: Optional[str] = None

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks
        key = "***" if self.api_key else None
        return f"ProviderConfig(api_url={self.api_url!r}, model={self.model!r}, api_key={key!r})"


@dataclass(frozen=True)
class GenerationRequest:
    provider: str
    model: str
    max_tokens: int
    temperature: float
    user_message: str

    def __post_init__(self):
        if self.max_tokens < 1:
            raise ValueError("max_tokens must be a positive integer")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError("temperature must be within [0, 1]")
        if not self.user_message:
            raise ValueError("user_message must not be empty")


@dataclass(frozen=True)
class HttpRequest:
    """A provider-encoded POST request, ready for the transport."""
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    def describe(self) -> str:
        """Human-readable message for this failure."""
        if self.kind == ErrorKind.TRANSPORT_ERROR:
            return f"HTTP request failed. {self.message}"
        if self.kind == ErrorKind.PARSE_ERROR:
            return f"Failed to parse API response: {self.message}"
        if self.kind == ErrorKind.API_ERROR:
            return f"API error: {self.message}"
        return self.message


GenerationResult = Union[Success, Failure]
