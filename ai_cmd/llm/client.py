"""
API client for AI Cmd.

Encodes a generation request through the active provider, runs it through
the transport, and classifies the outcome. Single attempt, no retries.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .providers.base_provider import BaseProvider
from .transport import CurlTransport, Transport
from .types import ErrorKind, Failure, GenerationRequest, GenerationResult, HttpRequest

logger = logging.getLogger(__name__)

# Debug log directory
DEBUG_LOG_DIR = Path.home() / ".local" / "share" / "ai-cmd"
DEBUG_LOG_FILE = DEBUG_LOG_DIR / "debug.log"

_SECRET_HEADERS = ("x-api-key", "authorization")


def build_curl_args(http_request: HttpRequest) -> List[str]:
    """Express an HttpRequest as a curl invocation."""
    args = ["curl", "-sS", "-X", "POST"]
    for name, value in http_request.headers.items():
        args += ["-H", f"{name}: {value}"]
    args += [http_request.url, "-d", http_request.body]
    return args


def redact_args(argv: Sequence[str]) -> List[str]:
    """Copy of curl args with credential header values masked."""
    redacted = []
    for arg in argv:
        name, sep, _ = arg.partition(":")
        if sep and name.strip().lower() in _SECRET_HEADERS:
            redacted.append(f"{name}: ***")
        else:
            redacted.append(arg)
    return redacted


class ApiClient:
    """
    Sends generation requests to the configured provider.

    Every outcome is returned as a GenerationResult; transport and
    parsing problems never raise.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        debug: bool = False,
        debug_log_file: Path = DEBUG_LOG_FILE,
    ):
        self.transport = transport if transport is not None else CurlTransport()
        self.debug = debug
        self.debug_log_file = debug_log_file

    def send(self, request: GenerationRequest, provider: BaseProvider) -> GenerationResult:
        if not provider.api_key:
            logger.warning(f"{request.provider} API key not configured")
            env_var = f"{request.provider.upper()}_API_KEY"
            return Failure(
                ErrorKind.CONFIG_ERROR,
                f"{request.provider} API key not configured. "
                f"Set api_key in [providers.{request.provider}] or {env_var}.",
            )

        http_request = provider.build_request(request)
        argv = build_curl_args(http_request)
        self._debug_log("REQUEST", {
            "provider": request.provider,
            "model": request.model,
            "argv": redact_args(argv),
        })

        try:
            result = self.transport.execute(argv)
        except Exception as e:
            # A custom transport may raise instead of reporting ok=False
            logger.error(f"Transport error: {e}")
            self._debug_log("TRANSPORT ERROR", str(e))
            return Failure(ErrorKind.TRANSPORT_ERROR, str(e) or e.__class__.__name__)

        if not result.ok:
            logger.error(f"HTTP request failed: {result.diagnostic}")
            self._debug_log("TRANSPORT ERROR", result.diagnostic)
            return Failure(ErrorKind.TRANSPORT_ERROR, result.diagnostic)

        self._debug_log("RESPONSE", result.stdout.decode("utf-8", errors="replace"))
        outcome = provider.parse_response(result.stdout)
        if isinstance(outcome, Failure):
            logger.debug(f"{outcome.kind.value}: {outcome.message}")
        return outcome

    def _debug_log(self, label: str, data: Any) -> None:
        """Append a timestamped entry to the debug log file."""
        if not self.debug:
            return
        try:
            self.debug_log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.debug_log_file, "a", encoding="utf-8") as f:
                ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
                f.write(f"\n{'='*72}\n")
                f.write(f"[{ts}] {label}\n")
                f.write(f"{'='*72}\n")
                if isinstance(data, (dict, list)):
                    f.write(json.dumps(data, indent=2, default=str))
                else:
                    f.write(str(data))
                f.write("\n")
        except Exception:
            pass  # never break the CLI for debug logging
