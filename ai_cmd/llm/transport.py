"""
Transport for AI Cmd.

Performs the actual HTTP exchange by running a command (curl by default)
and hands back the raw streams. One attempt, bounded by a deadline.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

from .config import HTTP_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResult:
    ok: bool
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def diagnostic(self) -> str:
        text = self.stderr.decode("utf-8", errors="replace").strip()
        return text or "Unknown error"


class Transport(Protocol):
    def execute(self, argv: Sequence[str]) -> TransportResult:
        ...


class CurlTransport:
    """Runs the request command in a child process."""

    def __init__(self, timeout: float = HTTP_TIMEOUT):
        self.timeout = timeout

    def execute(self, argv: Sequence[str]) -> TransportResult:
        try:
            proc = subprocess.run(
                list(argv),
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.error(f"{argv[0]} timed out after {self.timeout}s")
            return TransportResult(False, stderr=f"Request timed out after {self.timeout}s".encode())
        except FileNotFoundError:
            return TransportResult(False, stderr=f"{argv[0]} not found on PATH".encode())
        except OSError as e:
            return TransportResult(False, stderr=str(e).encode())

        if proc.returncode != 0:
            logger.error(f"{argv[0]} exited with status {proc.returncode}")
            stderr = proc.stderr or f"{argv[0]} exited with status {proc.returncode}".encode()
            return TransportResult(False, proc.stdout, stderr)

        return TransportResult(True, proc.stdout, proc.stderr)
