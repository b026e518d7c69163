"""
Prompt history for AI Cmd.

Plain text file, one prompt per line, most recent first. Recording a prompt
moves it to the front, drops its older copy and evicts the oldest entries
past the cap.
"""

import fcntl
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Union

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_FILE = Path.home() / ".ai_cmd_prompt_history.txt"
DEFAULT_MAX_HISTORY = 100

_locks: Dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


def _path_lock(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock


def normalize_prompt(prompt: str) -> str:
    """Single-line, trimmed form of a prompt as stored on disk."""
    return prompt.replace("\r", " ").replace("\n", " ").strip()


class HistoryStore:
    """Most-recently-used list of prompts backed by a text file."""

    def __init__(self, path: Union[str, Path] = DEFAULT_HISTORY_FILE,
                 max_entries: int = DEFAULT_MAX_HISTORY):
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.path = Path(path).expanduser()
        self.max_entries = max_entries

    def load(self) -> List[str]:
        """Read history, most recent first. A missing file is empty history."""
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.read().split("\n")
        except FileNotFoundError:
            return []

        return [line.strip() for line in lines if line.strip()]

    def record(self, prompt: str) -> None:
        """
        Move `prompt` to the front of the history and persist it.

        Raises:
            ValueError: If the prompt is empty after trimming
            OSError: If the history file cannot be written
        """
        entry = normalize_prompt(prompt)
        if not entry:
            raise ValueError("Cannot record an empty prompt")

        with self._locked():
            history = [item for item in self.load() if item != entry]
            history.insert(0, entry)
            del history[self.max_entries:]
            self._save(history)

        logger.debug(f"Recorded prompt ({len(history)} entries in {self.path})")

    @contextmanager
    def _locked(self) -> Iterator[None]:
        # Threads in this process, then other processes sharing the file
        with _path_lock(self.path):
            self.path.parent.mkdir(parents=True, exist_ok=True)
            lock_path = self.path.with_name(self.path.name + ".lock")
            with open(lock_path, "a") as lock_file:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
                try:
                    yield
                finally:
                    fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _save(self, history: List[str]) -> None:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                for item in history:
                    f.write(item + "\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise
