"""
Prompt pipeline for AI Cmd.

Records the prompt in history, builds the instruction, calls the configured
provider once and turns the reply into one command or a list to choose from.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .config_file import Settings
from .history import HistoryStore
from .llm.client import ApiClient
from .llm.provider_factory import ProviderFactory, UnsupportedProviderError
from .llm.transport import CurlTransport
from .llm.types import ErrorKind, Failure, GenerationRequest
from .prompts import build_instruction, parse_commands

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SingleCommand:
    command: str


@dataclass(frozen=True)
class CommandChoices:
    commands: Tuple[str, ...]

    def choices(self) -> List[Tuple[str, str]]:
        """(id, label) pairs with 1-based ids."""
        return [(str(i), cmd) for i, cmd in enumerate(self.commands, start=1)]

    def lookup(self, choice_id: str) -> Optional[str]:
        """Command for a 1-based id, or None if it does not exist."""
        try:
            index = int(choice_id)
        except (TypeError, ValueError):
            return None
        if 1 <= index <= len(self.commands):
            return self.commands[index - 1]
        return None


@dataclass(frozen=True)
class PromptError:
    message: str


PipelineResult = Union[SingleCommand, CommandChoices, PromptError]


class PromptPipeline:
    """Turns a natural-language prompt into command candidates."""

    def __init__(
        self,
        settings: Settings,
        history: Optional[HistoryStore] = None,
        client: Optional[ApiClient] = None,
    ):
        self.settings = settings
        if history is None:
            history = HistoryStore(settings.history_file, settings.max_history)
        if client is None:
            client = ApiClient(CurlTransport(timeout=settings.timeout), debug=settings.debug)
        self.history = history
        self.client = client

    def run(self, raw_prompt: str, context: Optional[str] = None) -> PipelineResult:
        if not raw_prompt or not raw_prompt.strip():
            return PromptError("Error: Empty prompt")

        # History is updated before the call so a failed call keeps the prompt
        try:
            self.history.record(raw_prompt)
        except OSError as e:
            logger.warning(f"Could not update prompt history {self.history.path}: {e}")

        instruction = build_instruction(raw_prompt.strip(), context)
        provider_name = self.settings.provider

        try:
            provider = ProviderFactory.create_provider(
                provider_name, self.settings.provider_config(provider_name)
            )
        except UnsupportedProviderError as e:
            return self._error(Failure(ErrorKind.CONFIG_ERROR, str(e)))

        try:
            request = GenerationRequest(
                provider=provider_name,
                model=provider.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                user_message=instruction,
            )
        except ValueError as e:
            return self._error(Failure(ErrorKind.CONFIG_ERROR, f"Invalid generation settings: {e}"))
        outcome = self.client.send(request, provider)

        if isinstance(outcome, Failure):
            return self._error(outcome)

        commands = parse_commands(outcome.text)
        if not commands:
            return PromptError("Error: No commands generated")
        if len(commands) == 1:
            return SingleCommand(commands[0])
        return CommandChoices(tuple(commands))

    def _error(self, failure: Failure) -> PromptError:
        logger.debug(f"Generation failed ({failure.kind.value}): {failure.message}")
        return PromptError(f"Error: {failure.describe()}")
