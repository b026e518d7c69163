"""
User-facing flows: prompt for a request, or re-run one from history.

The host supplies the UI primitives (selection text, line input, selection
list, text insertion); these functions only decide what to show and insert.
"""

import logging
from typing import Callable, List, Optional, Protocol, Tuple

from .pipeline import CommandChoices, PipelineResult, PromptError, PromptPipeline, SingleCommand

logger = logging.getLogger(__name__)

PROMPT_DESCRIPTION = "Enter prompt for command to generate:"
PROMPT_DESCRIPTION_WITH_CONTEXT = (
    "Enter prompt for command to generate (selected text will be used as context):"
)


class Host(Protocol):
    def get_selection_text(self) -> Optional[str]:
        ...

    def prompt_input_line(self, description: str, callback: Callable[[Optional[str]], None]) -> None:
        ...

    def select(self, title: str, description: str, choices: List[Tuple[str, str]],
               callback: Callable[[Optional[str]], None]) -> None:
        ...

    def send_text(self, text: str) -> None:
        ...


def present(host: Host, result: PipelineResult) -> None:
    """Insert a single command, offer a choice list, or insert the error as a comment."""
    if isinstance(result, PromptError):
        # Comment out every line so no part of the message is runnable
        host.send_text("\n".join(f"# {line}" for line in result.message.splitlines()))
        return

    if isinstance(result, SingleCommand):
        host.send_text(result.command)
        return

    def on_choice(choice_id: Optional[str]) -> None:
        if choice_id is None:
            return
        command = result.lookup(choice_id)
        if command is not None:
            host.send_text(command)

    host.select(
        title="Select Command",
        description="Choose a command to execute:",
        choices=result.choices(),
        callback=on_choice,
    )


def process_prompt(host: Host, pipeline: PromptPipeline, prompt: str,
                   context: Optional[str] = None) -> PipelineResult:
    result = pipeline.run(prompt, context)
    if isinstance(result, CommandChoices):
        logger.debug(f"{len(result.commands)} candidate commands")
    present(host, result)
    return result


def show_prompt(host: Host, pipeline: PromptPipeline) -> None:
    """Ask for a prompt, using the current selection as context."""
    selection = host.get_selection_text()
    description = PROMPT_DESCRIPTION_WITH_CONTEXT if selection else PROMPT_DESCRIPTION

    def on_line(line: Optional[str]) -> None:
        if line is None or not line.strip():
            return
        process_prompt(host, pipeline, line, selection)

    host.prompt_input_line(description, on_line)


def show_history(host: Host, pipeline: PromptPipeline) -> None:
    """Pick a previous prompt and run it again."""
    history = pipeline.history.load()
    if not history:
        host.send_text("# No prompt history available")
        return

    choices = [(str(i), prompt) for i, prompt in enumerate(history, start=1)]

    def on_choice(choice_id: Optional[str]) -> None:
        if choice_id is None:
            return
        try:
            index = int(choice_id)
        except ValueError:
            return
        if not 1 <= index <= len(history):
            return
        selection = host.get_selection_text()
        process_prompt(host, pipeline, history[index - 1], selection)

    host.select(
        title="Select Previous Prompt",
        description="Choose a prompt from history:",
        choices=choices,
        callback=on_choice,
    )
