"""
Instruction template and response parsing for AI Cmd.
"""

import re
from typing import List, Optional

INSTRUCTION_PREFIX = "Generate 3-5 different bash command options to: "

CONTEXT_LABEL = "Context (selected text):"

OUTPUT_FORMAT = (
    "Return each command on a separate line, no explanations, "
    "no numbering, just the commands."
)


def build_instruction(prompt: str, context: Optional[str] = None) -> str:
    """Build the user message with the optional selected-text context."""
    text = INSTRUCTION_PREFIX + prompt
    if context and context.strip():
        text += f"\n\n{CONTEXT_LABEL}\n{context}"
    return text + "\n\n" + OUTPUT_FORMAT


def parse_commands(text: str) -> List[str]:
    """
    Split generated text into candidate commands, in response order.

    Blank lines and Markdown code-fence lines are dropped, each line is
    trimmed and a leading "$ " prompt marker is removed. Duplicates are kept.
    """
    commands = []
    for line in re.split(r"[\r\n]+", text):
        line = line.strip()
        if not line or line.startswith("```"):
            continue
        if line.startswith("$ "):
            line = line[2:].strip()
            if not line:
                continue
        commands.append(line)
    return commands
