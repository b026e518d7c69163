"""
AI Cmd entrypoint.

Asks for a natural-language request (or takes it from the command line),
lets the user pick one of the generated commands and prints it to stdout,
so a shell key binding can place it in the line buffer. Menus and prompts
go to stderr.

Selected terminal text can be passed as context with --context or the
AI_CMD_CONTEXT environment variable.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable, List, Optional, TextIO, Tuple

CONTEXT_ENV_VAR = "AI_CMD_CONTEXT"

logger = logging.getLogger(__name__)


class TerminalHost:
    """Host primitives on a plain terminal: menus on stderr, result on stdout."""

    def __init__(self, selection: Optional[str] = None,
                 stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout,
                 stderr: TextIO = sys.stderr):
        self.selection = selection
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.sent: List[str] = []

    def get_selection_text(self) -> Optional[str]:
        return self.selection or None

    def _read_line(self, label: str) -> Optional[str]:
        self.stderr.write(label)
        self.stderr.flush()
        line = self.stdin.readline()
        if not line:
            return None  # EOF
        return line.rstrip("\r\n")

    def prompt_input_line(self, description: str, callback: Callable[[Optional[str]], None]) -> None:
        self.stderr.write(description + "\n")
        callback(self._read_line("> "))

    def select(self, title: str, description: str, choices: List[Tuple[str, str]],
               callback: Callable[[Optional[str]], None]) -> None:
        self.stderr.write(f"{title}\n{description}\n")
        for choice_id, label in choices:
            self.stderr.write(f"  {choice_id}) {label}\n")
        answer = self._read_line(f"[1-{len(choices)}, empty to cancel]: ")
        if answer is None or not answer.strip():
            callback(None)
            return
        callback(answer.strip())

    def send_text(self, text: str) -> None:
        self.sent.append(text)
        self.stdout.write(text)
        self.stdout.flush()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ai-cmd",
        description="Generate shell commands from a natural-language request.",
    )
    parser.add_argument("prompt", nargs="*", help="request; asked for interactively if omitted")
    parser.add_argument("-c", "--context", help=f"selected text to use as context (default: ${CONTEXT_ENV_VAR})")
    parser.add_argument("--history", action="store_true", help="pick a previous prompt and run it again")
    parser.add_argument("--config", type=Path, help="path to config.toml")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, host: Optional[TerminalHost] = None) -> None:
    """Parse arguments, run the requested flow, exit 0 if a command was inserted."""
    try:
        args = parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(name)s: %(levelname)s: %(message)s",
            stream=sys.stderr,
        )

        # Import here to keep startup fast if there's an early exit
        from .actions import process_prompt, show_history, show_prompt
        from .config_file import load_config
        from .llm.client import ApiClient
        from .llm.transport import CurlTransport
        from .pipeline import PromptPipeline

        settings = load_config(args.config)
        client = ApiClient(CurlTransport(timeout=settings.timeout), debug=settings.debug)
        pipeline = PromptPipeline(settings, client=client)

        if host is None:
            context = args.context if args.context is not None else os.environ.get(CONTEXT_ENV_VAR, "")
            host = TerminalHost(selection=context)

        if args.history:
            show_history(host, pipeline)
        elif args.prompt:
            process_prompt(host, pipeline, " ".join(args.prompt), host.get_selection_text())
        else:
            show_prompt(host, pipeline)

        inserted = [text for text in host.sent if not text.startswith("#")]
        sys.exit(0 if inserted else 1)

    except KeyboardInterrupt:
        sys.exit(1)
    except Exception:
        # Keep tracebacks out of the inserted text; visible with -v
        logger.debug("ai-cmd failed", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
