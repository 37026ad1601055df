import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

# Import logger setup first to ensure logging is configured
from autocomplete_core.logger import get_logger, setup_logger
from autocomplete_core.application import create_autocomplete
from autocomplete_core.domain.events import StateChanged
from autocomplete_core.presentation.formatters import build_suggestions_table, format_status_line_markup
from autocomplete_core.sources import CallableSource, StaticSource

load_dotenv()

DEFAULT_WORDS = [
    "apple",
    "apricot",
    "avocado",
    "banana",
    "blackberry",
    "blueberry",
    "cherry",
    "grape",
    "grapefruit",
    "pineapple",
]

console = Console()

cli = typer.Typer(
    name="autocomplete-core",
    help="Run autocomplete query cycles against a word list and inspect the resulting state",
    epilog="""
    Examples:
    $ autocomplete-core query ap
    $ autocomplete-core query ap --delay 0.5 --stall-threshold 100
    """,
    add_completion=False,
)


def load_words(words: Optional[list[str]], words_file: Optional[Path]) -> list[str]:
    """Collect candidate words from ``--word`` options and a one-word-per-line file."""
    collected = list(words or [])
    if words_file is not None:
        with open(words_file, "r", encoding="utf-8") as f:
            collected.extend(line.strip() for line in f if line.strip())
    return collected or list(DEFAULT_WORDS)


async def run_cycle(
    text: str,
    words: list[str],
    *,
    min_length: int,
    stall_threshold: int,
    delay: float,
    fail: bool,
) -> bool:
    """Run one query cycle, printing status transitions and the final suggestions."""
    logger = get_logger("main")
    static_source = StaticSource(words)

    async def fetch(query: str) -> list[str]:
        if delay > 0:
            await asyncio.sleep(delay)
        if fail:
            raise RuntimeError("source failed")
        return static_source.match(query)

    autocomplete = create_autocomplete(
        get_sources=lambda params: [CallableSource(fetch)],
        min_length=min_length,
        stall_threshold=stall_threshold,
    )

    def print_status(event: StateChanged) -> None:
        if event.changed_field == "status":
            console.print(format_status_line_markup(event.state))

    autocomplete.event_bus.subscribe(StateChanged, print_status)

    logger.info(f"Running query {text!r} against {len(words)} word(s)")
    task = autocomplete.on_input(text)
    succeeded = True
    if task is not None:
        try:
            await task
        except Exception as e:
            console.print(f"[red]Query failed:[/] {e}")
            succeeded = False

    console.print(build_suggestions_table(autocomplete.state))
    return succeeded


@cli.callback()
def main(
    debug: bool = typer.Option(os.getenv("DEBUG", "false").lower() == "true", "--debug", help="Enable debug logging"),
):
    """Autocomplete core command line."""
    setup_logger(
        log_level="DEBUG" if debug else os.getenv("AUTOCOMPLETE_LOG_LEVEL", "INFO"),
        console_output=debug,
    )


@cli.command()
def query(
    text: str = typer.Argument(..., help="Query text to run"),
    word: Optional[list[str]] = typer.Option(None, "--word", "-w", help="Candidate word (repeatable)"),
    words_file: Optional[Path] = typer.Option(
        None, "--words-file", exists=True, dir_okay=False, help="File with one candidate per line"
    ),
    min_length: int = typer.Option(
        int(os.getenv("AUTOCOMPLETE_MIN_LENGTH", "1")), "--min-length", min=0, help="Minimum query length"
    ),
    stall_threshold: int = typer.Option(
        int(os.getenv("AUTOCOMPLETE_STALL_THRESHOLD", "300")),
        "--stall-threshold",
        min=0,
        help="Milliseconds before the fetch is flagged as stalled",
    ),
    delay: float = typer.Option(0.0, "--delay", min=0.0, help="Seconds the source waits before answering"),
    fail: bool = typer.Option(False, "--fail", help="Make the source raise instead of answering"),
):
    """Run one query cycle and print the resulting state."""
    words = load_words(word, words_file)
    succeeded = asyncio.run(
        run_cycle(
            text,
            words,
            min_length=min_length,
            stall_threshold=stall_threshold,
            delay=delay,
            fail=fail,
        )
    )
    if not succeeded:
        raise typer.Exit(code=1)
