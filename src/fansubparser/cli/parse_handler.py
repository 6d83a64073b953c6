"""Parse and batch command handlers for fansubparser CLI.

Both commands run names through :class:`FansubEntityParser` and print the
results either as a Rich table or as a JSON envelope.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fansubparser.cli.common.context import get_cli_context
from fansubparser.cli.json_formatter import format_json_output
from fansubparser.core.models.entities import FansubEntity
from fansubparser.core.parser.context import ParserProfiler
from fansubparser.core.parser.factory import FansubEntityParser
from fansubparser.shared.constants import CLICommands, CLIDefaults
from fansubparser.shared.errors import (
    create_file_not_found_error,
    create_file_read_error,
    create_validation_error,
)

logger = logging.getLogger(__name__)


def read_names(source: str) -> list[str]:
    """Read one name per line from a file, or from stdin for ``-``.

    Blank lines are skipped and surrounding whitespace is removed.

    Raises:
        InfrastructureError: If the file is missing or cannot be read.
    """
    if source == CLIDefaults.STDIN_MARKER:
        lines = sys.stdin.read().splitlines()
    else:
        path = Path(source)
        if not path.is_file():
            raise create_file_not_found_error(str(path), operation="read_names")
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise create_file_read_error(str(path), operation="read_names", original_error=e) from e

    return [line.strip() for line in lines if line.strip()]


def collect_parse_data(
    names: Sequence[str],
    entities: Sequence[FansubEntity | None],
) -> dict[str, Any]:
    """Build the JSON ``data`` payload for a set of parse results."""
    results = [
        {"input": name, "entity": entity.to_dict() if entity is not None else None}
        for name, entity in zip(names, entities)
    ]
    recognised = sum(entity is not None for entity in entities)
    return {
        "results": results,
        "total": len(results),
        "recognised": recognised,
        "unrecognised": len(results) - recognised,
    }


def _unrecognised_warnings(
    names: Sequence[str],
    entities: Sequence[FansubEntity | None],
) -> list[str]:
    return [
        f"Name not recognised: {name}"
        for name, entity in zip(names, entities)
        if entity is None
    ]


def display_parse_results(
    names: Sequence[str],
    entities: Sequence[FansubEntity | None],
    console: Console,
) -> None:
    """Print parse results as a table."""
    table = Table(title="Parse Results")
    table.add_column("Input", style="cyan", overflow="fold")
    table.add_column("Kind", style="magenta")
    table.add_column("Group", style="green")
    table.add_column("Series", style="yellow")
    table.add_column("Details")

    for name, entity in zip(names, entities):
        if entity is None:
            table.add_row(escape(name), "[red]unrecognised[/red]", "", "", "")
            continue
        table.add_row(
            escape(name),
            entity.kind,
            escape(entity.group or ""),
            escape(entity.series or ""),
            escape(str(entity)),
        )

    console.print(table)


def display_profile(profiler: ParserProfiler, console: Console) -> None:
    """Print per-grammar timings, slowest first."""
    table = Table(title="Grammar Timings")
    table.add_column("Grammar", style="cyan")
    table.add_column("Calls", justify="right")
    table.add_column("Total (ms)", justify="right")
    table.add_column("Average (ms)", justify="right")
    for record in profiler.records():
        table.add_row(
            record.parser_name,
            str(record.call_count),
            f"{record.total_seconds * 1000:.3f}",
            f"{record.average_seconds * 1000:.3f}",
        )
    console.print(table)


def _emit(
    command: str,
    names: Sequence[str],
    entities: Sequence[FansubEntity | None],
    *,
    json_output: bool,
    profiler: ParserProfiler | None = None,
) -> None:
    if json_output:
        data = collect_parse_data(names, entities)
        if profiler is not None:
            data["profile"] = profiler.to_dicts()
        output = format_json_output(
            success=True,
            command=command,
            data=data,
            warnings=_unrecognised_warnings(names, entities),
        )
        typer.echo(output.decode("utf-8"))
        return

    console = Console()
    display_parse_results(names, entities, console)
    if profiler is not None:
        display_profile(profiler, console)


def handle_parse_command(names: Sequence[str]) -> int:
    """Handle the parse command.

    Args:
        names: Names given on the command line.

    Returns:
        Exit code (0 for success)
    """
    context = get_cli_context()
    parser = FansubEntityParser(context.settings.parser)

    entities = [parser.parse(name) for name in names]
    logger.debug("Parsed %d names from the command line", len(entities))

    _emit(CLICommands.PARSE, names, entities, json_output=context.is_json_output_enabled())
    return CLIDefaults.EXIT_SUCCESS


def handle_batch_command(
    source: str,
    workers: int | None = None,
    *,
    profile: bool = False,
) -> int:
    """Handle the batch command.

    Args:
        source: Path of a text file with one name per line, or ``-`` for stdin.
        workers: Worker threads; defaults to the configured value.
        profile: Record and print per-grammar timings.

    Returns:
        Exit code (0 for success)

    Raises:
        InfrastructureError: If the input file cannot be read.
        DomainError: If the input holds no names.
    """
    context = get_cli_context()
    settings = context.settings.parser
    if profile:
        settings = settings.model_copy(update={"enable_profiling": True})

    names = read_names(source)
    if not names:
        raise create_validation_error(
            f"No names to parse in {source}",
            field="source",
            operation="handle_batch_command",
        )
    logger.info("Read %d names from %s", len(names), source)

    parser = FansubEntityParser(settings)
    entities = parser.parse_many(names, max_workers=workers)

    if parser.profiler is not None:
        parser.profiler.log_summary()

    _emit(
        CLICommands.BATCH,
        names,
        entities,
        json_output=context.is_json_output_enabled(),
        profiler=parser.profiler,
    )
    return CLIDefaults.EXIT_SUCCESS
