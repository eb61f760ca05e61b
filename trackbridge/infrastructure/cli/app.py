"""Trackbridge CLI - Main application entry point and commands."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

from rich.console import Console
import typer

from trackbridge import __version__
from trackbridge.application.services import CandidateResolver
from trackbridge.application.use_cases import resolve_batch
from trackbridge.config import get_logger, settings, setup_loguru_logger
from trackbridge.domain.entities import SourceFormat
from trackbridge.domain.matching import calculate_match_score, to_canonical
from trackbridge.infrastructure.catalogs import InMemoryCatalog, load_records
from trackbridge.infrastructure.cli.progress_provider import RichProgressCallback
from trackbridge.infrastructure.cli.ui import (
    command_error_handler,
    display_batch_result,
    display_score_evidence,
    write_json_report,
)

console = Console(width=100)
logger = get_logger(__name__)

app = typer.Typer(
    help=f"🎵 Trackbridge v{__version__} - Match tracks across music catalogs",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)


@app.command(name="match", rich_help_panel="🎵 Matching")
@command_error_handler
def match_command(
    source: Annotated[
        Path, typer.Argument(exists=True, dir_okay=False, help="Source tracks JSON")
    ],
    catalog: Annotated[
        Path,
        typer.Option(
            "--catalog", "-c", exists=True, dir_okay=False, help="Target catalog JSON"
        ),
    ],
    source_format: Annotated[
        SourceFormat, typer.Option("--source-format", "-s", case_sensitive=False)
    ] = SourceFormat.SPOTIFY,
    catalog_format: Annotated[
        SourceFormat, typer.Option("--catalog-format", case_sensitive=False)
    ] = SourceFormat.APPLE_MUSIC,
    storefront: Annotated[
        str | None, typer.Option("--storefront", help="Catalog region, e.g. us")
    ] = None,
    concurrency: Annotated[
        int | None,
        typer.Option("--concurrency", "-j", min=1, help="Tracks resolved in parallel"),
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write JSON report here")
    ] = None,
) -> None:
    """Match every track in SOURCE against the target CATALOG."""
    tracks = [to_canonical(r, source_format) for r in load_records(source)]
    target = InMemoryCatalog.from_json_file(catalog, catalog_format)
    logger.info(
        f"Matching {len(tracks)} tracks against {len(target)} catalog tracks"
    )

    with RichProgressCallback(total=len(tracks)) as progress:
        result = asyncio.run(
            resolve_batch(
                tracks,
                target,
                progress,
                storefront=storefront or settings.matching.default_storefront,
                concurrency=concurrency,
            )
        )

    display_batch_result(result, title=f"Matched {source.name} → {catalog.name}")
    if output is not None:
        write_json_report(output, result.as_dict())


@app.command(name="score", rich_help_panel="🎵 Matching")
@command_error_handler
def score_command(
    first: Annotated[
        Path, typer.Argument(exists=True, dir_okay=False, help="Source record JSON")
    ],
    second: Annotated[
        Path, typer.Argument(exists=True, dir_okay=False, help="Candidate record JSON")
    ],
    record_format: Annotated[
        SourceFormat, typer.Option("--format", "-f", case_sensitive=False)
    ] = SourceFormat.CANONICAL,
) -> None:
    """Score two single-record JSON files against each other."""
    source = to_canonical(_single_record(first), record_format)
    candidate = to_canonical(_single_record(second), record_format)
    score, evidence = calculate_match_score(source, candidate, CandidateResolver().weights)
    display_score_evidence(source, candidate, score, evidence)


def _single_record(path: Path) -> dict:
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    if isinstance(payload, list) and len(payload) == 1:
        payload = payload[0]
    if not isinstance(payload, dict):
        raise ValueError(f"{path}: expected a single JSON track record")
    return payload


@app.command(name="version", rich_help_panel="⚙️ System")
def version_command() -> None:
    """Show version information."""
    console.print(
        f"[bold bright_blue]🎵 Trackbridge[/bold bright_blue] [dim]v{__version__}[/dim]"
    )


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
) -> None:
    """Initialize Trackbridge CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_loguru_logger(verbose)


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
