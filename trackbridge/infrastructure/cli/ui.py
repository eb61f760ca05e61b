"""UI helpers for CLI interaction.

Keeps presentation (rich tables, error messages) separate from the resolution
logic the commands drive.
"""

from collections.abc import Callable
import functools
import json
from typing import Any, ParamSpec, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.table import Table
import typer

from trackbridge.application.use_cases import BatchMatchResult
from trackbridge.config import get_logger
from trackbridge.domain.entities import CanonicalTrack
from trackbridge.domain.matching import ResolutionOutcome, ScoreEvidence

P = ParamSpec("P")
R = TypeVar("R")

console = Console()
logger = get_logger(__name__)

_STATUS_STYLE = {
    "matched": "✅ matched",
    "needs_review": "⚠️ review",
    "unavailable": "❌ not found",
    "error": "💥 error",
}


def command_error_handler(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    Logs the failure with full traceback, prints a short red message and
    converts it into ``typer.Exit(code=1)``.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(
                    f"\n[bold red]✗ Error during {operation}:[/bold red] {escape(str(e))}"
                )
                raise typer.Exit(code=1) from e

    return wrapper


def display_batch_result(result: BatchMatchResult, title: str | None = None) -> None:
    """Print summary metrics and per-track outcomes for a batch."""
    console.print(f"\n[bold blue]{escape(title or 'Match Results')}[/bold blue]")

    summary = result.summary()
    summary_data = [
        ("Total Tracks", str(summary["total"])),
        ("Matched", str(summary["matched"])),
        ("Needs Review", str(summary["needs_review"])),
        ("Unavailable", str(summary["unavailable"])),
        ("Errors", str(summary["errors"])),
        ("Match Rate", f"{summary['match_rate']:.1f}%"),
        ("Duration", f"{summary['execution_time_ms'] / 1000:.1f}s"),
    ]
    if result.cancelled:
        summary_data.append(("Not Processed", str(len(result.pending))))

    summary_table = Table(show_header=False, box=None, padding=(0, 2))
    summary_table.add_column(style="cyan")
    summary_table.add_column(style="green bold")
    for metric, value in summary_data:
        summary_table.add_row(metric, value)
    console.print(summary_table)

    if result.outcomes:
        console.print()
        console.print(_outcome_table(result.outcomes))
    console.print()


def _outcome_table(outcomes: tuple[ResolutionOutcome, ...]) -> Table:
    table = Table(title="Track Details")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Source", style="cyan")
    table.add_column("Status")
    table.add_column("Match", style="green")
    table.add_column("Method", style="yellow")
    table.add_column("Score", justify="right")

    for i, outcome in enumerate(outcomes, 1):
        source = outcome.source_track
        source_name = escape(
            source.display_name() if isinstance(source, CanonicalTrack) else repr(source)
        )
        status = _STATUS_STYLE.get(str(outcome.status), str(outcome.status))
        if outcome.primary is None:
            table.add_row(str(i), source_name, status, escape(outcome.error or "—"), "—", "—")
            continue
        table.add_row(
            str(i),
            source_name,
            status,
            escape(outcome.primary.track.display_name()),
            str(outcome.primary.method),
            str(outcome.primary.score),
        )
    return table


def display_score_evidence(
    source: CanonicalTrack, candidate: CanonicalTrack, score: int, evidence: ScoreEvidence
) -> None:
    """Print the per-component breakdown of one composite score."""
    console.print(f"\n[bold blue]{escape(source.display_name())}[/bold blue]")
    console.print(f"[dim]vs[/dim] [bold]{escape(candidate.display_name())}[/bold]\n")

    table = Table(title="Score Evidence")
    table.add_column("Component", style="cyan")
    table.add_column("Similarity", justify="right")
    table.add_column("Points", justify="right", style="green")

    table.add_row(
        "Title", f"{evidence.title_similarity:.2f}", f"{evidence.title_points:.1f}"
    )
    table.add_row(
        "Primary artist",
        f"{evidence.artist_similarity:.2f}",
        f"{evidence.artist_points:.1f}",
    )
    table.add_row(
        "Album", f"{evidence.album_similarity:.2f}", f"{evidence.album_points:.1f}"
    )
    diff = (
        "—" if evidence.duration_diff_ms is None else f"Δ {evidence.duration_diff_ms} ms"
    )
    table.add_row("Duration", diff, f"{evidence.duration_points:.1f}")
    console.print(table)
    console.print(f"\n[bold]Score:[/bold] [green bold]{score}[/green bold]/100\n")


def write_json_report(path: Any, payload: dict[str, Any]) -> None:
    """Write a JSON report to ``path``."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    console.print(f"[dim]Report written to {path}[/dim]")
