"""
Rich progress bar fed by batch progress events.

The batch calls ``RichProgressCallback`` once per completed track; the bar is
started and stopped by using the provider as a context manager.
"""

from types import TracebackType

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from trackbridge.application.utilities import ProgressEvent


class RichProgressCallback:
    """Progress callback rendering a single determinate Rich task."""

    def __init__(
        self, total: int, description: str = "Matching tracks", console: Console | None = None
    ):
        self.console = console or Console(stderr=True)
        self.description = description
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=self.console,
            transient=False,
        )
        self._task_id: TaskID = self._progress.add_task(
            f"[cyan]{description}[/cyan]", total=total
        )

    def __enter__(self) -> "RichProgressCallback":
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def __call__(self, event: ProgressEvent) -> None:
        description = f"[cyan]{self.description}[/cyan]"
        if not event.is_complete:
            current = f"{event.artist} - {event.track_name}" if event.artist else event.track_name
            description += f" [dim]{escape(current)}[/dim]"
        self._progress.update(
            self._task_id,
            completed=event.current,
            total=event.total,
            description=description,
        )
