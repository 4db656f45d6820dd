"""Rich progress display for the recommendation pipeline."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn, TimeElapsedColumn

console = Console(stderr=True)


class PipelineProgress:
    """One spinner line per pipeline step, on stderr so stdout stays clean.

    Pass ``step`` as the recommender's ``on_progress`` callback: each new
    step ticks off the one before it.
    """

    def __init__(self, title: str) -> None:
        self.title = title
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
        )
        self._current: TaskID | None = None
        self._label = ""
        self.completed: list[str] = []

    def __enter__(self) -> "PipelineProgress":
        self._progress.console.print(Panel(f"[bold]{self.title}[/bold]", style="blue"))
        self._progress.__enter__()
        return self

    def __exit__(self, *args: object) -> None:
        self._progress.__exit__(*args)

    def _close(self, description: str) -> None:
        if self._current is None:
            return
        self._progress.update(self._current, description=description, completed=True)
        self._current = None

    def step(self, message: str) -> None:
        """Start a new step, marking the running one done."""
        self.finish()
        self._label = message.rstrip("…. ")
        self._current = self._progress.add_task(f"[cyan]{message}[/]", total=None)

    def finish(self) -> None:
        """Mark the running step done."""
        if self._current is not None:
            self.completed.append(self._label)
        self._close(f"[green]✓ {self._label}[/]")

    def fail(self, reason: str) -> None:
        """Mark the running step failed (or report a failure before any step ran)."""
        if self._current is None:
            self._current = self._progress.add_task("", total=None)
            self._label = "Setup"
        self._close(f"[red]✗ {self._label}: {reason}[/]")
