from __future__ import annotations

import os
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .base import Reporter, TaskRecord, format_task_line

TRANSIENT_ENV = "PLANERES_PROGRESS_TRANSIENT"

_STYLES: Dict[str, str] = {
    "info": "[green]INFO[/]",
    "warning": "[yellow]WARN[/]",
    "error": "[bold red]ERROR[/]",
}


class RichReporter(Reporter):
    """Console reporter with a live progress bar for counted tasks.

    With ``PLANERES_PROGRESS_TRANSIENT`` set, the bar disappears when work
    finishes and completion lines are printed afterwards in one block.
    """

    supports_progress = True

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or Console(
            stderr=True, highlight=False, soft_wrap=False
        )
        self._transient = os.getenv(TRANSIENT_ENV, "0").lower() in (
            "1",
            "true",
            "yes",
        )
        self._progress: Progress | None = None
        self._bars: Dict[str, Any] = {}
        self._completions: List[str] = []

    def _bar_for(self, rec: TaskRecord) -> None:
        if self._progress is None:
            self._progress = Progress(
                SpinnerColumn(spinner_name="dots"),
                TextColumn("{task.description}"),
                BarColumn(bar_width=None),
                TextColumn("{task.completed}/{task.total}"),
                TextColumn("{task.fields[item]}"),
                TimeElapsedColumn(),
                console=self.console,
                transient=self._transient,
                expand=True,
            )
            self._progress.start()
        self._bars[rec.task_id] = self._progress.add_task(
            rec.name, total=rec.total, item=""
        )

    def _emit(self, level: str, message: str, fields: Dict[str, Any]) -> None:
        head = _STYLES.get(level) or f"[cyan]{level.replace('verbose', 'VERB')}[/]"
        if fields.get("title"):
            head += f" \\[{escape(str(fields['title']))}]"
        self.console.print(f"{head}: {escape(message)}")

    def _task_started(self, rec: TaskRecord) -> None:
        if rec.total is None:
            self.console.rule(rec.name)
        else:
            self._bar_for(rec)

    def _task_advanced(self, rec: TaskRecord, meta: Dict[str, Any]) -> None:
        bar = self._bars.get(rec.task_id)
        if bar is not None and self._progress is not None:
            self._progress.update(
                bar,
                completed=rec.completed,
                item=str(meta.get("current_item", "")),
            )

    def _task_ended(self, rec: TaskRecord) -> None:
        self._bars.pop(rec.task_id, None)
        line = format_task_line(rec)
        if self._transient:
            self._completions.append(line)
        else:
            self.console.print(escape(line))
        if not self._tasks:
            self.flush()

    def section(self, title: str) -> None:
        self.console.rule(title)

    def flush(self) -> None:
        if self._progress is not None:
            try:
                self._progress.stop()
            finally:
                self._progress = None
                self._bars.clear()
        if self._completions:
            self.console.print(escape("\n".join(self._completions)))
            self._completions.clear()
