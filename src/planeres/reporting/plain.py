from __future__ import annotations

import sys
from typing import Any, Dict, Tuple

from .base import Reporter, TaskRecord, format_task_line

# level -> (ANSI color, label)
_LABELS: Dict[str, Tuple[str, str]] = {
    "info": ("32", "INFO"),
    "warning": ("33", "WARN"),
    "error": ("31", "ERROR"),
}


class PlainReporter(Reporter):
    """Plain deterministic reporter with optional ANSI color.

    Lines look like ``WARN [Warning]: message``; continuation lines of a
    multi-line message are indented by four spaces.
    """

    def __init__(self, stream=None, use_color: bool | None = None):
        super().__init__()
        self.stream = stream or sys.stderr
        if use_color is None:
            use_color = getattr(self.stream, "isatty", lambda: False)()
        self.use_color = use_color

    def _c(self, code: str, text: str) -> str:
        if not self.use_color:
            return text
        return f"\x1b[{code}m{text}\x1b[0m"

    def _emit(self, level: str, message: str, fields: Dict[str, Any]) -> None:
        code, label = _LABELS.get(level, ("36", level.replace("verbose", "VERB")))
        head = self._c(code, label)
        if fields.get("title"):
            head = f"{head} [{fields['title']}]"
        body = message.replace("\n", "\n    ")
        self.stream.write(f"{head}: {body}\n")

    def _task_advanced(self, rec: TaskRecord, meta: Dict[str, Any]) -> None:
        item = meta.get("current_item") or f"item#{rec.completed}"
        total = rec.total if rec.total is not None else "?"
        self.stream.write(f"   · {rec.name}: {item} ({rec.completed}/{total})\n")

    def _task_ended(self, rec: TaskRecord) -> None:
        self.stream.write(f" {format_task_line(rec)}\n")

    def section(self, title: str) -> None:
        self.stream.write(f"\n[{title}]\n")
