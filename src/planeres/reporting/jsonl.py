from __future__ import annotations

import json
import sys
from typing import Any, Dict

from .base import Reporter, TaskRecord

# Info lines starting with one of these prefixes are also emitted as
# "summary" events with their key=value tokens split out.
_SUMMARY_PREFIXES: Dict[str, str] = {
    "project summary": "project",
    "art summary": "art",
    "map summary": "map",
    "palette summary": "palette",
    "save summary": "save",
}


def _summary_type(message: str) -> str | None:
    lower = message.lower()
    for prefix, stype in _SUMMARY_PREFIXES.items():
        if lower.startswith(prefix):
            return stype
    return None


class JsonLinesReporter(Reporter):
    """Machine-readable reporter: one JSON object per line on stdout."""

    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream or sys.stdout

    def _write(self, event: str, payload: Dict[str, Any]) -> None:
        obj = {"event": event, **payload}
        self.stream.write(json.dumps(obj, sort_keys=True, default=str) + "\n")

    def _emit(self, level: str, message: str, fields: Dict[str, Any]) -> None:
        stype = _summary_type(message) if level == "info" else None
        if stype is not None:
            _, _, tail = message.partition(":")
            pairs = dict(
                token.split("=", 1) for token in tail.split() if "=" in token
            )
            self._write(
                "summary",
                {"summary_type": stype, "raw": message, **pairs, **fields},
            )
        self._write("status", {"message": message, "level": level, **fields})

    def _task_started(self, rec: TaskRecord) -> None:
        self._write(
            "task_start",
            {"id": rec.task_id, "name": rec.name, "total": rec.total, **rec.meta},
        )

    def _task_advanced(self, rec: TaskRecord, meta: Dict[str, Any]) -> None:
        self._write(
            "task_progress", {"id": rec.task_id, "completed": rec.completed, **meta}
        )

    def _task_ended(self, rec: TaskRecord) -> None:
        self._write(
            "task_end",
            {
                "id": rec.task_id,
                "status": rec.status.name.lower(),
                "completed": rec.completed,
                "total": rec.total,
                "duration_seconds": rec.duration,
                **rec.meta,
            },
        )

    def section(self, title: str) -> None:
        self._write("section", {"title": title})
