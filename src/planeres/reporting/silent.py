from __future__ import annotations

from typing import Any, Dict

from .base import Reporter


class SilentReporter(Reporter):
    """Drops every message; tasks are still tracked (quiet mode, tests)."""

    def _emit(self, level: str, message: str, fields: Dict[str, Any]) -> None:
        pass
