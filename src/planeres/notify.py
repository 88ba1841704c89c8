"""Operator notifications raised while loading resources.

Every notice is kept on the caller's list (so results can be inspected
after the fact) and forwarded to the active reporter immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from .reporting import get_reporter

__all__ = ["Severity", "Notice", "notify"]


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"


@dataclass(slots=True, frozen=True)
class Notice:
    severity: Severity
    title: str
    message: str


def notify(
    notices: List[Notice], severity: Severity, title: str, message: str
) -> Notice:
    notice = Notice(severity, title, message)
    notices.append(notice)
    rep = get_reporter()
    if severity is Severity.ERROR:
        rep.error(message, title=title)
    elif severity is Severity.WARNING:
        rep.warning(message, title=title)
    else:
        rep.status(message, title=title)
    return notice
