from __future__ import annotations

"""Explain Mode: one-line JSON milestones for generation, grading and playback.

Off by default; the CLI turns it on with --explain. Lines go to stdout
unless a different sink is installed (tests collect them in a list).
"""

import json
from typing import Any, Callable, Dict

_ENABLED = False
_SINK: Callable[[str], None] = print


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def set_sink(sink: Callable[[str], None] | None) -> None:
    """Route trace lines to ``sink`` (None restores print)."""
    global _SINK
    _SINK = sink or print


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    try:
        body = json.dumps(payload or {}, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        _SINK(f"[EXPLAIN] {event}")
        return
    _SINK(f"[EXPLAIN] {event} :: {body}")
