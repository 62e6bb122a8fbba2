from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TraceContext:
    """Correlation ids copied into every published order event."""

    trace_id: str | None = None
    request_id: str | None = None
