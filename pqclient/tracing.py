"""pqclient.tracing

Trace collection for debug runs.
Each primusquery invocation appends a structured payload (mode, return code,
elapsed time, timeout flag) so a caller can inspect what was executed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


@dataclass
class TraceCollector:
    """Collects per-invocation traces."""
    traces: list[dict[str, Any]] = field(default_factory=list)

    def add(self, step_name: str, payload: dict[str, Any]) -> None:
        self.traces.append({"step": step_name, "payload": payload})

    def steps(self) -> list[str]:
        return [t["step"] for t in self.traces]
