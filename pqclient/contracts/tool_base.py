"""pqclient.contracts.tool_base

Tool interfaces for external systems.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .models import ExecutionResult


class ProcessRunner(ABC):
    @abstractmethod
    def run(self, argv: Sequence[str], timeout_seconds: Optional[float]) -> ExecutionResult:
        """Run argv to completion, raising QueryTimeoutError or ExecError."""
        raise NotImplementedError
