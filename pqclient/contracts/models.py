"""pqclient.contracts.models

Shared models for the serializer, the process invoker and its callers.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple

NO_RECORD_ID = -1


@dataclass(frozen=True)
class PrimusQuery:
    """One request to the primusquery executable.

    Every field is copied verbatim into the rendered query file, so port is a
    string. `output` is the target file for fetched records; it is cleared for
    ad-hoc queries that read their results from stdout.
    """
    charset: str = ""
    host: str = ""
    port: str = ""
    user: str = ""
    password: str = ""
    output: str = ""
    database: str = ""
    search: str = ""
    header: str = ""
    data: str = ""
    footer: str = ""


@dataclass
class ExecutionResult:
    """Outcome of one finished primusquery subprocess."""
    argv: list[str]
    stdout: str
    stderr: str
    returncode: int
    elapsed_ms: int


class AtomicImportResult(NamedTuple):
    new_record_id: int
    error_count: int


FAILED_ATOMIC_IMPORT = AtomicImportResult(NO_RECORD_ID, -1)
