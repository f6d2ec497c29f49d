"""pqclient.parsing.output_parser

Extracts status fields from primusquery stdout and repairs its truncated
JSON output files.

Absent fields are not errors: no `Errors:` means zero errors and no `NEW:`
means no record was created.
"""

from __future__ import annotations
import re
import time
from typing import Callable, Optional

from pqclient.contracts.models import NO_RECORD_ID
from pqclient.errors import OutputParseError, QueryFileError
from pqclient.tools.secure_files import SecureFileTool

_ERRORS_RE = re.compile(r"Errors: ([0-9]+)")
_NEW_RECORD_RE = re.compile(r"NEW: ([0-9]+)")

TRUNCATED_TAIL_LENGTH = 6
ARRAY_CLOSE = b"\n]"


def _first_int(pattern: re.Pattern[str], output: str, label: str) -> int | None:
    m = pattern.search(output or "")
    if not m:
        return None
    try:
        return int(m.group(1))
    except ValueError as e:
        raise OutputParseError(f"Cannot parse {label} value {m.group(1)!r}") from e


def count_errors(output: str) -> int:
    count = _first_int(_ERRORS_RE, output, "Errors")
    return 0 if count is None else count


def extract_new_record_id(output: str) -> int:
    record_id = _first_int(_NEW_RECORD_RE, output, "NEW")
    return NO_RECORD_ID if record_id is None else record_id


def repair_truncated_json(
    path: str,
    files: SecureFileTool,
    delay_seconds: float = 2.0,
    sleep: Optional[Callable[[float], None]] = None,
) -> bool:
    """Fix the known multi-record array defect in primusquery JSON output.

    When the exported array holds more than one record (detected by a comma),
    primusquery leaves six bytes of garbage after the last element instead of
    the closing bracket. The file is securely deleted, and after a short pause
    (primusquery may still hold the handle) rewritten without the tail and
    with `\\n]` appended. The file is handled as raw bytes, so its charset
    and line endings are kept. Nested arrays are not handled.

    Returns True when the file was rewritten.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        files.logger.error(f"cannot read {path} JSON-file: {e}")
        raise QueryFileError(f"cannot read JSON file: {e}", filename=path, operation="read") from e

    if b"," not in raw:
        return False
    if len(raw) < TRUNCATED_TAIL_LENGTH:
        raise OutputParseError(f"JSON file {path} is shorter than the truncated tail")

    files.secure_delete(path)
    (sleep or time.sleep)(delay_seconds)
    files.create_file(path, raw[:-TRUNCATED_TAIL_LENGTH] + ARRAY_CLOSE)
    files.logger.debug(f"repaired truncated JSON array in {path}")
    return True
