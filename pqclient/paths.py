"""pqclient.paths

Helpers for resolving file system paths consistently (scripts can run from different CWDs).
"""

from __future__ import annotations
from pathlib import Path
import tempfile


def query_temp_dir(configured: str | None = None) -> Path:
    """Return the directory for temporary query files, creating it if configured."""
    if configured:
        p = Path(configured).expanduser()
        p.mkdir(parents=True, exist_ok=True)
        return p.resolve()
    return Path(tempfile.gettempdir())
