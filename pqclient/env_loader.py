"""pqclient.env_loader

Loads PQ_* settings (executable path, debug flag, timeouts) from a .env file
kept next to where the client is run. Already-set environment variables win
unless override=True.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import find_dotenv, load_dotenv


def load_env(dotenv_path: str | None = None, override: bool = False) -> str | None:
    """Load env vars from an explicit .env path, or the nearest one above CWD.

    Returns the .env path used, or None if none was found.
    """
    if dotenv_path:
        path = str(Path(dotenv_path).expanduser())
        if not Path(path).is_file():
            return None
    else:
        path = find_dotenv(usecwd=True)
        if not path:
            return None

    load_dotenv(dotenv_path=path, override=override)
    return path
