"""scripts.run_import

Import a single record with a primusquery loader and print the new record id
and error count. The import file is securely deleted afterwards.

Usage:
  python scripts/run_import.py --file card.imp --host pq.example --port 4444 --user me --loader CARD_LOADER
"""

from __future__ import annotations

from pqclient.env_loader import load_env
import argparse
import os

from pqclient.errors import PQError
from pqclient.main import build_primusquery_tool


def main() -> int:
    load_env()  # load .env if present
    ap = argparse.ArgumentParser()
    ap.add_argument("--file", required=True, help="Import file (deleted after the run)")
    ap.add_argument("--host", required=True)
    ap.add_argument("--port", required=True)
    ap.add_argument("--user", required=True)
    ap.add_argument("--password", default=os.getenv("PQ_PASSWORD", ""), help="Defaults to $PQ_PASSWORD")
    ap.add_argument("--loader", required=True)
    ap.add_argument("--timeout", type=int, default=None)
    args = ap.parse_args()

    tool = build_primusquery_tool()
    try:
        new_id, errors = tool.run_atomic_import(
            args.file, args.host, args.port, args.user, args.password, args.loader, timeout_seconds=args.timeout
        )
    except PQError as e:
        tool.logger.error(f"import failed: {e}")
        return 1

    print(f"NEW: {new_id}")
    print(f"Errors: {errors}")
    return 0 if errors == 0 else 2


if __name__ == "__main__":
    raise SystemExit(main())
