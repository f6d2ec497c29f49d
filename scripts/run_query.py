"""scripts.run_query

Run one ad-hoc primusquery search and print its output.

Usage:
  python scripts/run_query.py --host pq.example --port 4444 --user me --database CARDS \
      --search "NAME=Smith" --data "@data.txt" [--timeout 30] [--repair out.json --output out.json]
"""

from __future__ import annotations

from pqclient.env_loader import load_env
import argparse
import os

from pqclient.config import Settings
from pqclient.contracts.models import PrimusQuery
from pqclient.errors import PQError
from pqclient.main import build_primusquery_tool


def _read_arg(value: str) -> str:
    """`@path` reads the value from a file."""
    if value.startswith("@"):
        with open(value[1:], "r", encoding="utf-8") as f:
            return f.read().rstrip("\n")
    return value


def main() -> int:
    load_env()  # load .env if present
    ap = argparse.ArgumentParser()
    ap.add_argument("--host", required=True)
    ap.add_argument("--port", required=True)
    ap.add_argument("--user", required=True)
    ap.add_argument("--password", default=os.getenv("PQ_PASSWORD", ""), help="Defaults to $PQ_PASSWORD")
    ap.add_argument("--database", required=True)
    ap.add_argument("--search", required=True)
    ap.add_argument("--charset", default="UTF-8")
    ap.add_argument("--header", default="")
    ap.add_argument("--data", default="", help="Payload text, or @file")
    ap.add_argument("--footer", default="")
    ap.add_argument("--output", default="", help="Write results to this file instead of stdout")
    ap.add_argument("--timeout", type=int, default=None)
    ap.add_argument("--repair", action="store_true", help="Repair truncated JSON in --output afterwards")
    args = ap.parse_args()

    settings = Settings.load()
    tool = build_primusquery_tool(settings)

    query = PrimusQuery(
        charset=args.charset,
        host=args.host,
        port=args.port,
        user=args.user,
        password=args.password,
        output=args.output,
        database=args.database,
        search=args.search,
        header=_read_arg(args.header),
        data=_read_arg(args.data),
        footer=_read_arg(args.footer),
    )

    try:
        if args.output:
            tool.refresh_index(args.host)
            tool.execute(query, timeout_seconds=args.timeout)
            if args.repair:
                tool.repair_output(args.output)
        else:
            print(tool.run_ad_hoc_query(query, timeout_seconds=args.timeout), end="")
    except PQError as e:
        tool.logger.error(f"query failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
