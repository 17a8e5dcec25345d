#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Crypto Asset Registry (SQLite + FastAPI)

Commands:
  init                Create the asset and team_member tables in the configured DB
  serve               Run the HTTP API (register / search / update)

Notes:
- The DB path comes from ASSET_DB_PATH, then config.yaml (db_path), then ./assets.db.
- `init` is safe to re-run; tables are only created when missing.
"""

import argparse
import os
import sys

from registry.db import ensure_schema, get_conn, get_db_path
from registry.logs import setup_logging


def cmd_init(args):
    path = args.db or get_db_path()
    with get_conn(path) as conn:
        ensure_schema(conn)
    print(f"Initialized {path}")


def cmd_serve(args):
    import uvicorn

    # read again by the app's startup hook in the server process
    os.environ["LOG_LEVEL"] = args.log_level.upper()
    uvicorn.run("registry.api:app", host=args.host, port=args.port, log_level=args.log_level.lower())


def main(argv=None):
    p = argparse.ArgumentParser(description="Crypto asset registry")
    p.add_argument("--log-level", default="INFO")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("init", help="create tables")
    sp.add_argument("--db", default=None, help="database file (overrides configuration)")
    sp.set_defaults(func=cmd_init)

    sp = sub.add_parser("serve", help="run the HTTP API")
    sp.add_argument("--host", default="127.0.0.1")
    sp.add_argument("--port", type=int, default=8080)
    sp.set_defaults(func=cmd_serve)

    args = p.parse_args(argv)
    setup_logging(args.log_level)
    args.func(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
