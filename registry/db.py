from __future__ import annotations

# registry/db.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator
import os
import yaml

# DB path resolution order:
# 1) env ASSET_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) fallback: <project root>/assets.db
_PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "assets.db")

DDL = """
CREATE TABLE IF NOT EXISTS asset (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  symbol TEXT UNIQUE NOT NULL,
  description TEXT NOT NULL,
  icoAmount REAL NOT NULL,
  blockReward REAL NOT NULL,
  fundingStatus TEXT NOT NULL,
  foundedDate TEXT NOT NULL,
  coinType TEXT NOT NULL,
  website TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS team_member (
  assetId INTEGER NOT NULL,
  name TEXT NOT NULL,
  FOREIGN KEY(assetId) REFERENCES asset(id)
);
CREATE INDEX IF NOT EXISTS idx_team_member_asset ON team_member(assetId);
"""


def read_config() -> dict:
    cfg_path = os.environ.get("ASSET_CONFIG_PATH") or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(cfg, dict):
        return {}
    out = {}
    for k in ("db_path", "test_db_path", "log_level"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def get_db_path() -> str:
    env_path = os.environ.get("ASSET_DB_PATH")
    cfg = read_config()
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        path = _ROOT_DB

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


def connect(db_path: str | None = None) -> sqlite3.Connection:
    """
    Open a SQLite connection that may be shared across threads.
    Autocommit mode (isolation_level=None): transactions are opened explicitly
    with `transaction()`. Foreign keys are enforced, rows come back as Row.
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
    conn.execute("PRAGMA foreign_keys = ON;")
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    Write transaction: BEGIN IMMEDIATE takes the write lock up front, so
    concurrent writers queue on the busy timeout instead of deadlocking.
    COMMIT on normal exit, ROLLBACK on any exception (a failed COMMIT included).
    """
    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
        conn.execute("COMMIT")
    except BaseException:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        raise


def ensure_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(DDL)
