from __future__ import annotations

import sqlite3
import threading
from typing import Optional, Sequence

from ..db import connect, ensure_schema, transaction
from ..domain.asset import CryptoAsset, is_set
from ..domain.errors import AssetError
from ..repository import asset_repo
from ..repository.statements import build_select_statement, build_update_statement


class DataStore:
    def insert(self, asset: CryptoAsset) -> str: ...
    def select(
        self,
        names: Sequence[str],
        symbols: Sequence[str],
        funding_statuses: Sequence[str],
        coin_types: Sequence[str],
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[CryptoAsset]: ...
    def update(self, asset_id: int, asset: CryptoAsset) -> None: ...
    def close(self) -> None: ...


def _constraint_error(err: sqlite3.IntegrityError, symbol: Optional[str]) -> Optional[AssetError]:
    """
    Map a NOT NULL / UNIQUE(symbol) violation to an AssetError, None otherwise.
    SQLite reports e.g. 'NOT NULL constraint failed: asset.name'; the column
    is whatever follows the last period.
    """
    msg = str(err)
    if msg.startswith("NOT NULL constraint failed"):
        return AssetError.null_constraint(msg[msg.rfind(".") + 1:])
    if msg.startswith("UNIQUE constraint failed") and msg.endswith(".symbol"):
        return AssetError.duplicate_symbol(symbol or "")
    return None


def _is_foreign_key_error(err: sqlite3.IntegrityError) -> bool:
    return str(err).startswith("FOREIGN KEY constraint failed")


class AssetStore(DataStore):
    """
    SQLite backed DataStore over one shared connection.

    A sqlite3 connection is a single session, so each operation holds the
    connection for its whole transaction. Writes are atomic: insert/update
    either apply every row change or none.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn
        self._lock = threading.RLock()

    @classmethod
    def open(cls, db_path: str | None = None) -> "AssetStore":
        conn = connect(db_path)
        try:
            ensure_schema(conn)
        except sqlite3.Error:
            conn.close()
            raise
        return cls(conn)

    def insert(self, asset: CryptoAsset) -> str:
        team = asset.team if is_set(asset.team) else []
        symbol = asset.symbol if is_set(asset.symbol) else None
        with self._lock:
            try:
                with transaction(self._conn) as conn:
                    asset_id = asset_repo.insert_asset(conn, asset)
                    asset_repo.insert_team_members(conn, asset_id, team)
            except sqlite3.IntegrityError as e:
                mapped = _constraint_error(e, symbol)
                if mapped is not None:
                    raise mapped from e
                raise
        return str(asset_id)

    def select(
        self,
        names: Sequence[str],
        symbols: Sequence[str],
        funding_statuses: Sequence[str],
        coin_types: Sequence[str],
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[CryptoAsset]:
        stmt = build_select_statement(names, symbols, funding_statuses, coin_types, start_date, end_date)
        with self._lock:
            rows = asset_repo.fetch_joined(self._conn, stmt)
        return asset_repo.fold_rows(rows)

    def update(self, asset_id: int, asset: CryptoAsset) -> None:
        stmt = build_update_statement(asset_id, asset)
        replace_team = is_set(asset.team)
        if stmt is None and not replace_team:
            raise AssetError.empty_update()

        symbol = asset.symbol if is_set(asset.symbol) else None
        with self._lock:
            try:
                with transaction(self._conn) as conn:
                    if stmt is not None:
                        if asset_repo.execute_update(conn, stmt) != 1:
                            raise AssetError.unknown_id(asset_id)
                    elif not asset_repo.exists(conn, asset_id):
                        raise AssetError.unknown_id(asset_id)

                    if replace_team:
                        asset_repo.delete_team_members(conn, asset_id)
                        asset_repo.insert_team_members(conn, asset_id, asset.team)
            except sqlite3.IntegrityError as e:
                if _is_foreign_key_error(e):
                    raise AssetError.unknown_id(asset_id) from e
                mapped = _constraint_error(e, symbol)
                if mapped is not None:
                    raise mapped from e
                raise

    def close(self) -> None:
        with self._lock:
            self._conn.close()
