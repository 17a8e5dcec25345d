from __future__ import annotations

from sqlite3 import Connection
from typing import Iterable

from ..domain.asset import CryptoAsset
from .statements import (
    ASSET_EXISTS,
    DELETE_TEAM,
    INSERT_ASSET,
    INSERT_TEAM_MEMBER,
    Statement,
    insert_asset_args,
)


def insert_asset(conn: Connection, asset: CryptoAsset) -> int:
    cur = conn.execute(INSERT_ASSET, insert_asset_args(asset))
    return int(cur.lastrowid)


def insert_team_members(conn: Connection, asset_id: int, team: Iterable[str]) -> None:
    conn.executemany(INSERT_TEAM_MEMBER, [(asset_id, member) for member in team])


def delete_team_members(conn: Connection, asset_id: int) -> None:
    conn.execute(DELETE_TEAM, (asset_id,))


def exists(conn: Connection, asset_id: int) -> bool:
    return conn.execute(ASSET_EXISTS, (asset_id,)).fetchone() is not None


def execute_update(conn: Connection, stmt: Statement) -> int:
    """Run a scalar UPDATE and return the number of rows it touched."""
    return conn.execute(stmt.sql, stmt.args).rowcount


def fetch_joined(conn: Connection, stmt: Statement):
    return conn.execute(stmt.sql, stmt.args).fetchall()


def fold_rows(rows) -> list[CryptoAsset]:
    """
    Collapse asset/team join rows into one CryptoAsset per id, members in row
    order. A NULL member (asset without team) adds nothing.
    """
    by_id: dict[int, CryptoAsset] = {}
    for r in rows:
        asset = by_id.get(r["id"])
        if asset is None:
            asset = CryptoAsset(
                id=str(r["id"]),
                name=r["name"],
                symbol=r["symbol"],
                description=r["description"],
                team=[],
                ico_amount=r["icoAmount"],
                block_reward=r["blockReward"],
                funding_status=r["fundingStatus"],
                founded_date=r["foundedDate"],
                coin_type=r["coinType"],
                website=r["website"],
            )
            by_id[r["id"]] = asset
        if r["teamMember"] is not None:
            asset.team.append(r["teamMember"])
    return list(by_id.values())
