"""SQL text builders for the asset tables. Pure: no connection, no I/O."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ..domain.asset import CryptoAsset, is_set

ASSET_COLUMNS = (
    "id", "name", "symbol", "description", "icoAmount", "blockReward",
    "fundingStatus", "foundedDate", "coinType", "website",
)

INSERT_ASSET = (
    "INSERT INTO asset(name, symbol, description, icoAmount, blockReward, "
    "fundingStatus, foundedDate, coinType, website) VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?)"
)
INSERT_TEAM_MEMBER = "INSERT INTO team_member(assetId, name) VALUES(?, ?)"
DELETE_TEAM = "DELETE FROM team_member WHERE assetId = ?"
ASSET_EXISTS = "SELECT 1 FROM asset WHERE id = ?"

_SELECT_BASE = (
    "SELECT " + ", ".join(f"a.{c} AS {c}" for c in ASSET_COLUMNS) + ", t.name AS teamMember "
    "FROM asset a LEFT JOIN team_member t ON a.id = t.assetId"
)
_SELECT_ORDER = " ORDER BY a.id, t.rowid"


@dataclass
class Statement:
    sql: str
    args: list[Any] = field(default_factory=list)


def build_select_statement(
    names: Sequence[str],
    symbols: Sequence[str],
    funding_statuses: Sequence[str],
    coin_types: Sequence[str],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Statement:
    """
    Search over asset LEFT JOIN team_member.

    Each value set becomes an OR group on its column; groups and the
    foundedDate bounds are ANDed, in this order: name, symbol, fundingStatus,
    coinType, start date (>=), end date (<=). Empty sets and dates add nothing.
    An asset yields one row per team member, or one row with a NULL member.
    Dates compare as `YYYY-MM-DD` text, which orders the same as the dates.
    """
    where: list[str] = []
    args: list[Any] = []

    for column, values in (
        ("a.name", names),
        ("a.symbol", symbols),
        ("a.fundingStatus", funding_statuses),
        ("a.coinType", coin_types),
    ):
        if values:
            where.append("(" + " OR ".join([f"{column} = ?"] * len(values)) + ")")
            args.extend(values)

    if start_date:
        where.append("a.foundedDate >= ?")
        args.append(start_date)
    if end_date:
        where.append("a.foundedDate <= ?")
        args.append(end_date)

    sql = _SELECT_BASE
    if where:
        sql += " WHERE " + " AND ".join(where)
    sql += _SELECT_ORDER
    return Statement(sql, args)


def build_update_statement(asset_id: int, asset: CryptoAsset) -> Optional[Statement]:
    """
    Sparse UPDATE for the scalar fields present on `asset`, id bound last.
    None when no scalar field is present (the team is not considered here).
    """
    sets: list[str] = []
    args: list[Any] = []
    for column, value in asset.scalar_values():
        if is_set(value):
            sets.append(f"{column} = ?")
            args.append(value)
    if not sets:
        return None
    args.append(asset_id)
    return Statement("UPDATE asset SET " + ", ".join(sets) + " WHERE id = ?", args)


def insert_asset_args(asset: CryptoAsset) -> list[Any]:
    """Positional args for INSERT_ASSET; unset fields bind NULL."""
    return [value if is_set(value) else None for _, value in asset.scalar_values()]
