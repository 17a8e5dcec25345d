from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any


class _Unset:
    """Marker for a field the caller did not provide."""

    _instance: "_Unset | None" = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

# (attribute, column / JSON key), in the order the update statement lists them
SCALAR_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "name"),
    ("symbol", "symbol"),
    ("description", "description"),
    ("ico_amount", "icoAmount"),
    ("block_reward", "blockReward"),
    ("funding_status", "fundingStatus"),
    ("founded_date", "foundedDate"),
    ("coin_type", "coinType"),
    ("website", "website"),
)


def is_set(value: Any) -> bool:
    return value is not UNSET


@dataclass
class CryptoAsset:
    """
    One crypto asset as sent by a caller or read back from the store.

    Every field defaults to UNSET ("not provided"). For `team` that matters:
    UNSET leaves the stored team alone, [] clears it.
    """
    id: Any = UNSET
    name: Any = UNSET
    symbol: Any = UNSET
    description: Any = UNSET
    team: Any = UNSET
    ico_amount: Any = UNSET
    block_reward: Any = UNSET
    funding_status: Any = UNSET
    founded_date: Any = UNSET
    coin_type: Any = UNSET
    website: Any = UNSET

    @classmethod
    def from_payload(cls, payload: dict) -> "CryptoAsset":
        """Build from a camelCase JSON object; missing keys and nulls stay UNSET."""
        asset = cls()
        if payload.get("id") is not None:
            asset.id = payload["id"]
        if payload.get("team") is not None:
            asset.team = list(payload["team"])
        for attr, key in SCALAR_FIELDS:
            if payload.get(key) is not None:
                setattr(asset, attr, payload[key])
        return asset

    def to_dict(self) -> dict:
        out: dict = {}
        if is_set(self.id):
            out["id"] = self.id
        for attr, key in SCALAR_FIELDS[:3]:
            if is_set(getattr(self, attr)):
                out[key] = getattr(self, attr)
        if is_set(self.team):
            out["team"] = list(self.team)
        for attr, key in SCALAR_FIELDS[3:]:
            if is_set(getattr(self, attr)):
                out[key] = getattr(self, attr)
        return out

    def scalar_values(self) -> list[tuple[str, Any]]:
        """(column, value) pairs for every scalar field, UNSET included."""
        return [(key, getattr(self, attr)) for attr, key in SCALAR_FIELDS]


# a letter opens a word after start of text or any non-word character;
# digits and underscores do not end a word
_WORD_START = re.compile(r"(^|\W)([^\W\d_])")


def capitalize(value: str) -> str:
    """`erc_20 token` -> `Erc_20 Token`, `0x` stays `0x`, `x_coin` -> `X_coin`."""
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), value.strip().lower())


def format_for_display(asset: CryptoAsset) -> CryptoAsset:
    """Human-facing casing for values leaving the system. Idempotent."""
    if isinstance(asset.name, str):
        asset.name = capitalize(asset.name)
    if isinstance(asset.symbol, str):
        asset.symbol = asset.symbol.strip().upper()
    if isinstance(asset.funding_status, str):
        asset.funding_status = asset.funding_status.strip().upper()
    if isinstance(asset.coin_type, str):
        asset.coin_type = capitalize(asset.coin_type)
    return asset
