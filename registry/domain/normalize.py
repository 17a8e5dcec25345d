from __future__ import annotations

import math
import re
from datetime import date, datetime

from .asset import CryptoAsset, is_set
from .errors import AssetError

_ID_RE = re.compile(r"[+-]?[0-9]+")
# SQLite INTEGER range
_ID_MIN, _ID_MAX = -(2 ** 63), 2 ** 63 - 1
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def normalize_text(value: str) -> str:
    """Trim and lowercase: the form text fields are stored and searched in."""
    return value.strip().lower()


def parse_iso_date(value: str) -> date | None:
    """`YYYY-MM-DD` only (zero padded), else None."""
    if not _DATE_RE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def _check_amount(value, field: str) -> None:
    if not is_set(value):
        return
    if not math.isfinite(value):
        raise AssetError.invalid_amount(field)
    if value < 0:
        raise AssetError.negative_amount(field)


def normalize(asset: CryptoAsset) -> int:
    """
    Bring a caller supplied asset into canonical storage form, in place.

    Returns the parsed id (0 when the asset carries none). Raises AssetError
    for a non-numeric or out of range id, a negative or non-finite ICO amount
    or block reward, or a founded date that is not an ISO-8601 date in the past.
    """
    asset_id = 0
    if is_set(asset.id):
        raw = str(asset.id)
        if not _ID_RE.fullmatch(raw):
            raise AssetError.invalid_id(raw)
        asset_id = int(raw)
        if not _ID_MIN <= asset_id <= _ID_MAX:
            raise AssetError.invalid_id(raw)

    if is_set(asset.name):
        asset.name = normalize_text(asset.name)

    if is_set(asset.symbol):
        asset.symbol = normalize_text(asset.symbol)

    # Descriptions are only trimmed, their capitalization is ambiguous.
    if is_set(asset.description):
        asset.description = asset.description.strip()

    # Members may go by pseudonyms, keep their casing.
    if is_set(asset.team):
        asset.team = [member.strip() for member in asset.team]

    _check_amount(asset.ico_amount, "icoAmount")
    _check_amount(asset.block_reward, "blockReward")

    if is_set(asset.funding_status):
        asset.funding_status = normalize_text(asset.funding_status)

    if is_set(asset.founded_date):
        founded = asset.founded_date.strip()
        parsed = parse_iso_date(founded)
        if parsed is None or parsed > date.today():
            raise AssetError.invalid_date(founded)
        asset.founded_date = founded

    if is_set(asset.coin_type):
        asset.coin_type = normalize_text(asset.coin_type)

    if is_set(asset.website):
        asset.website = normalize_text(asset.website)

    return asset_id
