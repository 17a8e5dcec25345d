"""
Caller-fixable failures of the registry, as one tagged error type.

`AssetError.kind` says what went wrong, `AssetError.value` carries the
offending id/field/symbol where there is one. Anything that is not an
AssetError (sqlite3 errors included) is an internal failure.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

_AMOUNT_LABELS = {"icoAmount": "ICO amount", "blockReward": "block reward"}


class ErrorKind(str, Enum):
    # normalization
    INVALID_ID = "INVALID_ID"
    INVALID_DATE = "INVALID_DATE"
    NEGATIVE_AMOUNT = "NEGATIVE_AMOUNT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    # insert
    NULL_CONSTRAINT = "NULL_CONSTRAINT"
    DUPLICATE_SYMBOL = "DUPLICATE_SYMBOL"
    # update
    EMPTY_UPDATE = "EMPTY_UPDATE"
    UNKNOWN_ID = "UNKNOWN_ID"


class AssetError(Exception):
    def __init__(self, kind: ErrorKind, message: str, value: Any = None):
        super().__init__(message)
        self.kind = kind
        self.value = value

    def __repr__(self) -> str:
        return f"AssetError({self.kind.value}, {str(self)!r}, value={self.value!r})"

    @classmethod
    def invalid_id(cls, raw: str) -> "AssetError":
        return cls(ErrorKind.INVALID_ID, f"invalid id: {raw}", raw)

    @classmethod
    def invalid_date(cls, raw: str) -> "AssetError":
        return cls(ErrorKind.INVALID_DATE, "date must be an ISO-8601 date in the past", raw)

    @classmethod
    def negative_amount(cls, field: str) -> "AssetError":
        label = _AMOUNT_LABELS.get(field, field)
        return cls(ErrorKind.NEGATIVE_AMOUNT, f"{label} cannot be negative", field)

    @classmethod
    def invalid_amount(cls, field: str) -> "AssetError":
        label = _AMOUNT_LABELS.get(field, field)
        return cls(ErrorKind.INVALID_AMOUNT, f"{label} must be a finite number", field)

    @classmethod
    def null_constraint(cls, field: str) -> "AssetError":
        return cls(ErrorKind.NULL_CONSTRAINT, f"{field} cannot be null", field)

    @classmethod
    def duplicate_symbol(cls, symbol: str) -> "AssetError":
        return cls(ErrorKind.DUPLICATE_SYMBOL, f"symbol {symbol} already exists", symbol)

    @classmethod
    def empty_update(cls) -> "AssetError":
        return cls(ErrorKind.EMPTY_UPDATE, "nothing to update")

    @classmethod
    def unknown_id(cls, asset_id: int) -> "AssetError":
        return cls(ErrorKind.UNKNOWN_ID, f"crypto asset with id {asset_id} not found", asset_id)
