from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict

from ..domain.asset import CryptoAsset, format_for_display
from ..domain.errors import AssetError
from ..domain.normalize import normalize, normalize_text, parse_iso_date
from ..logs import LogContext
from ..services.asset_store import DataStore

router = APIRouter()

INTERNAL_ERROR = "internal server error"


class AssetBody(BaseModel):
    # JSON 1e400 would otherwise decode to inf and be stored
    model_config = ConfigDict(allow_inf_nan=False)

    id: str | None = None
    name: str | None = None
    symbol: str | None = None
    description: str | None = None
    team: list[str] | None = None
    icoAmount: float | None = None
    blockReward: float | None = None
    fundingStatus: str | None = None
    foundedDate: str | None = None
    coinType: str | None = None
    website: str | None = None


def get_store(request: Request) -> DataStore:
    return request.app.state.store


def split_query_values(values: list[str]) -> list[str]:
    """`?name=a,b&name=c` -> ["a", "b", "c"], each normalized like stored text."""
    out = []
    for value in values:
        for part in value.split(","):
            out.append(normalize_text(part))
    return out


def first_query_date(value: str | None) -> str | None:
    """First comma separated value if it is a `YYYY-MM-DD` date, else None (no bound)."""
    if not value:
        return None
    first = value.split(",")[0]
    return first if parse_iso_date(first) is not None else None


@router.post("/register")
def api_register(body: AssetBody, store: DataStore = Depends(get_store)):
    log = LogContext("ASSET_REGISTER")
    payload = body.model_dump(exclude_none=True)
    log.set_payload(payload)
    # an absent team is rejected; {"team": []} registers an asset without members
    if body.team is None:
        log.write("REJECTED", "team cannot be null")
        raise HTTPException(status_code=400, detail="team cannot be null")

    asset = CryptoAsset.from_payload(payload)
    try:
        normalize(asset)
        asset_id = store.insert(asset)
    except AssetError as ae:
        log.write("REJECTED", str(ae))
        raise HTTPException(status_code=400, detail=str(ae))
    except Exception as e:
        log.write("ERROR", repr(e))
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    log.set_entity("ASSET", asset_id)
    log.write("OK")
    return {"id": asset_id}


@router.get("/search")
def api_search(
    name: list[str] = Query(default=[]),
    symbol: list[str] = Query(default=[]),
    funding_status: list[str] = Query(default=[], alias="fundingStatus"),
    coin_type: list[str] = Query(default=[], alias="coinType"),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    store: DataStore = Depends(get_store),
):
    log = LogContext("ASSET_SEARCH")
    criteria = {
        "names": split_query_values(name),
        "symbols": split_query_values(symbol),
        "funding_statuses": split_query_values(funding_status),
        "coin_types": split_query_values(coin_type),
        "start_date": first_query_date(start_date),
        "end_date": first_query_date(end_date),
    }
    log.set_payload(criteria)
    try:
        assets = store.select(**criteria)
    except Exception as e:
        log.write("ERROR", repr(e))
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    log.write("OK")
    return [format_for_display(a).to_dict() for a in assets]


@router.post("/update")
def api_update(body: AssetBody, store: DataStore = Depends(get_store)):
    log = LogContext("ASSET_UPDATE")
    payload = body.model_dump(exclude_none=True)
    log.set_payload(payload)
    if body.id is None:
        log.write("REJECTED", "no id in request")
        raise HTTPException(status_code=400, detail="no id in request")

    asset = CryptoAsset.from_payload(payload)
    try:
        asset_id = normalize(asset)
        log.set_entity("ASSET", str(asset_id))
        store.update(asset_id, asset)
    except AssetError as ae:
        log.write("REJECTED", str(ae))
        raise HTTPException(status_code=400, detail=str(ae))
    except Exception as e:
        log.write("ERROR", repr(e))
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)

    log.write("OK")
    return {"message": "ok"}
