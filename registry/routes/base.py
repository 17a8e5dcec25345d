from fastapi import APIRouter

from ..version import APP_NAME, VERSION

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/version")
def version():
    return {"app": APP_NAME, "version": VERSION}
