# app/api/routers/health.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_store
from app.domain.errors import StorageUnavailable
from app.domain.schemas import HealthOut
from app.repos.product_repo import ProductStore

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health(store: ProductStore = Depends(get_store)):
    try:
        store.ping()
    except StorageUnavailable:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "store": store.name},
        )
    return HealthOut(status="ok", store=store.name)
