# app/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.api.routers import health, products
from app.domain.errors import ProductNotFound, StorageUnavailable
from app.repos.product_repo import InMemoryProductStore, ProductStore, RedisProductStore
from app.utils.retry import store_ready_retry
from app.utils.settings import HOST, PORT, STORE_BACKEND
from app.utils.logging import get_logger

logger = get_logger(__name__)


def build_store(backend: str | None = None) -> ProductStore:
    backend = backend or STORE_BACKEND
    if backend == "memory":
        return InMemoryProductStore()
    if backend == "redis":
        return RedisProductStore()
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


def wait_for_store(store: ProductStore, attempts: int | None = None) -> bool:
    @store_ready_retry(attempts)
    def _ping():
        logger.info(f"Checking {store.name} store")
        return store.ping()

    return _ping()


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.state.store
    try:
        await run_in_threadpool(wait_for_store, store, app.state.startup_attempts)
        logger.info(f"Store {store.name} ready")
    except StorageUnavailable as e:
        #serwis startuje mimo to, requesty dostana 503
        logger.error(f"Store {store.name} unreachable at startup: {e}")
    yield


def register_error_handlers(app: FastAPI):
    @app.exception_handler(ProductNotFound)
    async def product_not_found(request: Request, exc: ProductNotFound):
        logger.warning(f"{request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageUnavailable)
    async def storage_unavailable(request: Request, exc: StorageUnavailable):
        logger.warning(f"{request.method} {request.url.path}: storage unavailable ({exc})")
        return JSONResponse(
            status_code=503,
            content={"detail": f"Storage unavailable: {exc}"},
        )

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        logger.warning(f"{request.method} {request.url.path}: bad request")
        return JSONResponse(
            status_code=400,
            content={"detail": jsonable_encoder(exc.errors())},
        )


def create_app(
    store: ProductStore | None = None,
    startup_attempts: int | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Product Service Application",
        version="v1",
        lifespan=lifespan,
    )
    app.state.store = store or build_store()
    app.state.startup_attempts = startup_attempts

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
