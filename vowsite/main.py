"""
Main FastAPI application for the VowSite API.
Serves health, vows content, unlock gate, metrics, the vows page and the admin form.
"""
import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vowsite.core.config import settings
from vowsite.core.errors import AuthError, StorageError
from vowsite.core.logging import configure_logging
from vowsite.db.init_db import init_db
from vowsite.admin import ui as admin_ui
from vowsite.api.routes import health, pages, unlock, vows
from vowsite.utils.metrics import http_request_duration_seconds, router as metrics_router

logger = logging.getLogger("vowsite.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Schema problems are logged; the API still starts
    init_db()
    logger.info("vowsite_api_started", extra={"path": f"http://localhost:{settings.vows_api_port}"})
    yield


app = FastAPI(
    title="VowSite API",
    description="Bilingual wedding vows with an admin-controlled unlock gate",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
origins = settings.cors_origins_list or ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get(settings.request_id_header) or uuid4().hex
    start = time.perf_counter()
    extra = {"request_id": request_id, "path": request.url.path, "method": request.method}
    try:
        response = await call_next(request)
    except Exception as e:
        elapsed = time.perf_counter() - start
        http_request_duration_seconds.labels(method=request.method, status="500").observe(elapsed)
        logger.exception(
            "http_request",
            extra={**extra, "status_code": 500, "latency_ms": round(elapsed * 1000, 1), "error": str(e)},
        )
        raise
    elapsed = time.perf_counter() - start
    response.headers[settings.request_id_header] = request_id
    http_request_duration_seconds.labels(method=request.method, status=str(response.status_code)).observe(elapsed)
    logger.info(
        "http_request",
        extra={**extra, "status_code": response.status_code, "latency_ms": round(elapsed * 1000, 1)},
    )
    return response


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": f"Failed to {exc.operation.replace('_', ' ')}"})


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": str(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


# Routers
app.include_router(health.router, tags=["health"])
app.include_router(vows.router)
app.include_router(unlock.router)
app.include_router(metrics_router)
app.include_router(pages.router)
app.include_router(admin_ui.router)


def run() -> None:
    import uvicorn

    uvicorn.run("vowsite.main:app", host="0.0.0.0", port=settings.vows_api_port)
