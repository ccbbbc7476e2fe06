import asyncio
import logging

from fastapi import FastAPI, Request
from postgrest.exceptions import APIError
from starlette.responses import JSONResponse

from app.core.cache import CacheStore
from app.core.config import settings
from app.routers import catalogue, karigars, orders, rates, reports, stock
from app.routers.deps import get_cache
from app.services.order_service import InsufficientStockError

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

# One cache per process, shared by every request's services.
app.state.cache = CacheStore(default_ttl=settings.CACHE_TTL_SECONDS)

for module in (orders, stock, rates, karigars, catalogue, reports):
    app.include_router(module.router, prefix=settings.API_V1_STR)


@app.exception_handler(APIError)
async def database_error(request: Request, exc: APIError):
    logger.error(f"Database error on {request.url.path}: {exc.message}")
    return JSONResponse({"detail": exc.message or "Database error", "code": exc.code}, status_code=502)


@app.exception_handler(asyncio.TimeoutError)
async def database_timeout(request: Request, exc: asyncio.TimeoutError):
    logger.error(f"Database timeout on {request.url.path}")
    return JSONResponse({"detail": "Database did not respond in time"}, status_code=504)


@app.exception_handler(InsufficientStockError)
async def insufficient_stock(request: Request, exc: InsufficientStockError):
    logger.warning(str(exc))
    return JSONResponse({"detail": str(exc)}, status_code=409)


@app.exception_handler(ValueError)
async def bad_value(request: Request, exc: ValueError):
    logger.warning(f"Rejected request to {request.url.path}: {exc}")
    return JSONResponse({"detail": str(exc)}, status_code=400)


@app.post(f"{settings.API_V1_STR}/session/reset")
async def reset_session(request: Request):
    """Drop every cached read, e.g. when the operator logs out."""
    get_cache(request).clear()
    return {"status": "ok"}


@app.get("/health")
async def health(request: Request):
    cache = get_cache(request)
    return {"status": "ok", "cached_keys": len(cache), "in_flight": cache.in_flight}


@app.get("/")
async def root():
    return {"message": f"{settings.PROJECT_NAME} is running"}
