from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from onstreet_mock.api import remote_config, tickets, zones
from onstreet_mock.api.deps import get_catalog, get_ledger
from onstreet_mock.core.config import settings
from onstreet_mock.core.exceptions import TicketValidationError
from onstreet_mock.core.redis import init_redis, close_redis, get_redis
from onstreet_mock.core.metrics import request_count, request_duration, redis_connected, get_metrics_text
from onstreet_mock.services.catalog import ZoneCatalog, build_catalog
from onstreet_mock.services.ledger import MISSING_PLATE_MESSAGE, TicketLedger
from onstreet_mock.services.quote_cache import QuoteCache
import time
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

UNMATCHED_ENDPOINT = "unmatched"


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        try:
            response = await call_next(request)
            status = response.status_code
        except Exception:
            status = 500
            raise
        finally:
            duration = time.time() - start_time
            # route templates keep plates out of the label values
            route = request.scope.get("route")
            endpoint = getattr(route, "path", UNMATCHED_ENDPOINT)

            request_count.labels(
                method=request.method,
                endpoint=endpoint,
                status=status
            ).inc()

            request_duration.labels(
                method=request.method,
                endpoint=endpoint
            ).observe(duration)

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting...")
    logger.info(f"Serving {len(app.state.catalog)} zones, {len(app.state.ledger)} seeded tickets")

    if settings.REDIS_URL:
        logger.info("Initializing Redis connection...")
        try:
            await init_redis()
            redis_connected.set(1)
            logger.info("Redis connected")
        except Exception as e:
            logger.warning(f"Redis connection failed, rate limiting disabled: {e}")
            redis_connected.set(0)

    yield

    logger.info("Application shutting down...")
    await close_redis()
    redis_connected.set(0)
    logger.info("✓ Shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.state.catalog = build_catalog(settings.ZONES_FILE)
app.state.ledger = TicketLedger(seed_plates=settings.LEDGER_SEED_PLATES)
app.state.quote_cache = QuoteCache()

app.add_middleware(MetricsMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=True,
)

app.include_router(remote_config.router)
app.include_router(zones.router)
app.include_router(tickets.router)


@app.exception_handler(TicketValidationError)
async def ticket_validation_handler(request: Request, exc: TicketValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # pay-ticket only documents 400 {error}: any unreadable body means no plate
    route = request.scope.get("route")
    if getattr(route, "path", None) == tickets.PAY_TICKET_PATH:
        return JSONResponse(status_code=400, content={"error": MISSING_PLATE_MESSAGE})
    return await request_validation_exception_handler(request, exc)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check(
    catalog: ZoneCatalog = Depends(get_catalog),
    ledger: TicketLedger = Depends(get_ledger)
):
    redis = get_redis()

    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "redis": "connected" if redis is not None else "disconnected"
        },
        "zones": len(catalog),
        "tickets": len(ledger)
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics",
        "config": "/v1/config"
    }


def run():
    import uvicorn

    uvicorn.run(
        "onstreet_mock.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
