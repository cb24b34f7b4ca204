import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from .settings.config import settings
from .api import router as api_router
from .services.channels.runtime import close_synchronizer, get_synchronizer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    await close_synchronizer()


app = FastAPI(title="Channel Sync API", version="0.1.0", lifespan=lifespan)
app.include_router(api_router, prefix="/api/v1")

REQUEST_COUNT = Counter(
    "channel_api_requests_total",
    "API request count",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "channel_api_request_latency_seconds",
    "API request latency",
    ["endpoint"],
)


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex
    start = time.perf_counter()
    response: Response = await call_next(request)
    elapsed = time.perf_counter() - start
    route = request.scope.get("route")
    endpoint = getattr(route, "path", None) or request.url.path
    REQUEST_COUNT.labels(request.method, endpoint, response.status_code).inc()
    REQUEST_LATENCY.labels(endpoint).observe(elapsed)
    response.headers["X-Request-Id"] = request_id
    logging.getLogger("channelsync").info(
        "request method=%s path=%s status=%s latency=%.3f",
        request.method, endpoint, response.status_code, elapsed,
    )
    return response


@app.get("/api/v1/health")
def health_check() -> dict:
    """Lightweight health check."""
    return {
        "status": "ok",
        "env": settings.env,
        "selection_backend": settings.selection_backend,
    }


@app.get("/api/v1/health/deep")
def deep_health_check() -> dict:
    """Deep health check: selection storage round trip."""
    checks: dict[str, str] = {}
    try:
        sync = get_synchronizer()
        sync.selection.load("__health__")
        checks["selection_store"] = "ok"
    except Exception as e:  # noqa: BLE001 - report raw for observability
        checks["selection_store"] = f"error: {type(e).__name__}"

    status = "ok" if all(v == "ok" for v in checks.values()) else "degraded"
    return {"status": status, **checks}


@app.get("/metrics")
def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
