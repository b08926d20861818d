"""
JaipurTV site content API
"""

import time
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from api.contact import router as contact_router
from api.content import CORS_HEADERS, router as content_router
from api.v1 import v1_router
from schemas.responses import HealthResponse
from services.backends.registry import get_backend_adapter
from services.content.store import ContentStore
from utils.config import get_config
from utils.config_bootstrap import validate_config_on_startup
from utils.error_handler import GlobalExceptionHandler
from utils.exceptions import ConfigurationError
from utils.monitoring import init_sentry, registry, track_request_metrics
from utils.response_envelope import format_success_response, handle_api_exception
from utils.structured_logging import get_structured_logger, set_request_context, setup_structured_logging

logger = get_structured_logger(__name__)

SERVICE_NAME = "jaipurtv-site-content"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: config checks, backend selection, initial content load"""
    config = get_config()
    setup_structured_logging(
        config.log_level,
        service=SERVICE_NAME,
        json_output=config.environment != "development"
    )
    logger.info("🚀 Starting JaipurTV site content API", backend=config.content_backend)

    if init_sentry(config):
        logger.info("Sentry error tracking enabled")

    # The server-side content API refuses to start half-configured
    if config.content_api_enabled:
        try:
            validate_config_on_startup(config)
        except ConfigurationError:
            logger.error("🚨 Configuration validation failed - aborting startup")
            raise

    try:
        adapter = get_backend_adapter(config)
    except ConfigurationError as e:
        logger.error("❌ Content backend unavailable, serving defaults", error=e.message, details=e.details)
        adapter = None

    store = ContentStore(adapter)
    app.state.content_store = store
    await store.initialize()

    yield

    logger.info("🛑 Application shutting down")
    await store.close()
    if adapter is not None:
        await adapter.aclose()


app = FastAPI(
    title="JaipurTV Site Content API",
    description="Site content sync, admin console and contact mailer for the JaipurTV website",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Content", "description": "GitHub-backed content read/commit"},
        {"name": "Contact", "description": "Contact form mailer"},
        {"name": "Site Content", "description": "Admin console over the live content store"},
        {"name": "Health", "description": "System health and monitoring"}
    ]
)

app.add_middleware(GlobalExceptionHandler)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Request id for structured logs, plus request metrics"""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    set_request_context(request_id)
    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    track_request_metrics(request.method, request.url.path, response.status_code, time.perf_counter() - started)
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(content_router, prefix="/api", tags=["Content"])
app.include_router(contact_router, prefix="/api", tags=["Contact"])
app.include_router(v1_router, prefix="/api")


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """405 bodies in the shape the site's clients expect; admin console errors use the envelope"""
    if exc.status_code == 405:
        if request.url.path == "/api/contact":
            return JSONResponse(status_code=405, content={"message": "Method not allowed"})
        return JSONResponse(status_code=405, content={"error": "method-not-allowed"}, headers=CORS_HEADERS)
    if request.url.path.startswith("/api/v1/"):
        return JSONResponse(status_code=exc.status_code, content=handle_api_exception(exc).model_dump())
    return await http_exception_handler(request, exc)


@app.get("/metrics", include_in_schema=False)
async def get_metrics():
    """Prometheus metrics endpoint"""
    return Response(
        generate_latest(registry),
        media_type=CONTENT_TYPE_LATEST
    )


@app.get("/api/health", tags=["Health"])
async def api_health():
    return {"status": "ok"}


@app.get("/health", tags=["Health"])
async def health_check(request: Request) -> dict:
    """Service status and content store readiness"""
    store = getattr(request.app.state, "content_store", None)
    adapter = store.adapter if store else None
    health = HealthResponse(
        status="healthy" if store is not None and store.ready else "starting",
        service=SERVICE_NAME,
        backend=adapter.backend_name if adapter else None,
        store_ready=bool(store and store.ready)
    )
    return format_success_response(health.model_dump())


@app.get("/", tags=["Health"])
async def root():
    """API information and navigation links"""
    api_info = {
        "message": "JaipurTV Site Content API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics",
        "api_base": "/api/v1"
    }

    return format_success_response(api_info)


if __name__ == "__main__":
    config = get_config()
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=config.port,
        reload=config.environment == "development"
    )
