"""
Inventory Admin - FastAPI Application
Admin console and API for the inventory management system
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import structlog

from inventory_admin.config import get_app_config, get_db_config, get_supabase_config
from inventory_admin.routes import auth, console, health, users
from inventory_admin.utils.database import ProfileStore
from inventory_admin.utils.exceptions import AdminConsoleError, StoreError
from inventory_admin.utils.logger import configure_logging
from inventory_admin.utils.supabase_client import SupabaseIdentityProvider

app_config = get_app_config()

configure_logging(app_config.log_level, json_output=app_config.is_production())

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the identity provider handle and the connection pool, release them on shutdown"""
    logger.info("Inventory Admin starting up", environment=app_config.environment)

    try:
        supabase_config = get_supabase_config()
    except ValidationError as e:
        logger.error("Missing Supabase configuration: SUPABASE_URL and SUPABASE_ANON_KEY are required", error=str(e))
        raise

    supabase_config.log_config()
    app.state.identity_provider = SupabaseIdentityProvider(supabase_config)

    db_config = get_db_config()
    db_config.log_config()
    profile_store = ProfileStore(db_config)
    try:
        await profile_store.initialize()
    except StoreError as e:
        # Pages still load; queries report the outage until the database is back
        logger.error("Database connection error", error=e.message)
    app.state.profile_store = profile_store

    logger.info("Inventory Admin startup complete")

    yield

    logger.info("Inventory Admin shutting down")
    await profile_store.close()


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


# Create FastAPI application
app = FastAPI(
    title="Inventory Admin",
    description="Admin console and API for the inventory management system",
    version=app_config.service_version,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[app_config.client_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming requests"""
    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        client_ip=request.client.host if request.client else "unknown"
    )

    return response


@app.middleware("http")
async def security_headers(request: Request, call_next):
    """Baseline security headers on every response"""
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Custom HTTP exception handler"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code
        },
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(AdminConsoleError)
async def admin_console_exception_handler(request: Request, exc: AdminConsoleError):
    """Closed error taxonomy rendered with the same envelope as HTTP errors"""
    logger.warning(
        "Request failed",
        error_type=type(exc).__name__,
        error=exc.message,
        method=request.method,
        path=request.url.path
    )
    content = {
        "error": True,
        "message": exc.message,
        "status_code": exc.status_code
    }
    reason = getattr(exc, "reason", None)
    if reason is not None:
        content["reason"] = reason.value
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        method=request.method,
        path=request.url.path,
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "message": "An unexpected error occurred",
            "status_code": 500
        }
    )


# Include routers; the console catch-all must stay last
app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/api/users", tags=["User Management"])
app.include_router(console.router, tags=["Admin Console"])


def run():
    """Console entry point"""
    import uvicorn
    uvicorn.run(
        "inventory_admin.main:app",
        host="0.0.0.0",
        port=app_config.port,
        log_level=app_config.log_level.lower()
    )


if __name__ == "__main__":
    run()
