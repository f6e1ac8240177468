"""Evidence Manager - FastAPI Application
Police department case and evidence tracking REST API.
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.auth import router as auth_router
from api.errors import register_exception_handlers
from api.middleware import ApiKeyMiddleware, RequestLoggingMiddleware, SecurityHeadersMiddleware
from api.routes import cases_router, evidence_router, officers_router
from core.config import api_settings, get_environment, is_development
from core.database.session import close_db, init_db_async, test_connection, wait_for_database
from core.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger = configure_logging(
        log_dir=os.getenv("LOG_DIR", "./logs"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        json_format=True,
    )

    env = get_environment()
    logger.info("Starting Evidence Manager API...", environment=env)

    db_available = await wait_for_database(
        timeout=float(os.getenv("DB_STARTUP_TIMEOUT", "60")),
        interval=2.0,
    )
    if not db_available:
        if env == "production":
            raise RuntimeError("Database not available - cannot start in production mode")
        logger.warning("Database not available - requests will fail until it is reachable")
    else:
        await init_db_async()
        logger.info("Database tables initialized")

    if not is_development() and not api_settings.api_key:
        logger.warning("API_API_KEY is not set - every request outside the health endpoints will be rejected")

    app.state.ready = db_available
    logger.info("Evidence Manager API ready to accept requests")

    yield

    logger.info("Shutting down Evidence Manager API...")
    app.state.ready = False
    await close_db()
    logger.info("Evidence Manager API shutdown complete")


app = FastAPI(
    title=api_settings.title,
    version=api_settings.version,
    description=api_settings.description,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Executed in reverse order of registration; CORS wraps everything
if not is_development():
    app.add_middleware(
        ApiKeyMiddleware,
        api_key=api_settings.api_key,
        header_name=api_settings.api_key_header,
    )
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=api_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api/v1")
app.include_router(officers_router, prefix="/api/v1")
app.include_router(cases_router, prefix="/api/v1")
app.include_router(evidence_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": api_settings.title,
        "version": api_settings.version,
        "status": "operational",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check with database status."""
    database_ok = await test_connection()
    return {
        "status": "healthy" if database_ok else "degraded",
        "environment": get_environment(),
        "database": {"status": "connected" if database_ok else "error"},
    }


@app.get("/ready")
async def readiness_check():
    """Readiness check. 200 only when the application can serve traffic."""
    if not getattr(app.state, "ready", False):
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "message": "Application is not ready"},
        )

    if not await test_connection():
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "message": "Database not connected"},
        )

    return {"status": "ready"}


@app.get("/live")
async def liveness_check():
    """Liveness check. 200 if the process is alive, even if not ready."""
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=api_settings.host,
        port=api_settings.port,
        reload=is_development(),
    )
