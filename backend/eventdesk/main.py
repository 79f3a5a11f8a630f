"""
Event Desk API - Main Application Entry Point

Record keeping for employees, events and the tickets employees sell:
- Caller-assigned keys with server-side validation on every write
- Referential checks before deletes (no cascading deletes)
- Optimistic concurrency on updates
- Structured logging with request correlation
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from eventdesk.core.config import get_settings
from eventdesk.core.logging import setup_logging, get_logger
from eventdesk.core.metrics import metrics_endpoint
from eventdesk.api.errors import register_exception_handlers
from eventdesk.api.router import api_router
from eventdesk.api.middleware import RequestLoggingMiddleware
from eventdesk.db.session import SessionLocal, dispose_engine, ensure_schema

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    await ensure_schema()

    yield

    await dispose_engine()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Employees, events and tickets with validated CRUD",
    debug=settings.DEBUG,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom middleware
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

# Routes
app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    try:
        async with SessionLocal() as session:
            await session.execute(text("SELECT 1"))
        database = "connected"
    except Exception as e:
        get_logger(__name__).error("health_database_unreachable", error=str(e))
        database = "unreachable"
    return {
        "status": "healthy" if database == "connected" else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "database": database,
    }


@app.get("/metrics", include_in_schema=False)
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
