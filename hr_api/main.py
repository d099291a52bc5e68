"""HR System API: FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from hr_api.announcements.router import router as announcements_router
from hr_api.auth.router import router as auth_router
from hr_api.benefits.router import router as benefits_router
from hr_api.common.exceptions import register_exception_handlers
from hr_api.common.rate_limit import limiter
from hr_api.common.security import SecurityHeadersMiddleware
from hr_api.config import settings
from hr_api.core_hr.router import (
    companies_router,
    departments_router,
    employees_router,
)
from hr_api.database import engine
from hr_api.documents.router import router as documents_router
from hr_api.expenses.router import router as expenses_router
from hr_api.goals.router import router as goals_router
from hr_api.performance.router import router as performance_router
from hr_api.policies.router import router as policies_router
from hr_api.projects.router import router as projects_router
from hr_api.skills.router import employee_skills_router, skills_router
from hr_api.time_tracking.router import router as time_tracking_router
from hr_api.training.router import router as training_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# (mount path under /api/v1, router)
ROUTERS = [
    ("auth", auth_router),
    ("companies", companies_router),
    ("departments", departments_router),
    ("employees", employees_router),
    ("benefits", benefits_router),
    ("performance", performance_router),
    ("goals", goals_router),
    ("time-tracking", time_tracking_router),
    ("expenses", expenses_router),
    ("training", training_router),
    ("skills", skills_router),
    ("employee-skills", employee_skills_router),
    ("projects", projects_router),
    ("documents", documents_router),
    ("policies", policies_router),
    ("announcements", announcements_router),
]


def configure_logging() -> None:
    """Configure root logging at ``settings.LOG_LEVEL``."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    logger.info(
        "Starting %s %s (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT,
    )
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


def _root_info() -> dict:
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": "Human resources management REST API",
        "documentation": "/api/docs",
        "status": "running",
        "endpoints": {
            path.replace("-", "_"): f"{API_PREFIX}/{path}" for path, _ in ROUTERS
        },
    }


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description="HR management: core HR, performance, time, expenses and more",
        version=settings.APP_VERSION,
        docs_url=None if settings.is_production else "/api/docs",
        redoc_url=None if settings.is_production else "/api/redoc",
        lifespan=lifespan,
    )

    # Exception handlers (RFC 7807)
    register_exception_handlers(app)

    # Rate limiting (slowapi): default windows on every route
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(SecurityHeadersMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )

    # Root info and health check (no auth)
    @app.get("/", tags=["system"])
    async def root():
        return _root_info()

    @app.get(API_PREFIX, tags=["system"])
    async def api_root():
        return _root_info()

    @app.get(f"{API_PREFIX}/health", tags=["system"])
    async def health_check():
        return {
            "status": "healthy",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    # Register routers
    for path, router in ROUTERS:
        app.include_router(router, prefix=f"{API_PREFIX}/{path}")

    return app


app = create_app()
