"""
TNTT Parish Portal - FastAPI Application Entry Point.

Feature-based modular architecture:
  Each feature in tntt_portal/features/ has its own router, service and schemas.
  Pure computation (tallies, scoring, report tables) lives next to the service
  and never touches the store.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tntt_portal.config import get_settings

# ── Feature Routers ──────────────────────────────────────
from tntt_portal.features.classes.router import router as classes_router
from tntt_portal.features.reports.router import router as reports_router
from tntt_portal.features.school_years.router import router as school_years_router
from tntt_portal.features.students.router import router as students_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup & shutdown."""
    settings = get_settings()
    logger.info(f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} starting...")
    logger.info(f"🔗 Supabase: {settings.SUPABASE_URL[:40]}... (page size {settings.STORE_PAGE_SIZE})")
    yield
    logger.info("👋 Shutting down...")


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Cổng quản lý Xứ đoàn - thống kê sĩ số, điểm số và báo cáo",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Register Feature Routers ─────────────────────────
    app.include_router(classes_router, prefix="/api/classes", tags=["Classes"])
    app.include_router(students_router, prefix="/api/students", tags=["Students"])
    app.include_router(school_years_router, prefix="/api/school-years", tags=["School years"])
    app.include_router(reports_router, prefix="/api/reports", tags=["Reports"])

    # ── Health Check ─────────────────────────────────────
    @app.get("/health", tags=["System"])
    async def health_check():
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
        }

    return app


app = create_app()
