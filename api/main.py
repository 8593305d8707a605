"""FastAPI application for the Tee Times booking API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import Settings, load_settings
from database.connection import db
from database.db_manager import DatabaseManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the pool, create the schema and start the live feeds; undo on shutdown."""
    settings: Settings = app.state.settings
    await db.initialize(dsn=settings.database_url)
    manager = None
    try:
        await db.initialize_schema()
        manager = DatabaseManager(db.pool, settings.app_id)
        await manager.live.start()
        app.state.db_manager = manager
        logger.info("Tee Times API ready for app '%s'", settings.app_id)
        yield
    finally:
        if manager is not None:
            await manager.live.stop()
        await db.close()


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="Tee Times API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import courses, live, session, tee_times
    app.include_router(session.router, prefix="/api/session", tags=["session"])
    app.include_router(tee_times.router, prefix="/api/tee-times", tags=["tee-times"])
    app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
    app.include_router(live.router, prefix="/api/live", tags=["live"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


def run() -> None:
    """Serve the API with uvicorn. Fails fast when configuration is missing."""
    import os
    import uvicorn

    uvicorn.run(
        create_app(),
        host=os.environ.get("HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "8000")),
    )
