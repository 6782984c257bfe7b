"""StayHub – booking marketplace API (FastAPI application)."""
# Load .env before any app code that might read config
from dotenv import load_dotenv
from pathlib import Path
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.config import Settings, get_settings
from app.database import Database
from app.errors import register_exception_handlers
from app.logging_config import configure_logging
from app.routers import listings, reservations, users

log = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    database = database or Database(settings.database_url, echo=settings.debug)

    app = FastAPI(title=settings.app_name, debug=settings.debug)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(listings.router)
    app.include_router(reservations.router)

    @app.on_event("startup")
    def startup():
        if settings.uses_insecure_secret:
            log.warning("JWT_SECRET_KEY is not set; session tokens are signed with an insecure default secret")
        try:
            database.create_all()
            log.info("Database ready")
        except SQLAlchemyError as e:
            log.warning("Database startup failed (tables not created). Check DATABASE_URL and network. Error: %s", e)

    @app.on_event("shutdown")
    def shutdown():
        database.dispose()

    @app.get("/")
    def root():
        return {"app": settings.app_name, "status": "ok"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app
