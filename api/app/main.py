from __future__ import annotations

from dotenv import load_dotenv

# Settings and auth read the environment at import time
load_dotenv()

import logging  # noqa: E402
import os  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from pathlib import Path  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from . import settings  # noqa: E402
from .db import Database  # noqa: E402
from .errors import FanFlowError, fanflow_exception_handler  # noqa: E402
from .middleware import SecurityHeadersMiddleware  # noqa: E402
from .routers import (  # noqa: E402
    admin,
    auth,
    comments,
    likes,
    posts,
    profiles,
    system,
)

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def _alembic_config(database: Database) -> Config:
    base_dir = Path(__file__).resolve().parent.parent
    cfg = Config(str(base_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(base_dir / "alembic"))
    cfg.set_main_option("sqlalchemy.url", database.url.replace("%", "%%"))
    return cfg


def run_migrations(database: Database) -> None:
    logger.info("run_migrations: Starting...")
    try:
        command.upgrade(_alembic_config(database), "head")
        logger.info("run_migrations: Completed successfully.")
    except Exception as e:
        logger.error(f"run_migrations: Error occurred: {e}", exc_info=True)
        raise


def run_startup_tasks(database: Database) -> None:
    if settings.RUN_MIGRATIONS:
        run_migrations(database)
    else:
        logger.info("run_startup_tasks: RUN_MIGRATIONS disabled, skipping migrations.")
    logger.info("Startup tasks completed.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application...")
    # Server won't start until these complete
    run_startup_tasks(app.state.database)
    logger.info("FanFlow API server ready")
    yield
    logger.info("Shutting down application...")
    app.state.database.dispose()


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the FastAPI application around a storage handle.

    Without an explicit database the handle is built from DATABASE_URL / DB_*.
    """
    app = FastAPI(
        title="FanFlow API",
        version="1.0.0",
        description="Audio and video sharing for fans, creators and experts",
        lifespan=lifespan,
    )
    app.state.database = database or Database.from_env()

    # CORS Configuration - restrict to specific origins
    cors_origins_str = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    if cors_origins_str == "*":
        logger.warning(
            "CORS is configured to allow all origins. "
            "This is insecure for production. Set CORS_ORIGINS to specific domains."
        )
    cors_origins = [origin.strip() for origin in cors_origins_str.split(",")]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )
    app.add_middleware(SecurityHeadersMiddleware)

    app.add_exception_handler(FanFlowError, fanflow_exception_handler)

    app.include_router(system.router)
    app.include_router(auth.router)
    app.include_router(profiles.router)
    app.include_router(posts.router)
    app.include_router(comments.router)
    app.include_router(likes.router)
    app.include_router(admin.router)

    return app


app = create_app()
