"""Application entrypoint for the Photogram API.

This module wires together the FastAPI application with its lifespan hooks,
logging, database metadata and CORS configuration. It is the root that other
modules depend on when the API process starts.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import auth_router, post_router, user_router
from app.core.config import settings
from app.core.logging import setup_logging
from app.db import models  # noqa: F401
from app.db.base import Base
from app.db.session import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging, create tables on startup and dispose the engine on shutdown.

    Dependencies:
    - Uses the async SQLAlchemy engine from `app.db.session` to ensure the
      metadata defined in `app.db.base.Base` (and the imported models) exists.
    """

    setup_logging(settings.LOG_LEVEL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s %s started", settings.PROJECT_NAME, settings.PROJECT_VERSION)
    yield
    await engine.dispose()
    logger.info("%s shut down", settings.PROJECT_NAME)


def create_application() -> FastAPI:
    """Assemble and configure the FastAPI application instance.

    - Injects the lifespan manager defined above to manage startup/shutdown.
    - Applies CORS settings sourced from environment-driven `settings`; the
      OTP token travels in a cookie, so credentials are allowed.
    - Registers the auth, user and post routers.
    """

    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(auth_router)
    application.include_router(user_router)
    application.include_router(post_router)

    @application.get("/")
    async def healthcheck():
        """Lightweight health endpoint used by uptime monitors."""
        return {"message": f"{settings.PROJECT_NAME} is running!"}

    return application


app = create_application()
