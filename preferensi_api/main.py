# preferensi_api/main.py
from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from preferensi_api.core.auth import require_auth
from preferensi_api.core.config import Settings, get_settings
from preferensi_api.database import build_engine, create_db_and_tables
from preferensi_api.repositories.preferensi_repo import PreferensiRepository
from preferensi_api.repositories.user_repo import UserRepository
from preferensi_api.services.preferensi_service import PreferensiService
from preferensi_api.services.user_service import UserService

# Routers
from preferensi_api.routers.users import router as users_router
from preferensi_api.routers.preferensi import router as preferensi_router

logger = logging.getLogger("uvicorn")

WELCOME = "Welcome 🙌 "


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application and its collaborators.

    The engine, settings and services are created once here and kept on
    `app.state`; routes reach them only through dependencies.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    engine = build_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        Startup:
          - Verify DB connectivity and create the documents table.

        Shutdown:
          - Dispose the engine's connection pool.
        """
        logger.info("🔄 Startup: Connecting to document store...")
        try:
            create_db_and_tables(engine)
            logger.info("✅ Startup: DB connection OK, tables verified.")
        except Exception as e:
            logger.error(f"❌ Startup: DB connection FAILED: {e}")
            raise
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.user_service = UserService(UserRepository(), settings)
    app.state.preferensi_service = PreferensiService(PreferensiRepository())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(users_router)
    app.include_router(preferensi_router)

    @app.get("/welcome", response_class=PlainTextResponse, dependencies=[Depends(require_auth)])
    def welcome():
        """Greeting for authenticated callers."""
        return WELCOME

    @app.get("/", response_class=PlainTextResponse)
    def root():
        """Health check endpoint."""
        return WELCOME

    return app


def run() -> None:
    """Serve the app with uvicorn on HOST:PORT from settings."""
    settings = get_settings()
    uvicorn.run(
        "preferensi_api.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
    )
