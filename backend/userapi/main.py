"""User API — FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - The UserStore is chosen once at startup and held on app.state.store;
      routes receive it through dependencies, never through module globals
    - Every request passes authenticate(): a bearer token, when present, must be valid
    - Global error handlers map UserApiError → {"Error"} / {"FieldErrors"} JSON bodies

Design Decisions:
    - create_app(store=...) lets tests inject an InMemoryUserStore without a lifespan run
    - Lifespan owns the database manager: opened on startup, disposed on shutdown
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from userapi.api.deps import authenticate
from userapi.api.error_handlers import register_error_handlers
from userapi.api.routes import authentication, status, users
from userapi.config import Settings, get_settings
from userapi.core.repository_protocols import UserStore
from userapi.infrastructure.database import DatabaseSessionManager
from userapi.infrastructure.memory_store import InMemoryUserStore
from userapi.infrastructure.observability import (
    RequestLoggingMiddleware, setup_logging,
)
from userapi.infrastructure.sql_store import SqlUserStore
from userapi.infrastructure.tokens import TokenIssuer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    db: DatabaseSessionManager | None = None
    if app.state.store is None:
        if settings.store_backend == "memory":
            app.state.store = InMemoryUserStore()
        else:
            db = DatabaseSessionManager.from_url(
                settings.database_url,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
            )
            if settings.database_auto_migrate:
                await db.create_all()
            app.state.db = db
            app.state.store = SqlUserStore(db)
    logger.info(
        f"User API started ({type(app.state.store).__name__})",
    )
    yield
    if db is not None:
        await db.dispose()
    logger.info("User API shutting down")


def create_app(
    store: UserStore | None = None, settings: Settings | None = None,
) -> FastAPI:
    """Build the application; a given store skips startup store selection."""
    settings = settings or get_settings()

    app = FastAPI(
        title="User API", version="1.0.0", lifespan=lifespan,
        dependencies=[Depends(authenticate)],
    )
    app.state.settings = settings
    app.state.store = store
    app.state.db = None
    app.state.token_issuer = TokenIssuer(
        secret_key=settings.jwt_secret_key,
        base_url=settings.base_url,
        algorithm=settings.jwt_algorithm,
        ttl=settings.access_token_ttl,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(status.router)
    app.include_router(users.router)
    app.include_router(authentication.router)

    register_error_handlers(app)
    return app


app = create_app()
