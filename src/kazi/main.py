"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Settings are read once here and turned into the two shared
handles the rest of the app needs, both kept on app.state:

- app.state.engine / session_factory → the document store
- app.state.token_issuer             → signs and verifies bearer tokens

Lifespan manages startup/shutdown (table creation, engine disposal).
Middleware, CORS, error handlers and routers are all registered here.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from kazi import __version__
from kazi.api import api_router
from kazi.auth.jwt import TokenIssuer
from kazi.config import Settings, load_settings
from kazi.db.engine import create_engine_for, create_session_factory, create_tables, ping
from kazi.errors import KaziError, ServerError
from kazi.logging_config import configure_logging
from kazi.middleware import RequestContextMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown.
    """
    settings: Settings = app.state.settings
    logger.info(
        "kazi.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    if settings.create_tables:
        await create_tables(app.state.engine)
        logger.info("kazi.tables_ready")

    yield

    logger.info("kazi.shutdown")
    await app.state.engine.dispose()


# ─── Error handlers ─────────────────────────────────────


async def kazi_error_handler(request: Request, exc: KaziError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("http.error", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Turn FastAPI's 422 into the same 400 shape services use."""
    errors = exc.errors()
    fields = [
        str(err["loc"][-1])
        for err in errors
        if err.get("loc") and err["loc"][0] == "body" and len(err["loc"]) > 1
    ]
    if fields:
        message = f"Missing or invalid fields: {', '.join(dict.fromkeys(fields))}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "error": message})


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("http.store_error", path=request.url.path)
    return JSONResponse(status_code=500, content=ServerError().to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("http.unhandled_error", path=request.url.path)
    return JSONResponse(status_code=500, content=ServerError().to_dict())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application.

    Raises pydantic.ValidationError when settings are not passed in and
    KAZI_JWT_SECRET is missing from the environment.
    """
    settings = settings or load_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Kazi API",
        description="Job marketplace: employee/employer accounts, job postings, applications",
        version=__version__,
        lifespan=lifespan,
    )

    engine = create_engine_for(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_issuer = TokenIssuer(settings.jwt_secret, settings.jwt_algorithm)

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration:
    # RequestContext → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(KaziError, kazi_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root(request: Request):
        try:
            await ping(request.app.state.engine)
            database = "Connected"
        except (SQLAlchemyError, OSError):
            database = "Disconnected"
        return {
            "success": True,
            "message": "Kazi API is running",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": database,
        }

    return app
