import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.admin.features.login.router import router as login_router
from src.admin.gate import AccessGate, AccessGateMiddleware
from src.admin.strategies import build_auth_strategy
from src.config.errors import ConfigurationError
from src.config.logging import setup_logging
from src.config.settings import AuthStrategyName, Settings, get_settings
from src.pages.router import login_page_router
from src.pages.router import router as pages_router
from src.routers.healthz.router import router as healthz_router
from src.rsvps.repository import RecordStore, build_record_store
from src.rsvps.routers import router as rsvps_router

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"ok": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected invalid payload on {request.url.path}: {exc.errors()}")
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid submission")

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration error on {request.url.path}: {exc}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server configuration error")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(settings: Settings | None = None, record_store: RecordStore | None = None) -> FastAPI:
    """Build the application around one immutable Settings instance."""
    settings = settings or get_settings()
    setup_logging(settings)

    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
            integrations=[
                StarletteIntegration(transaction_style="endpoint"),
                FastApiIntegration(transaction_style="endpoint"),
            ],
            send_default_pii=False,
        )

    strategy = build_auth_strategy(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Starting RSVP API: auth={settings.admin_auth_strategy.value} "
            f"storage={settings.storage_backend.value}"
        )
        missing = strategy.missing_setting()
        if missing:
            logger.warning(f"{missing} is not configured, admin routes will answer 500")
        if not settings.get_invite_codes():
            logger.warning("No invite codes configured, every submission will be rejected")
        yield

    app = FastAPI(
        title="Event RSVP API",
        description="API for collecting event RSVPs and reviewing them as an admin",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.record_store = record_store or build_record_store(settings)

    # Middleware added last runs first: the gate sits inside CORS
    app.add_middleware(AccessGateMiddleware, gate=AccessGate(strategy))  # type: ignore[arg-type]
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
    app.include_router(rsvps_router, tags=["RSVPs"])
    if settings.admin_auth_strategy == AuthStrategyName.COOKIE:
        app.include_router(login_router, tags=["Admin"])
        app.include_router(login_page_router)
    app.include_router(pages_router)

    return app


app = create_app()
