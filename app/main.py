"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory
from app.core.exceptions import AuthError, ExpenseTrackerError, StoreError
from app.models import Base
from app.schemas.message import MessageResponse

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"
MISSING_ERROR_TYPES = frozenset({"missing", "string_too_short"})


def _message(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
        headers=headers,
    )


async def handle_app_error(request: Request, exc: ExpenseTrackerError) -> JSONResponse:
    if isinstance(exc, StoreError):
        return _message(exc.status_code, SERVER_ERROR_MESSAGE)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return _message(exc.status_code, exc.message, headers)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    missing: set[str] = set()
    invalid: set[str] = set()
    for err in exc.errors():
        if not err.get("loc"):
            continue
        field = str(err["loc"][-1])
        # min_length=1 marks a required string, so "" counts as missing
        if err.get("type") in MISSING_ERROR_TYPES:
            missing.add(field)
        else:
            invalid.add(field)
    if missing or not invalid:
        message = "Please provide all required fields"
        if missing:
            message = f"{message}: {', '.join(sorted(missing))}"
    else:
        message = f"Invalid value for: {', '.join(sorted(invalid))}"
    return _message(status.HTTP_400_BAD_REQUEST, message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _message(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"method": request.method, "path": request.url.path},
    )
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR_MESSAGE)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with its own engine and session factory."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Expense Tracker API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = build_engine(settings)
    if settings.CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ExpenseTrackerError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Expense Tracker API"}

    return app
