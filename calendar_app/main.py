import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from dotenv import load_dotenv  # load .env variables

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from calendar_app.database import Database
from calendar_app.exceptions import CalendarError, InternalError, ValidationError
from calendar_app.routes import events_router, health_router
from calendar_app.validation import violations_from_errors

# ----- Load environment variables -----
load_dotenv()

# ----- Logging -----
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger("calendar_app")


def _expose_internal_errors() -> bool:
    return os.getenv("ENVIRONMENT", "production").strip().lower() == "development"


def _relative_errors(errors: list[dict]) -> list[dict]:
    # ("body", "title") -> ("title",); ("path", "month") -> ("month",)
    return [{**err, "loc": tuple(err.get("loc", ()))[1:]} for err in errors]


def _error_response(exc: CalendarError) -> JSONResponse:
    body = exc.to_dict()
    if isinstance(exc, InternalError) and _expose_internal_errors():
        body["message"] = exc.message
    return JSONResponse(status_code=exc.status_code, content=body)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    database: Database = app.state.database
    await database.init_models()
    logger.info("Calendar API started")
    try:
        yield
    finally:
        await database.dispose()


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the API around an explicitly owned ``Database``.

    When no database is given one is resolved from the environment.
    """

    app = FastAPI(
        lifespan=_lifespan,
        title="Personal Calendar",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.database = database or Database.from_env()

    # ----- CORS (enabled only if ALLOWED_ORIGINS is set) -----
    raw_origins = os.getenv("ALLOWED_ORIGINS", "").strip()
    if raw_origins:
        allowed_origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
            max_age=86400,
        )

    # ----- Request logging -----
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    # ----- Error translation -----
    @app.exception_handler(CalendarError)
    async def handle_calendar_error(request: Request, exc: CalendarError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        violations = violations_from_errors(_relative_errors(jsonable_encoder(exc.errors())))
        return _error_response(ValidationError(violations))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(InternalError(str(exc)))

    # ----- Include routers -----
    app.include_router(events_router)
    app.include_router(health_router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "calendar_app.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3001")),
    )
