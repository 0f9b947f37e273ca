"""
Focus Journey

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.deps import get_composer
from src.api.middleware.request_id import RequestIdMiddleware
from src.api.v1 import router as api_v1_router
from src.config import get_settings
from src.engines.journey import InvalidLevel
from src.logging_config import configure_logging, get_logger
from src.schemas.common import ErrorItem, ErrorResponse, HealthResponse

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Configures logging and builds the journey engine before serving.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    composer = get_composer()
    logger.info(
        "Journey engine ready",
        extra={"realms": len(composer.catalog), "max_level": composer.max_level},
    )

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.project_name,
    description="""
    Focus Journey

    Progression and activity scheduling for a gamified focus-training program.

    ## Features

    - **Realms**: 10 themed realms of 25 levels each
    - **XP Curve**: 8% exponential growth per level
    - **Activity Plans**: deterministic required challenges and bonus exercises per level
    - **Mastery Tests**: gated checkpoints every 10th level

    ## Invariants

    1. Determinism: the same level always yields the same plan
    2. Statelessness: nothing is persisted; progress is owned by the caller
    3. Single source of truth: a test is built from its own level's required activities
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# LAST added = OUTERMOST; CORS wraps everything so error responses carry its headers.
app.add_middleware(RequestIdMiddleware, slow_request_ms=settings.slow_request_ms)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def _request_headers(request: Request) -> dict:
    req_id = getattr(request.state, "request_id", None)
    return {"X-Request-ID": req_id} if req_id else {}


def _validation_error(request: Request, errors: List[ErrorItem]) -> JSONResponse:
    body = ErrorResponse(
        detail="Validation error",
        errors=errors,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=body.model_dump(exclude_none=True),
        headers=_request_headers(request),
    )


@app.exception_handler(InvalidLevel)
async def invalid_level_handler(request: Request, exc: InvalidLevel):
    """A level argument below 1 is a caller bug; report it like a validation error."""
    logger.warning(
        "Invalid level",
        extra={"path": request.url.path, "argument": exc.argument, "value": repr(exc.value)},
    )
    error = ErrorItem(field=exc.argument, message=str(exc), type="invalid_level")
    return _validation_error(request, [error])


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Attach the request id to 4xx/5xx responses."""
    req_id = getattr(request.state, "request_id", None)
    content = {"detail": exc.detail}
    if req_id and exc.status_code >= 500:
        content["request_id"] = req_id
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=_request_headers(request),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
):
    """Handle request validation errors."""
    errors = [
        ErrorItem(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            type=error["type"],
        )
        for error in exc.errors()
    ]
    return _validation_error(request, errors)


@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception,
):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception: %s", exc)
    req_id = getattr(request.state, "request_id", None)
    if settings.debug:
        content = {
            "detail": str(exc),
            "type": type(exc).__name__,
            "request_id": req_id,
        }
    else:
        content = {"detail": "Internal server error", "request_id": req_id}
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
        headers=_request_headers(request),
    )


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    composer = get_composer()
    return HealthResponse(
        status="ok",
        version=settings.version,
        realms=len(composer.catalog),
        max_level=composer.max_level,
    )


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": {
            "v1": settings.api_v1_prefix,
        },
    }


app.include_router(
    api_v1_router,
    prefix=settings.api_v1_prefix,
)


# Main entry point for development
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
