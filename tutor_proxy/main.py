from contextlib import asynccontextmanager
from typing import Any, Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tutor_proxy.api.dependencies import get_settings_dependency
from tutor_proxy.api.schemas import ErrorResponse, HealthResponse
from tutor_proxy.api.routes import router
from tutor_proxy.core.config import Settings, get_settings
from tutor_proxy.core.exceptions import RequestValidationFailed, UpstreamError

import logging

# Basic console logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-7s  %(name)-20s │ %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

FRIENDLY_UPSTREAM_ERROR = (
    "Sorry, I couldn't generate a response right now. Please try again."
)
NOT_FOUND_HINT = "Use POST /ask with JSON {\"question\": \"...\", \"mode\": \"exam\" | \"tldr\"}."


def _error(status_code: int, message: str, hint: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message, hint=hint).model_dump(exclude_none=True),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    settings = get_settings()

    logger.info(
        "Starting | env=%s | model=%s | api_key=%s | origins=%s",
        settings.ENVIRONMENT,
        settings.OPENAI_MODEL.value,
        "set" if settings.has_api_key else "missing",
        ",".join(settings.ALLOWED_ORIGINS),
    )
    if not settings.has_api_key:
        logger.warning("OPENAI_API_KEY is not set; /ask will fail until it is")

    try:
        yield
    finally:
        logger.info("Shutting down")


# Create app with conditional docs
settings = get_settings()

app = FastAPI(
    title="Tutor Proxy API",
    description="Plain-text tutoring answers from an upstream chat model",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def reject_unknown_origins(request: Request, call_next):
    # Browsers always send Origin on cross-origin calls; other clients may omit it
    origin = request.headers.get("origin")
    if origin and origin not in settings.ALLOWED_ORIGINS:
        logger.warning("Rejected request from origin %s", origin)
        return _error(status.HTTP_403_FORBIDDEN, "Origin not allowed")
    return await call_next(request)


app.include_router(router)


@app.exception_handler(RequestValidationFailed)
async def validation_exception_handler(request: Request, exc: RequestValidationFailed):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return _error(status.HTTP_400_BAD_REQUEST, exc.message)


@app.exception_handler(UpstreamError)
async def upstream_exception_handler(request: Request, exc: UpstreamError):
    logger.error("Upstream failure on %s: %s", request.url.path, exc,
                 exc_info=exc.original_error)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, FRIENDLY_UPSTREAM_ERROR)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error(exc.status_code, "Not found", hint=NOT_FOUND_HINT)
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "client_ip": request.client.host if request.client else "unknown",
        }
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@app.get("/", include_in_schema=False, response_class=PlainTextResponse)
async def root():
    return "tutor proxy is healthy"


@app.get("/healthz", response_model=HealthResponse)
async def healthz(
    app_settings: Annotated[Settings, Depends(get_settings_dependency)],
):
    configured = app_settings.has_api_key
    return JSONResponse(
        status_code=status.HTTP_200_OK if configured else status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=HealthResponse(ok=configured, openai_key_configured=configured).model_dump(),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
