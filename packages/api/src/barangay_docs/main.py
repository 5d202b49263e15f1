# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from db.database import db_service
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .admin import setup_admin
from .core.config import settings
from .middleware.auth import log_auth_mode
from .routes import document_requests, health, public
from .schemas.error import ErrorResponse
from .services.errors import (
    ConcurrentModificationError,
    DocumentRequestError,
    InfrastructureError,
    InvalidTransitionError,
    NotFoundError,
    UnknownDocumentTypeError,
    ValidationError,
)
from .services.residents import log_registry_status

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    log_auth_mode()
    log_registry_status()
    yield
    await db_service.close()


app = FastAPI(
    title="Barangay Document Requests API",
    description="Document request processing for barangay clearances, certificates and permits",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)

_HTTP_STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}

_DOMAIN_ERROR_STATUS: dict[type[DocumentRequestError], int] = {
    ValidationError: 422,
    UnknownDocumentTypeError: 422,
    InvalidTransitionError: 409,
    NotFoundError: 404,
    ConcurrentModificationError: 409,
}


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id", str(uuid.uuid4()))


def _build_error(
    status_code: int, detail: str, request: Request, request_id: str | None = None, **extra
) -> ErrorResponse:
    return ErrorResponse(
        type="about:blank",
        title=_HTTP_STATUS_TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        request_id=request_id or _request_id(request),
        instance=request.url.path,
        **extra,
    )


def _problem(body: ErrorResponse, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=body.status,
        content=body.model_dump(exclude_none=True),
        media_type="application/problem+json",
        headers=headers,
    )


@app.exception_handler(DocumentRequestError)
async def domain_exception_handler(request: Request, exc: DocumentRequestError):
    """Map business-rule failures to RFC 7807 Problem Details."""
    status_code = next(
        (code for cls, code in _DOMAIN_ERROR_STATUS.items() if isinstance(exc, cls)),
        400,
    )
    extra = {}
    if isinstance(exc, ValidationError):
        extra["field"] = exc.field
    if isinstance(exc, InvalidTransitionError):
        extra["current_status"] = exc.current_status.value
    return _problem(_build_error(status_code, str(exc), request, **extra))


@app.exception_handler(InfrastructureError)
async def infrastructure_exception_handler(request: Request, exc: InfrastructureError):
    """Storage or registry outage -- the caller may retry later."""
    logger.error("Infrastructure failure on %s: %s", request.url.path, exc)
    return _problem(_build_error(503, str(exc), request), headers={"Retry-After": "30"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    return _problem(
        _build_error(exc.status_code, str(exc.detail), request),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    return _problem(_build_error(422, str(exc.errors()), request))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    request_id = _request_id(request)
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    return _problem(_build_error(500, "An unexpected error occurred.", request, request_id))


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(public.router, prefix="/api/public", tags=["public"])
app.include_router(
    document_requests.router, prefix="/api/document-requests", tags=["document-requests"]
)

# Read-only SQLAdmin views at /admin
setup_admin(app)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": f"Welcome to {settings.APP_NAME}"}
