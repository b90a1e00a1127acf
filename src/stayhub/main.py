from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from stayhub import background
from stayhub.config import settings
from stayhub.db.session import shutdown
from stayhub.dependencies import DB
from stayhub.exceptions import (
    ApprovalPendingError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    UpstreamUnavailableError,
    ValidationFailedError,
)
from stayhub.logging import get_logger
from stayhub.middleware import RequestIDMiddleware
from stayhub.routers import admin, ai, auth, bookings, chat, hotels, reviews, rooms
from stayhub.schemas.error import ErrorDetail, ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: nothing to warm up. Shutdown: finish best-effort tasks, then close the pool."""
    yield
    await background.drain()
    await shutdown()


app = FastAPI(title="StayHub", lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (auth, hotels, rooms, bookings, reviews, chat, ai, admin):
    app.include_router(module.router)


def _error_json(code: str, message: str, errors: list[str] | None = None) -> dict[str, object]:
    """Build the standard error envelope as a dict for JSONResponse."""
    detail = ErrorDetail(code=code, message=message, errors=errors)
    return ErrorResponse(error=detail).model_dump(exclude_none=True)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Return 404 with the entity details."""
    return JSONResponse(status_code=404, content=_error_json("not_found", exc.message))


@app.exception_handler(AuthenticationError)
async def authentication_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content=_error_json("not_authenticated", exc.message),
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(ApprovalPendingError)
async def approval_pending_handler(request: Request, exc: ApprovalPendingError) -> JSONResponse:
    return JSONResponse(status_code=403, content=_error_json("approval_pending", exc.message))


@app.exception_handler(NotAuthorizedError)
async def not_authorized_handler(request: Request, exc: NotAuthorizedError) -> JSONResponse:
    logger.info("not_authorized", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=403, content=_error_json("not_authorized", exc.message))


@app.exception_handler(ValidationFailedError)
async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    """Return 422 listing every violated rule."""
    return JSONResponse(
        status_code=422,
        content=_error_json("validation_failed", exc.message, exc.errors),
    )


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    logger.info("conflict", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=409, content=_error_json("conflict", exc.message))


@app.exception_handler(UpstreamUnavailableError)
async def upstream_handler(request: Request, exc: UpstreamUnavailableError) -> JSONResponse:
    logger.warning("upstream_unavailable", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=502, content=_error_json("upstream_unavailable", exc.message))


@app.exception_handler(BadRequestError)
async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_json("bad_request", exc.message))


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return 400 for domain violations without a more specific handler."""
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=_error_json("domain_error", exc.message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unhandled exceptions and return a safe error response.

    - Logs full exception with traceback (includes request_id from context)
    - Returns generic error to client (no stack traces leaked)
    """
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=_error_json("internal_error", "Internal server error"),
    )


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Verify database connectivity. Returns 200 only if the database answers."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
