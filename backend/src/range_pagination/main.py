from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from range_pagination.db.session import shutdown
from range_pagination.dependencies import DB
from range_pagination.exceptions import DomainError, PaginationError
from range_pagination.logging import get_logger
from range_pagination.middleware import RequestIDMiddleware
from range_pagination.routers.event import router as event_router
from range_pagination.schemas.error import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close database connections on shutdown."""
    yield
    await shutdown()


app = FastAPI(lifespan=lifespan)
app.add_middleware(RequestIDMiddleware)
app.include_router(event_router)


@app.exception_handler(PaginationError)
async def pagination_error_handler(request: Request, exc: PaginationError) -> JSONResponse:
    """Ranges rejected outside the pagination service (e.g. while parsing)."""
    logger.info("range_rejected", code=exc.code, reason=exc.message, path=request.url.path)
    return JSONResponse(
        status_code=int(exc.status_code),
        content=ErrorResponse.of(exc.code, exc.message),
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Return 400 for generic domain-level violations."""
    logger.warning("domain_error", error=exc.message, path=request.url.path)
    return JSONResponse(status_code=400, content=ErrorResponse.of("domain_error", exc.message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and return a generic 500; details stay out of the response."""
    logger.exception("unhandled_exception", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse.of("internal_error", "Internal server error"),
    )


@app.get("/health")
async def health(db: DB) -> dict[str, str]:
    """Health check endpoint: returns 200 only if the database answers a ping."""
    await db.execute(text("SELECT 1"))
    return {"status": "ok"}
