# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
PR Reviewer Service
===================
Tracks teams, users and pull requests, and assigns code reviewers
automatically.

PR lifecycle:
    OPEN ─► MERGED  (terminal; merging again is a no-op)

While OPEN, any single reviewer can be swapped for another active member
of that reviewer's team.

Port: 8080
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reviewer_service.controllers import (
    pr_controller,
    stats_controller,
    system_controller,
    team_controller,
    user_controller,
)
from reviewer_service.core.config import settings
from reviewer_service.core.database import engine
from reviewer_service.core.logging import get_logger
from reviewer_service.middleware import MetricsMiddleware, RequestIDMiddleware
from reviewer_service.models.errors import DomainError, ErrorCode
from reviewer_service.repositories.tables import create_schema
from reviewer_service.schemas import ErrorBody, ErrorResponse

logger = get_logger(settings.SERVICE_NAME)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.CREATE_SCHEMA:
        try:
            create_schema(engine)
            logger.info("Database schema ensured")
        except Exception:
            logger.warning("Could not create schema, DB may not be ready yet", exc_info=True)
    logger.info("%s v%s starting", settings.SERVICE_NAME, settings.SERVICE_VERSION)
    yield
    engine.dispose()
    logger.info("Shutting down, connection pool disposed")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="PR Reviewer Service",
    description="Assigns and reassigns pull request reviewers within teams.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    return _error(exc.http_status, exc.code.value, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{location}: {first.get('msg', 'invalid request')}" if location else "invalid request"
    return _error(400, ErrorCode.BAD_REQUEST.value, message)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, "request_id", None)
    logger.error("Unhandled exception path=%s", request.url.path, exc_info=exc,
                 extra={"request_id": request_id} if request_id else None)
    return _error(500, "INTERNAL_ERROR", "internal server error")


app.include_router(system_controller.router)
app.include_router(team_controller.router)
app.include_router(user_controller.router)
app.include_router(pr_controller.router)
app.include_router(stats_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
