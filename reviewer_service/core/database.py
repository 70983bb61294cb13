# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""SQLAlchemy engine singleton."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from reviewer_service.core.config import settings


def build_engine(url: str) -> Engine:
    """Create a pooled engine; in-memory SQLite gets one shared connection."""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    connect_args = {}
    if settings.STATEMENT_TIMEOUT_MS > 0:
        connect_args["options"] = f"-c statement_timeout={settings.STATEMENT_TIMEOUT_MS}"
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.POOL_SIZE,
        max_overflow=settings.MAX_OVERFLOW,
        pool_recycle=settings.POOL_RECYCLE,
        connect_args=connect_args,
    )


engine = build_engine(settings.DATABASE_URL)
