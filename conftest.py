# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Shared fixtures: in-memory SQLite engine and a deterministic picker."""
import os

# Must be set before reviewer_service.core.database builds its engine.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "CRITICAL")

import pytest

from reviewer_service.core.database import engine
from reviewer_service.repositories.tables import metadata


class SortedPicker:
    """Always picks the first candidates in sorted order."""

    def pick_reviewers(self, candidates, max_count=2):
        return sorted(candidates)[:max_count]

    def pick_replacement(self, candidates):
        pool = sorted(candidates)
        return pool[0] if pool else None


@pytest.fixture
def db_engine():
    """Fresh schema on the shared in-memory engine."""
    metadata.drop_all(engine)
    metadata.create_all(engine)
    yield engine
    metadata.drop_all(engine)


@pytest.fixture
def sorted_picker():
    return SortedPicker()
