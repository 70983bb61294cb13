# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Reviewer selection. Pure computation, no I/O.

Candidates arrive already filtered (active only, author and current
reviewers removed). Selection is uniform over the candidate set.
"""

import random
from typing import Iterable, Optional, Protocol


class ReviewerPicker(Protocol):
    def pick_reviewers(self, candidates: Iterable[str], max_count: int = 2) -> list[str]:
        ...

    def pick_replacement(self, candidates: Iterable[str]) -> Optional[str]:
        ...


class RandomReviewerPicker:
    """Uniform random picker backed by a `random.Random` instance."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def pick_reviewers(self, candidates: Iterable[str], max_count: int = 2) -> list[str]:
        """Return min(max_count, len(candidates)) distinct ids; [] if none."""
        # sorted so a seeded rng gives reproducible picks
        pool = sorted(set(candidates))
        k = min(max(max_count, 0), len(pool))
        return self._rng.sample(pool, k)

    def pick_replacement(self, candidates: Iterable[str]) -> Optional[str]:
        pool = sorted(set(candidates))
        if not pool:
            return None
        return self._rng.choice(pool)
