# talent_engine/review_alignment.py
import math
from typing import Optional

from talent_core.schemas import PerformanceReview, ReviewAlignment

MANAGER_SCORE = {
    "excellence": 5,
    "exceeds": 4,
    "meets": 3,
    "occasionally_meets": 2,
    "not_performing": 1,
}

MANAGER_COMPLETE = {"completed"}
SELF_COMPLETE = {"submitted", "completed"}

MISALIGNMENT_GAP = 1


def manager_score(review: Optional[PerformanceReview]) -> Optional[int]:
    if not review or not review.manager_performance_summary:
        return None
    return MANAGER_SCORE.get(review.manager_performance_summary)


def self_score(review: Optional[PerformanceReview]) -> Optional[int]:
    """Mean of the three sub-scores, rounded half-up onto the 1..5 scale."""
    if not review:
        return None
    parts = (review.humble_score, review.hungry_score, review.smart_score)
    if any(p is None for p in parts):
        return None
    rounded = math.floor(sum(parts) / 3 + 0.5)
    return max(1, min(5, rounded))


def is_complete(review: Optional[PerformanceReview], done_states) -> bool:
    return bool(review) and review.status in done_states


def analyze(manager_review: Optional[PerformanceReview],
            self_review: Optional[PerformanceReview]) -> ReviewAlignment:
    manager_done = is_complete(manager_review, MANAGER_COMPLETE)
    self_done = is_complete(self_review, SELF_COMPLETE)
    m = manager_score(manager_review)
    s = self_score(self_review)

    # incomplete data never counts as a disagreement
    misaligned = (
        manager_done and self_done
        and m is not None and s is not None
        and abs(m - s) >= MISALIGNMENT_GAP
    )
    return ReviewAlignment(
        manager_score=m,
        self_score=s,
        pending_manager_review=not manager_done,
        pending_self_review=not self_done,
        misaligned=misaligned,
    )
