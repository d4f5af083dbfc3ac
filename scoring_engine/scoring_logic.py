from dataclasses import asdict, dataclass
from typing import Iterable, Optional, Sequence

from application_service.models import ApplicationStatus


# ----------------------------
# Weights
# ----------------------------

ENGAGEMENT_PER_EVENT = 5.0

# Bonus for the application's *current* status (statuses do not stack).
# Every ApplicationStatus must have an entry; see the check below.
STATUS_BONUS: dict[ApplicationStatus, float] = {
    ApplicationStatus.EXPLORING: 0.0,
    ApplicationStatus.APPLIED: 20.0,
    ApplicationStatus.ACCEPTED: 50.0,
    ApplicationStatus.REJECTED: 0.0,
    ApplicationStatus.WITHDRAWN: 0.0,
}

_unmapped = set(ApplicationStatus) - set(STATUS_BONUS)
if _unmapped:
    raise RuntimeError(f"STATUS_BONUS has no entry for: {sorted(s.value for s in _unmapped)}")

# Three shared tags already count as a perfect fit. Fixed on purpose:
# not derived from the size of either tag set.
FIT_FULL_MATCHES = 3

SCORE_MIN = 0.0
SCORE_MAX = 100.0


@dataclass(frozen=True)
class ScoreResult:
    engagement_score: float
    fit_score: float
    yield_risk_score: float

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


def clamp(value: float, lo: float = SCORE_MIN, hi: float = SCORE_MAX) -> float:
    return max(lo, min(hi, value))


# ----------------------------
# Components
# ----------------------------

def engagement_score(event_count: int, status: Optional[ApplicationStatus] = None) -> float:
    raw = ENGAGEMENT_PER_EVENT * event_count
    if status is not None:
        raw += STATUS_BONUS[ApplicationStatus(status)]
    return clamp(raw)


def fit_score(interests: Iterable[str], tags: Iterable[str]) -> float:
    # both sides are sets: repeated tags count once
    matches = len(set(interests or []) & set(tags or []))
    return min(SCORE_MAX, (matches / FIT_FULL_MATCHES) * 100.0)


def yield_risk_score(engagement: float, fit: float) -> float:
    return SCORE_MAX - min(SCORE_MAX, engagement * 0.5 + fit * 0.5)


# ----------------------------
# Engine
# ----------------------------

def compute_scores(profile, program, events: Sequence, application=None) -> Optional[ScoreResult]:
    """
    Pure scoring for one (student, program) pair.

    profile     -> anything with .interests (None = unknown student)
    program     -> anything with .tags (None = unknown program)
    events      -> events for exactly this pair
    application -> current application for the pair, or None

    Returns None when profile or program is missing: there is nothing to
    score, which is different from a zero score.
    """
    if profile is None or program is None:
        return None

    status = application.status if application is not None else None
    engagement = engagement_score(len(events), status)
    fit = fit_score(profile.interests, program.tags)

    return ScoreResult(
        engagement_score=engagement,
        fit_score=fit,
        yield_risk_score=yield_risk_score(engagement, fit),
    )
