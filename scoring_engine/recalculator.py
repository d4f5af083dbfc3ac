import logging
import random
import time
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from application_service.crud import get_application, list_events
from profile_service.crud import get_profile
from program_service.crud import get_program
from shared.config import Settings
from .crud import upsert_score
from .scoring_logic import ScoreResult, compute_scores

logger = logging.getLogger(__name__)


def recalculate_score(db: Session, student_id: int, program_id: Optional[int]) -> Optional[ScoreResult]:
    """
    Recompute and store the scores for one pair from current state.
    Returns None (and writes nothing) when the profile or program is unknown.
    Safe to call repeatedly: the stored row always equals the latest result.
    """
    if not program_id:
        return None

    profile = get_profile(db, student_id)
    program = get_program(db, program_id)
    events = list_events(db, student_id, program_id)
    application = get_application(db, student_id, program_id)

    result = compute_scores(profile, program, events, application)
    if result is None:
        return None

    upsert_score(db, student_id, program_id, result)
    return result


class ScoreRecalculator:
    """
    Runs recalculate_score outside of a request, in its own session.

    Scheduled as a background task by the ingestion routes. Store errors are
    retried with exponential backoff (the upsert is idempotent) and, once
    attempts run out, logged and dropped: the originating request has
    already succeeded.
    """

    def __init__(self, SessionLocal, settings: Settings, sleep: Callable[[float], None] = time.sleep):
        self._SessionLocal = SessionLocal
        self.max_attempts = max(1, settings.score_retry_attempts)
        self.base_delay = settings.score_retry_base_delay
        self._sleep = sleep

    def _backoff(self, attempt: int) -> float:
        return min(5.0, self.base_delay * (2 ** attempt)) + random.uniform(0, 0.05)

    def run(self, student_id: int, program_id: Optional[int]) -> Optional[ScoreResult]:
        for attempt in range(self.max_attempts):
            db = self._SessionLocal()
            try:
                result = recalculate_score(db, student_id, program_id)
                if result is None:
                    logger.info("No score for student=%s program=%s (profile or program missing)", student_id, program_id)
                else:
                    logger.info(
                        "Score updated student=%s program=%s engagement=%.2f fit=%.2f risk=%.2f",
                        student_id, program_id,
                        result.engagement_score, result.fit_score, result.yield_risk_score,
                    )
                return result
            except SQLAlchemyError:
                db.rollback()
                if attempt == self.max_attempts - 1:
                    logger.exception(
                        "Score recalculation failed for student=%s program=%s after %s attempts",
                        student_id, program_id, self.max_attempts,
                    )
                    return None
                delay = self._backoff(attempt)
                logger.warning(
                    "Score recalculation for student=%s program=%s failed (attempt %s), retrying in %.2fs",
                    student_id, program_id, attempt + 1, delay,
                )
                self._sleep(delay)
            except Exception:
                # not retryable; the originating request has already succeeded
                db.rollback()
                logger.exception(
                    "Score recalculation failed for student=%s program=%s",
                    student_id, program_id,
                )
                return None
            finally:
                db.close()
        return None
