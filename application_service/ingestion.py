"""
Write side of the admissions funnel.

Each function commits the facts it records in a single transaction and
returns them. Score recalculation is *not* done here: callers schedule it
once the commit has succeeded, so a scoring failure can never undo an
application or an event.
"""
import logging

from sqlalchemy.orm import Session

from program_service.crud import get_program
from .crud import add_application, add_event
from .models import Application, ApplicationStatus, Event, EventType

logger = logging.getLogger(__name__)


class ProgramNotFound(LookupError):
    pass


def _require_program(db: Session, program_id: int) -> None:
    if get_program(db, program_id) is None:
        raise ProgramNotFound(f"program {program_id} not found")


def submit_application(db: Session, student_id: int, program_id: int) -> Application:
    """
    Create the APPLIED application and its APPLY event together.

    Raises ProgramNotFound for an unknown program and ApplicationConflict
    when the pair already has an application (nothing is written then).
    """
    _require_program(db, program_id)

    app = add_application(db, student_id, program_id, ApplicationStatus.APPLIED)
    add_event(db, student_id, program_id, EventType.APPLY)
    db.commit()
    db.refresh(app)

    logger.info("Application %s created: student=%s program=%s", app.id, student_id, program_id)
    return app


def record_event(
    db: Session,
    student_id: int,
    program_id: int,
    type: EventType,
    details: dict | None = None,
) -> Event:
    _require_program(db, program_id)

    e = add_event(db, student_id, program_id, type, details)
    db.commit()
    db.refresh(e)
    return e
