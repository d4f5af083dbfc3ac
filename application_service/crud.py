from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from program_service.models import Program
from .models import Application, ApplicationStatus, Event, EventType


class ApplicationConflict(ValueError):
    """An application already exists for this (student, program) pair."""


APPLICATION_PAIR_CONSTRAINT = "uq_application_student_program"


def _is_pair_conflict(e: IntegrityError) -> bool:
    # postgres names the violated constraint; sqlite only lists the columns
    diag = getattr(e.orig, "diag", None)
    if getattr(diag, "constraint_name", None) == APPLICATION_PAIR_CONSTRAINT:
        return True
    msg = str(e.orig)
    return (
        APPLICATION_PAIR_CONSTRAINT in msg
        or "UNIQUE constraint failed: application.student_id, application.program_id" in msg
    )


def get_application(db: Session, student_id: int, program_id: int) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.student_id == student_id, Application.program_id == program_id)
        .first()
    )


def count_applications(db: Session, student_id: int, program_id: int) -> int:
    return (
        db.query(func.count(Application.id))
        .filter(Application.student_id == student_id, Application.program_id == program_id)
        .scalar()
    )


def add_application(db: Session, student_id: int, program_id: int, status: ApplicationStatus) -> Application:
    """
    Stage an application and flush it so the unique constraint fires now.
    Does not commit. Raises ApplicationConflict on a duplicate pair.
    """
    a = Application(student_id=student_id, program_id=program_id, status=status)
    db.add(a)
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        if not _is_pair_conflict(e):
            raise
        raise ApplicationConflict(f"student {student_id} already applied to program {program_id}") from e
    return a


def add_event(db: Session, student_id: int, program_id: int, type: EventType, details: dict | None = None) -> Event:
    e = Event(student_id=student_id, program_id=program_id, type=type, details=details or {})
    db.add(e)
    return e


def list_events(db: Session, student_id: int, program_id: int) -> list[Event]:
    return (
        db.query(Event)
        .filter(Event.student_id == student_id, Event.program_id == program_id)
        .order_by(Event.id.asc())
        .all()
    )


def status_funnel(db: Session, institution_id: int) -> list[dict]:
    rows = (
        db.query(Application.status, func.count(Application.id))
        .join(Program, Program.id == Application.program_id)
        .filter(Program.institution_id == institution_id)
        .group_by(Application.status)
        .all()
    )
    return [{"status": status, "count": int(cnt)} for status, cnt in rows]
