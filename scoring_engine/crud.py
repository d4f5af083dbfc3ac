from datetime import datetime, timezone

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, joinedload

from program_service.models import Program
from .models import StudentProgramScore
from .scoring_logic import ScoreResult

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _insert_for(db: Session):
    name = db.get_bind().dialect.name
    try:
        return _DIALECT_INSERTS[name]
    except KeyError:
        raise NotImplementedError(f"score upsert is not supported on '{name}'")


def upsert_score(db: Session, student_id: int, program_id: int, result: ScoreResult) -> None:
    """
    Single INSERT ... ON CONFLICT DO UPDATE keyed by (student_id, program_id).
    Atomic per key and last-write-wins; never creates a second row.
    """
    values = {**result.as_dict(), "updated_at": datetime.now(timezone.utc)}
    insert = _insert_for(db)
    stmt = insert(StudentProgramScore).values(student_id=student_id, program_id=program_id, **values)
    stmt = stmt.on_conflict_do_update(index_elements=["student_id", "program_id"], set_=values)
    db.execute(stmt)
    db.commit()


def get_score(db: Session, student_id: int, program_id: int) -> StudentProgramScore | None:
    return (
        db.query(StudentProgramScore)
        .filter(StudentProgramScore.student_id == student_id, StudentProgramScore.program_id == program_id)
        .first()
    )


def count_scores(db: Session, student_id: int, program_id: int) -> int:
    return (
        db.query(StudentProgramScore)
        .filter(StudentProgramScore.student_id == student_id, StudentProgramScore.program_id == program_id)
        .count()
    )


def list_student_scores(db: Session, student_id: int, limit: int = 20) -> list[StudentProgramScore]:
    return (
        db.query(StudentProgramScore)
        .filter(StudentProgramScore.student_id == student_id)
        .order_by(StudentProgramScore.id.asc())
        .limit(limit)
        .all()
    )


def high_risk_scores(
    db: Session,
    institution_id: int,
    min_fit: float = 70.0,
    min_risk: float = 50.0,
    limit: int = 10,
) -> list[StudentProgramScore]:
    # good fit but unlikely to convert
    return (
        db.query(StudentProgramScore)
        .join(Program, Program.id == StudentProgramScore.program_id)
        .options(joinedload(StudentProgramScore.student_profile))
        .filter(
            Program.institution_id == institution_id,
            StudentProgramScore.fit_score > min_fit,
            StudentProgramScore.yield_risk_score > min_risk,
        )
        .order_by(StudentProgramScore.yield_risk_score.desc())
        .limit(limit)
        .all()
    )
