from sqlalchemy.orm import Session
from .models import StudentProfile


def get_profile(db: Session, user_id: int) -> StudentProfile | None:
    return db.query(StudentProfile).filter(StudentProfile.user_id == user_id).first()


def create_profile(db: Session, user_id: int, payload: dict) -> StudentProfile:
    p = StudentProfile(user_id=user_id, **payload)
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


def bulk_create_profiles(db: Session, rows: list[dict]) -> None:
    """
    Insert many profiles in one flush (seeder path). Caller commits.
    """
    db.add_all([StudentProfile(**r) for r in rows])
    db.flush()
