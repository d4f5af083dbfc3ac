from sqlalchemy.orm import Session
from .models import Institution, Program

def get_institution_for_admin(db: Session, admin_user_id: int) -> Institution | None:
    return db.query(Institution).filter(Institution.admin_user_id == admin_user_id).first()

def create_institution(db: Session, name: str, admin_user_id: int) -> Institution:
    inst = Institution(name=name, admin_user_id=admin_user_id)
    db.add(inst)
    db.commit()
    db.refresh(inst)
    return inst

def get_program(db: Session, program_id: int) -> Program | None:
    return db.get(Program, program_id)

def create_program(db: Session, institution_id: int, name: str, tags: list[str]) -> Program:
    p = Program(institution_id=institution_id, name=name, tags=list(dict.fromkeys(tags)))
    db.add(p)
    db.commit()
    db.refresh(p)
    return p

def list_programs(db: Session, institution_id: int, page: int = 1, limit: int = 10) -> list[Program]:
    skip = (page - 1) * limit
    return (
        db.query(Program)
        .filter(Program.institution_id == institution_id)
        .order_by(Program.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )

def list_program_ids(db: Session) -> list[int]:
    return [pid for (pid,) in db.query(Program.id).order_by(Program.id.asc()).all()]
