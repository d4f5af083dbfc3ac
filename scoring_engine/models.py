from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from shared.database import Base

from profile_service.models import StudentProfile
from program_service.models import Program


class StudentProgramScore(Base):
    """
    Materialized scores for one (student, program) pair.
    Always recomputed, never authored; written only through upsert_score.
    """
    __tablename__ = "student_program_score"
    __table_args__ = (UniqueConstraint("student_id", "program_id", name="uq_score_student_program"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    student_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    program_id: Mapped[int] = mapped_column(Integer, ForeignKey("program.id"), nullable=False, index=True)

    engagement_score: Mapped[float] = mapped_column(Float, default=0.0)  # 0-100
    fit_score: Mapped[float] = mapped_column(Float, default=0.0)         # 0-100
    yield_risk_score: Mapped[float] = mapped_column(Float, default=0.0)  # 0-100

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    program: Mapped[Program] = relationship(Program, lazy="joined")
    student_profile: Mapped[StudentProfile | None] = relationship(
        StudentProfile,
        primaryjoin="foreign(StudentProgramScore.student_id) == StudentProfile.user_id",
        viewonly=True,
        uselist=False,
    )
