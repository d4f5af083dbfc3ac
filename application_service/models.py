import enum
from datetime import datetime

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from shared.database import Base


class ApplicationStatus(str, enum.Enum):
    EXPLORING = "EXPLORING"
    APPLIED = "APPLIED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class EventType(str, enum.Enum):
    VIEW = "VIEW"
    APPLY = "APPLY"
    CLICK = "CLICK"


class Application(Base):
    __tablename__ = "application"
    # one row per (student, program); enforced by the database, not by a lookup
    __table_args__ = (UniqueConstraint("student_id", "program_id", name="uq_application_student_program"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    student_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    program_id: Mapped[int] = mapped_column(Integer, ForeignKey("program.id"), nullable=False, index=True)
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, native_enum=False, length=20),
        default=ApplicationStatus.EXPLORING,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Event(Base):
    """Append-only interaction fact. Rows are never updated or deleted."""
    __tablename__ = "event"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    student_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    program_id: Mapped[int] = mapped_column(Integer, ForeignKey("program.id"), nullable=False, index=True)
    type: Mapped[EventType] = mapped_column(Enum(EventType, native_enum=False, length=20))
    # "metadata" is reserved on declarative classes
    details: Mapped[dict] = mapped_column("metadata", JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
