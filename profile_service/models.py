from sqlalchemy import JSON, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from shared.database import Base

class StudentProfile(Base):
    __tablename__ = "student_profile"
    __table_args__ = (UniqueConstraint("user_id", name="uq_student_profile_user_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), default="")
    interests: Mapped[list[str]] = mapped_column(JSON, default=list)  # e.g. ["Math", "Code"]
    goals: Mapped[str] = mapped_column(Text, default="")
