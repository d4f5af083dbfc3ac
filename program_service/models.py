from sqlalchemy import JSON, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from shared.database import Base

class Institution(Base):
    __tablename__ = "institution"
    __table_args__ = (UniqueConstraint("admin_user_id", name="uq_institution_admin_user_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    admin_user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

class Program(Base):
    __tablename__ = "program"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    institution_id: Mapped[int] = mapped_column(Integer, ForeignKey("institution.id"), index=True)
    name: Mapped[str] = mapped_column(String(255))
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)  # e.g. ["Math", "Art", "Bio"]
