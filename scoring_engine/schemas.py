from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from profile_service.schemas import ProfileOut
from program_service.schemas import ProgramOut

class RecalculateIn(BaseModel):
    program_id: int = Field(gt=0)

class ScoreOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    student_id: int
    program_id: int
    engagement_score: float = Field(ge=0, le=100)
    fit_score: float = Field(ge=0, le=100)
    yield_risk_score: float = Field(ge=0, le=100)
    updated_at: datetime | None = None

class StudentScoreOut(ScoreOut):
    program: ProgramOut

class HighRiskOut(ScoreOut):
    program: ProgramOut
    student_profile: ProfileOut | None = None
