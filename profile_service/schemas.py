from pydantic import BaseModel, ConfigDict, Field

class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    interests: list[str] = Field(default_factory=list)
    goals: str = ""
