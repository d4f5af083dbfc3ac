from pydantic import BaseModel, ConfigDict

class InstitutionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    admin_user_id: int

class ProgramOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    institution_id: int
    name: str
    tags: list[str]

class ProgramPage(BaseModel):
    data: list[ProgramOut]
