from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session
from shared.auth import current_user_id
from shared.database import db_dependency
from .schemas import InstitutionOut, ProgramPage
from .crud import get_institution_for_admin, list_programs


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter(prefix="/institutions", tags=["Institutions"])
    get_db = db_dependency(SessionLocal)

    @router.get("/me", response_model=InstitutionOut)
    def me(request: Request, db: Session = Depends(get_db)):
        inst = get_institution_for_admin(db, current_user_id(request))
        if not inst:
            raise HTTPException(404, "Institution not found")
        return inst

    @router.get("/{institution_id}/programs", response_model=ProgramPage)
    def programs(
        institution_id: int,
        page: int = Query(default=1, ge=1),
        limit: int = Query(default=10, ge=1, le=100),
        db: Session = Depends(get_db),
    ):
        return ProgramPage(data=list_programs(db, institution_id, page, limit))

    return router
