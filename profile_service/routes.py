from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from shared.auth import current_user_id
from shared.database import db_dependency
from .schemas import ProfileOut
from .crud import get_profile


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter(tags=["Students"])
    get_db = db_dependency(SessionLocal)

    @router.get("/students/me/profile", response_model=ProfileOut)
    def me(request: Request, db: Session = Depends(get_db)):
        p = get_profile(db, current_user_id(request))
        if not p:
            raise HTTPException(404, "Profile not found")
        return p

    return router
