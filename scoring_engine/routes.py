from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from shared.auth import current_user_id
from shared.database import db_dependency
from .schemas import HighRiskOut, RecalculateIn, ScoreOut, StudentScoreOut
from .crud import get_score, high_risk_scores, list_student_scores
from .recalculator import recalculate_score


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter(tags=["Scores"])
    get_db = db_dependency(SessionLocal)

    @router.get("/students/me/scores", response_model=list[StudentScoreOut])
    def my_scores(request: Request, db: Session = Depends(get_db)):
        return list_student_scores(db, current_user_id(request), limit=20)

    @router.post("/scores/recalculate", response_model=ScoreOut)
    def recalculate(payload: RecalculateIn, request: Request, db: Session = Depends(get_db)):
        # synchronous variant of the background recalculation
        uid = current_user_id(request)
        result = recalculate_score(db, uid, payload.program_id)
        if result is None:
            raise HTTPException(404, "Profile or program not found")
        return get_score(db, uid, payload.program_id)

    @router.get("/institutions/{institution_id}/high-risk-students", response_model=list[HighRiskOut], tags=["Institutions"])
    def high_risk(institution_id: int, db: Session = Depends(get_db)):
        return high_risk_scores(db, institution_id)

    return router
