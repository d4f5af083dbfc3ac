from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from shared.auth import current_user_id
from shared.database import db_dependency
from .schemas import ApplicationIn, ApplicationOut, EventIn, EventOut, FunnelRow
from .crud import ApplicationConflict, status_funnel
from .ingestion import ProgramNotFound, record_event, submit_application


def build_router(SessionLocal, recalculator) -> APIRouter:
    router = APIRouter(tags=["Applications"])
    get_db = db_dependency(SessionLocal)

    @router.post("/applications", response_model=ApplicationOut)
    def apply(
        payload: ApplicationIn,
        request: Request,
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_db),
    ):
        uid = current_user_id(request)
        try:
            app = submit_application(db, uid, payload.program_id)
        except ProgramNotFound:
            raise HTTPException(404, "Program not found")
        except ApplicationConflict:
            raise HTTPException(400, "Already applied to this program")

        # Eventually consistent: the score is recomputed after this response
        # has been sent. Until that task finishes, score reads for this pair
        # still return the previous values (or nothing on a first application).
        background_tasks.add_task(recalculator.run, uid, payload.program_id)
        return app

    @router.post("/events", response_model=EventOut)
    def track(
        payload: EventIn,
        request: Request,
        background_tasks: BackgroundTasks,
        db: Session = Depends(get_db),
    ):
        uid = current_user_id(request)
        try:
            e = record_event(db, uid, payload.program_id, payload.type, payload.metadata)
        except ProgramNotFound:
            raise HTTPException(404, "Program not found")

        # same eventual-consistency contract as /applications
        background_tasks.add_task(recalculator.run, uid, payload.program_id)
        return e

    @router.get("/institutions/{institution_id}/analytics/funnel", response_model=list[FunnelRow], tags=["Institutions"])
    def funnel(institution_id: int, db: Session = Depends(get_db)):
        return status_funnel(db, institution_id)

    return router
