# admissions_api/main.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from shared.auth import TokenVerifier, build_auth_middleware, http_token_verifier
from shared.config import Settings, load_settings
from shared.database import Base, build_engine, build_session_factory

import application_service.routes as application_routes
import profile_service.routes as profile_routes
import program_service.routes as program_routes
import scoring_engine.routes as scoring_routes
from scoring_engine.recalculator import ScoreRecalculator

logger = logging.getLogger("admissions-api")


def create_app(
    settings: Settings,
    *,
    engine: Optional[Engine] = None,
    verify_token: Optional[TokenVerifier] = None,
) -> FastAPI:
    """
    Wire the service from an explicit Settings object.

    engine and verify_token default to the database in settings.database_url
    and the identity service in settings.auth_service_url.
    """
    if engine is None:
        engine = build_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)
    SessionLocal = build_session_factory(engine)

    if verify_token is None:
        verify_token = http_token_verifier(settings.auth_service_url)

    recalculator = ScoreRecalculator(SessionLocal, settings)

    app = FastAPI(title="Admissions API", version="1.0.0")
    app.state.settings = settings
    app.state.recalculator = recalculator

    app.middleware("http")(build_auth_middleware(verify_token))

    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject "*" with credentials
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(profile_routes.build_router(SessionLocal))
    app.include_router(program_routes.build_router(SessionLocal))
    app.include_router(application_routes.build_router(SessionLocal, recalculator))
    app.include_router(scoring_routes.build_router(SessionLocal))

    @app.get("/health", operation_id="health_check", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "service": "admissions-api"}

    return app


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    settings = load_settings()
    logger.info("Starting admissions-api on port %s", settings.port)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)
