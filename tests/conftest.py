# tests/conftest.py

"""
Pytest fixtures shared by the unit and API tests.

Every test gets its own SQLite file (background score tasks open their own
connections, so an in-memory database would not be shared).

CATALOG REFERENCE (see the `catalog` fixture):
- Institution administered by user 900
- Program "full":    tags Math, Code, Bio
- Program "partial": tags Math, Art, Bio
- Student 1: interests Math, Code, Bio   (3 matches with "full")
- Student 2: interests Math, Code        (1 match with "partial")
- Student 3: no profile
"""

import pytest
from fastapi.testclient import TestClient

from admissions_api.main import create_app
from profile_service.crud import create_profile
from program_service.crud import create_institution, create_program
from shared.auth import TokenRejected
from shared.config import Settings
from shared.database import Base, build_engine, build_session_factory


TOKENS = {
    "student-1": {"sub": "1", "role": "STUDENT"},
    "student-2": {"sub": "2", "role": "STUDENT"},
    "student-3": {"sub": "3", "role": "STUDENT"},
    "admin-900": {"sub": "900", "role": "INSTITUTION_ADMIN"},
}


async def fake_verify_token(token: str) -> dict:
    try:
        return TOKENS[token]
    except KeyError:
        raise TokenRejected("Invalid or expired token")


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'admissions.db'}",
        score_retry_attempts=3,
        score_retry_base_delay=0.0,
    )


@pytest.fixture
def engine(settings):
    eng = build_engine(settings.database_url)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def SessionLocal(engine):
    return build_session_factory(engine)


@pytest.fixture
def db(SessionLocal):
    with SessionLocal() as session:
        yield session


@pytest.fixture
def catalog(db):
    inst = create_institution(db, "Hopper University", admin_user_id=900)
    full = create_program(db, inst.id, "Data BS", ["Math", "Code", "Bio"])
    partial = create_program(db, inst.id, "Design MS", ["Math", "Art", "Bio"])
    create_profile(db, 1, {"name": "Ada Lovelace", "interests": ["Math", "Code", "Bio"]})
    create_profile(db, 2, {"name": "Alan Turing", "interests": ["Math", "Code"]})
    return {
        "institution_id": inst.id,
        "full": full.id,
        "partial": partial.id,
    }


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def app(settings, engine):
    return create_app(settings, engine=engine, verify_token=fake_verify_token)


@pytest.fixture
def client(app):
    # TestClient returns only after background tasks have run
    with TestClient(app) as test_client:
        yield test_client
