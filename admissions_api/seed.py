"""
Synthetic data generator for demos and load tests.

    python -m admissions_api.seed

Creates institutions with programs, then students in batches. Roughly one
student in five gets an EXPLORING application plus a VIEW event against a
random program, which gives the dashboards a sparse engagement spread.
Scores are not computed here; use POST /scores/recalculate or let normal
traffic trigger them.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from application_service.models import Application, ApplicationStatus, Event, EventType
from profile_service.crud import bulk_create_profiles
from program_service.crud import create_institution, create_program, list_program_ids
from shared.config import Settings, load_settings
from shared.database import Base, build_engine, build_session_factory
import scoring_engine.models  # noqa: F401  (registers the score table)

logger = logging.getLogger(__name__)

TAG_POOL = ["Math", "Art", "Code", "Bio", "History"]
DEGREES = ["BS", "MS", "Certificate"]
FIELDS = ["Engineering", "Design", "Medicine", "Humanities", "Business", "Data"]
FIRST_NAMES = ["Ada", "Grace", "Alan", "Katherine", "Linus", "Margaret", "Tim", "Barbara"]
LAST_NAMES = ["Lovelace", "Hopper", "Turing", "Johnson", "Torvalds", "Hamilton", "Berners-Lee", "Liskov"]

ENGAGED_SHARE = 0.2

# user ids: admins and students live in separate ranges so they never collide
ADMIN_USER_ID_START = 1
STUDENT_USER_ID_START = 100_000


@dataclass
class SeedSummary:
    institutions: int = 0
    programs: int = 0
    students: int = 0
    applications: int = 0
    events: int = 0


def seed_catalog(db: Session, rng: random.Random, institutions: int, programs_per_institution: int) -> SeedSummary:
    summary = SeedSummary()
    for i in range(institutions):
        inst = create_institution(db, f"{rng.choice(LAST_NAMES)} University {i + 1}", ADMIN_USER_ID_START + i)
        summary.institutions += 1
        for _ in range(programs_per_institution):
            name = f"{rng.choice(FIELDS)} {rng.choice(DEGREES)}"
            create_program(db, inst.id, name, rng.sample(TAG_POOL, 3))
            summary.programs += 1
    return summary


def seed_students(
    db: Session,
    rng: random.Random,
    total: int,
    batch_size: int,
    program_ids: list[int],
    summary: Optional[SeedSummary] = None,
) -> SeedSummary:
    summary = summary or SeedSummary()
    if not program_ids:
        logger.warning("No programs found; students will have no applications")

    created = 0
    while created < total:
        batch = min(batch_size, total - created)
        user_ids = range(STUDENT_USER_ID_START + created, STUDENT_USER_ID_START + created + batch)

        bulk_create_profiles(db, [
            {
                "user_id": uid,
                "name": f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
                "interests": rng.sample(TAG_POOL, 2),
                "goals": "Graduate",
            }
            for uid in user_ids
        ])

        apps: list[Application] = []
        events: list[Event] = []
        for uid in user_ids:
            # independent draw per student
            if program_ids and rng.random() < ENGAGED_SHARE:
                pid = rng.choice(program_ids)
                apps.append(Application(student_id=uid, program_id=pid, status=ApplicationStatus.EXPLORING))
                events.append(Event(student_id=uid, program_id=pid, type=EventType.VIEW, details={}))

        db.add_all(apps)
        db.add_all(events)
        db.commit()

        created += batch
        summary.students += batch
        summary.applications += len(apps)
        summary.events += len(events)
        logger.info("Progress: %s / %s students", created, total)

    return summary


def run(settings: Settings, seed: Optional[int] = None) -> SeedSummary:
    engine = build_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)
    SessionLocal = build_session_factory(engine)
    rng = random.Random(seed)

    with SessionLocal() as db:
        logger.info("Seeding %s institutions", settings.seed_institutions)
        summary = seed_catalog(db, rng, settings.seed_institutions, settings.seed_programs_per_institution)

        logger.info("Seeding %s students", settings.seed_students)
        seed_students(db, rng, settings.seed_students, settings.seed_batch_size, list_program_ids(db), summary)

    logger.info("Data generation complete: %s", summary)
    return summary


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run(load_settings())
