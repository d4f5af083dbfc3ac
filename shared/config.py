import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def _get_env(name: str, default: Optional[str] = None) -> str:
    val = os.getenv(name, default)
    if val is None or val.strip() == "":
        raise RuntimeError(f"Missing required environment variable: {name}")
    return val.strip()


def _parse_origins(raw: str) -> list[str]:
    raw = (raw or "").strip()
    if not raw or raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    database_url: str
    auth_service_url: str = "http://auth-service:8001"
    cors_origins: tuple[str, ...] = ("*",)

    # background score recalculation
    score_retry_attempts: int = 3
    score_retry_base_delay: float = 0.2

    # synthetic data generation
    seed_institutions: int = 10
    seed_programs_per_institution: int = 5
    seed_students: int = 5000
    seed_batch_size: int = 1000

    port: int = 8000


def load_settings() -> Settings:
    """
    Build Settings from the environment (.env is honoured).
    Only DATABASE_URL is required.
    """
    load_dotenv()
    return Settings(
        database_url=_get_env("DATABASE_URL"),
        auth_service_url=_get_env("AUTH_SERVICE_URL", "http://auth-service:8001").rstrip("/"),
        cors_origins=tuple(_parse_origins(os.getenv("CORS_ORIGINS", "*"))),
        score_retry_attempts=int(_get_env("SCORE_RETRY_ATTEMPTS", "3")),
        score_retry_base_delay=float(_get_env("SCORE_RETRY_BASE_DELAY", "0.2")),
        seed_institutions=int(_get_env("SEED_INSTITUTIONS", "10")),
        seed_programs_per_institution=int(_get_env("SEED_PROGRAMS_PER_INSTITUTION", "5")),
        seed_students=int(_get_env("SEED_STUDENTS", "5000")),
        seed_batch_size=int(_get_env("SEED_BATCH_SIZE", "1000")),
        port=int(_get_env("PORT", "8000")),
    )
