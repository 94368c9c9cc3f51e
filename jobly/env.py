import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "postgresql+psycopg2:///jobly"


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    log_to_file: bool = False


def load_env() -> None:
    """Load .env from the working directory if present.
    Variables already set in the environment win.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def normalize_database_url(url: str) -> str:
    """Point bare postgres URLs at the psycopg2 driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg2://" + url[len(prefix):]
    return url


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    load_env()
    return Settings(
        database_url=normalize_database_url(
            os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
        ),
        log_level=os.getenv("JOBLY_LOG_LEVEL", "INFO"),
        log_dir=Path(os.getenv("JOBLY_LOG_DIR", "logs")),
        log_to_file=_as_bool(os.getenv("JOBLY_LOG_TO_FILE", "false")),
    )
