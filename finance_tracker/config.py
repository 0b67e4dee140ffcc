import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class Settings:
    # Default to local SQLite, but allow override for a hosted Postgres
    database_url: str = "sqlite:///finance_tracker.db"
    storage_backend: str = "database"  # 'database' or 'memory'
    session_secret: str = "dev-session-secret-change-me"
    session_max_age: int = 7 * 24 * 60 * 60
    log_level: str = "INFO"


def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("DATABASE_URL", Settings.database_url),
        storage_backend=os.getenv("STORAGE_BACKEND", Settings.storage_backend).lower(),
        session_secret=os.getenv("SESSION_SECRET", Settings.session_secret),
        session_max_age=int(os.getenv("SESSION_MAX_AGE", Settings.session_max_age)),
        log_level=os.getenv("LOG_LEVEL", Settings.log_level).upper(),
    )
