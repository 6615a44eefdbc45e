import os
from dataclasses import dataclass
from functools import lru_cache


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Fussballverein"
    env: str = "dev"
    database_url: str = "sqlite+aiosqlite:///./clubs.db"
    log_level: str = "INFO"
    default_page_size: int = 5
    max_page_size: int = 100
    seed_on_startup: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            database_url=os.getenv("DATABASE_URL") or cls.database_url,
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            default_page_size=_env_int("DEFAULT_PAGE_SIZE", cls.default_page_size),
            max_page_size=_env_int("MAX_PAGE_SIZE", cls.max_page_size),
            seed_on_startup=_env_bool("SEED_ON_STARTUP", cls.seed_on_startup),
        )

    def is_dev(self) -> bool:
        return self.env.lower() in ("dev", "development", "local")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
