from __future__ import annotations

import logging.config
import os
from dataclasses import dataclass
from pathlib import Path


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    site_name: str = "Print Shop"
    database_url: str = "sqlite:////data/app.db"
    data_dir: Path = Path("/data")
    max_upload_mb: int = 10
    # "lookup" returns the stored status, "simulated" advances it randomly on poll
    status_progression: str = "lookup"
    session_secret: str = "change_me_to_a_long_random_string"
    admin_user: str = "admin"
    # Plaintext or bcrypt hash (starts with $2b$...)
    admin_password: str = "change_me"
    admin_login_required: bool = False
    log_level: str = "INFO"

    @property
    def upload_dir(self) -> Path:
        return self.data_dir / "uploads"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            site_name=os.getenv("SITE_NAME", "Print Shop"),
            database_url=os.getenv("DATABASE_URL", "sqlite:////data/app.db"),
            data_dir=Path(os.getenv("DATA_DIR", "/data")),
            max_upload_mb=int(os.getenv("MAX_UPLOAD_MB", "10")),
            status_progression=os.getenv("STATUS_PROGRESSION", "lookup").strip().lower(),
            session_secret=os.getenv("SESSION_SECRET", "change_me_to_a_long_random_string"),
            admin_user=os.getenv("ADMIN_USER", "admin"),
            admin_password=os.getenv("ADMIN_PASSWORD", "change_me"),
            admin_login_required=_env_flag("ADMIN_LOGIN_REQUIRED"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
    })
