"""Runtime configuration read from environment variables.

The admin and reset passwords are shared placeholder strings compared in
process. They gate the admin UI only and are not an access control: anything
that needs real authorization must enforce it in front of this service.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_DB_PATH = Path("data/designpoll.db")
DEFAULT_BLOB_DIR = Path("blobs")
DEFAULT_ADMIN_PASSWORD = "change-me"
DEFAULT_STORE_TIMEOUT_S = 10.0
DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",  # UI dev server
    "http://127.0.0.1:3000",
)


@dataclass
class Settings:
    """Application settings."""

    db_path: Path = DEFAULT_DB_PATH
    blob_dir: Path = DEFAULT_BLOB_DIR
    admin_password: str = DEFAULT_ADMIN_PASSWORD
    reset_password: str = DEFAULT_ADMIN_PASSWORD
    store_timeout_s: float = DEFAULT_STORE_TIMEOUT_S
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @property
    def uses_default_password(self) -> bool:
        return DEFAULT_ADMIN_PASSWORD in (self.admin_password, self.reset_password)


def load_settings() -> Settings:
    """Build settings from DESIGNPOLL_* environment variables.

    Returns:
        Settings with defaults for anything unset.
    """
    admin_password = os.environ.get("DESIGNPOLL_ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD)
    origins = os.environ.get("DESIGNPOLL_CORS_ORIGINS")

    return Settings(
        db_path=Path(os.environ.get("DESIGNPOLL_DB_PATH", str(DEFAULT_DB_PATH))),
        blob_dir=Path(os.environ.get("DESIGNPOLL_BLOB_DIR", str(DEFAULT_BLOB_DIR))),
        admin_password=admin_password,
        # Reset falls back to the admin password
        reset_password=os.environ.get("DESIGNPOLL_RESET_PASSWORD", admin_password),
        store_timeout_s=float(
            os.environ.get("DESIGNPOLL_STORE_TIMEOUT_S", DEFAULT_STORE_TIMEOUT_S)
        ),
        cors_origins=(
            [o.strip() for o in origins.split(",") if o.strip()]
            if origins
            else list(DEFAULT_CORS_ORIGINS)
        ),
    )
