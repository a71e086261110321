"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with a local ``db.json`` document and an ``uploads``
directory next to the project.  In a production deployment override
at least ``SECRET_KEY`` and the admin credentials.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Pizza Storefront API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Location of the JSON document holding the ``ingredients`` and
    # ``orders`` collections.  Relative paths are resolved against the
    # project root (see ``resolve_path``).
    data_file: str = os.getenv("DATA_FILE", "db.json")

    # Directory receiving uploaded ingredient images and the public URL
    # prefix under which they are served.
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
    uploads_url: str = os.getenv("UPLOADS_URL", "/uploads")

    # When enabled, image files orphaned by a slug change or by deleting
    # an ingredient are removed from ``upload_dir``.  Off by default, so
    # old files stay on disk.
    remove_stale_uploads: bool = _env_flag("REMOVE_STALE_UPLOADS")

    # The single admin identity allowed to mutate ingredients.
    admin_id: str = os.getenv("ADMIN_ID", "1")
    admin_email: str = os.getenv("ADMIN_EMAIL", "example@email.com")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "password")

    # Comma‑separated list of allowed CORS origins, ``*`` for any.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Optional prefix for all API routes, e.g. ``/api``.  Empty by
    # default so routes live at ``/ingredients``, ``/orders`` etc.
    api_prefix: str = os.getenv("API_PREFIX", "")

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def data_path(self) -> Path:
        return resolve_path(self.data_file)

    @property
    def upload_path(self) -> Path:
        return resolve_path(self.upload_dir)


def resolve_path(value: str) -> Path:
    """Resolve a configured path.

    Absolute paths are returned as is; relative paths are resolved
    against the project root (the directory containing ``pizza_api``).
    """
    path = Path(value)
    if path.is_absolute():
        return path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return (base_dir / path).resolve()


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes defaults at import time, environment variables should be
# set before importing this module.
settings = Settings()
