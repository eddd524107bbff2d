from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from persistence import paths


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    # Storage
    data_file: Path
    backup_dir: Path

    # Write access
    admin_token: str
    require_if_match: bool

    # Debug
    debug_log_requests: bool

    # Browser admin page on another origin
    cors_allow_origins: tuple[str, ...]


def get_settings() -> Settings:
    root = paths.project_root()

    data_file = Path(os.getenv("CATALOG_DATA_FILE", str(root / "products.json")))
    backup_dir = Path(os.getenv("CATALOG_BACKUP_DIR", str(data_file.parent / "backups")))

    # NOTE: empty token means every write is rejected; set ADMIN_TOKEN in production
    admin_token = os.getenv("ADMIN_TOKEN", "")

    # Off by default: a save without If-Match overwrites unconditionally.
    require_if_match = _env_bool("REQUIRE_IF_MATCH", False)

    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", True)

    cors_allow_origins = _env_list("CORS_ALLOW_ORIGINS")

    return Settings(
        data_file=data_file,
        backup_dir=backup_dir,
        admin_token=admin_token,
        require_if_match=require_if_match,
        debug_log_requests=debug_log_requests,
        cors_allow_origins=cors_allow_origins,
    )
