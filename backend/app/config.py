# backend/app/config.py
from __future__ import annotations
import os


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored next to the backend by default
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///restopos.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Create missing tables at startup (disable when the schema is managed with `flask db upgrade`)
    AUTO_CREATE_SCHEMA = _env_flag("AUTO_CREATE_SCHEMA", True)

    # Insert the starter menu and expense categories into empty tables on startup
    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA", True)

    # When enabled, POST /api/sales rejects totals that differ from sum(quantity * unit_price)
    STRICT_SALE_TOTALS = _env_flag("STRICT_SALE_TOTALS", False)

    BACKUP_FORMAT_VERSION = "1.0"
    BACKUP_FILENAME = "pos_backup.json"
