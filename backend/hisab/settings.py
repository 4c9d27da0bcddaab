from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_STORAGE_KEY = "billing-transactions"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    database_url: str | None
    storage_key: str
    log_level: str


def get_settings() -> Settings:
    # 1) env var
    env = os.getenv("HISAB_DATA_DIR")
    if env and env.strip():
        p = Path(env).expanduser()
    else:
        # 2) default: backend/data
        # hisab/settings.py -> hisab/ -> backend/
        p = Path(__file__).resolve().parents[1] / "data"

    # Le dossier data peut être créé automatiquement
    p.mkdir(parents=True, exist_ok=True)

    db_url = (os.getenv("HISAB_DATABASE_URL") or "").strip() or None
    storage_key = (os.getenv("HISAB_STORAGE_KEY") or "").strip() or DEFAULT_STORAGE_KEY
    log_level = (os.getenv("HISAB_LOG_LEVEL") or "").strip().upper() or "INFO"

    return Settings(data_dir=p, database_url=db_url, storage_key=storage_key, log_level=log_level)
