from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_CREDITS_FILE = "credits.json"


@dataclass(frozen=True)
class Settings:
    """Emplacement du registre de crédits sur disque."""
    data_dir: Path
    credits_file: str = _DEFAULT_CREDITS_FILE

    @property
    def credits_path(self) -> Path:
        return self.data_dir / self.credits_file

    @property
    def sqlite_path(self) -> Path:
        return self.data_dir / "creditledger.db"


def _data_dir_from_env() -> Path:
    raw = os.getenv("CREDITLEDGER_DATA_DIR", "").strip()
    if raw:
        return Path(raw).expanduser()
    # data/ à côté du package creditledger
    return Path(__file__).resolve().parents[1] / "data"


def get_settings() -> Settings:
    data_dir = _data_dir_from_env()
    data_dir.mkdir(parents=True, exist_ok=True)

    credits_file = os.getenv("CREDITLEDGER_CREDITS_FILE", "").strip() or _DEFAULT_CREDITS_FILE
    return Settings(data_dir=data_dir, credits_file=credits_file)
