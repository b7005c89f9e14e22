import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_DATA_PATH = "data/ledger.json"
DEFAULT_OWNER = "guest"
DEFAULT_CURRENCY = "INR"


@dataclass(frozen=True)
class Settings:
    data_path: Path
    log_level: str
    default_owner: str
    currency: str


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the environment (``os.environ`` by default)."""
    env = os.environ if environ is None else environ
    return Settings(
        data_path=Path(env.get("LEDGER_DATA_PATH", DEFAULT_DATA_PATH)),
        log_level=env.get("LEDGER_LOG_LEVEL", "INFO"),
        default_owner=env.get("LEDGER_DEFAULT_OWNER", DEFAULT_OWNER),
        currency=env.get("LEDGER_CURRENCY", DEFAULT_CURRENCY),
    )
