"""
Application settings from config/app_config.yaml and the environment
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from rich.logging import RichHandler

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "app_config.yaml"


@dataclass
class Settings:
    vocabulary_path: Path
    db_path: Path
    log_level: str = "WARNING"


def _load_config(path):
    with open(path, "r") as file:
        return yaml.safe_load(file) or {}


def _resolve(value: str) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Read settings; VISUAL_SUPPORTS_* environment variables win over the file"""
    load_dotenv()

    path = config_path or os.getenv("VISUAL_SUPPORTS_CONFIG") or DEFAULT_CONFIG_PATH
    c = _load_config(path) if os.path.exists(path) else {}

    return Settings(
        vocabulary_path=_resolve(
            os.getenv(
                "VISUAL_SUPPORTS_VOCABULARY",
                c.get("vocabulary_path", "data/vocabulary.json"),
            )
        ),
        db_path=_resolve(
            os.getenv(
                "VISUAL_SUPPORTS_DB_PATH",
                c.get("db_path", "database/documents.db"),
            )
        ),
        log_level=os.getenv(
            "VISUAL_SUPPORTS_LOG_LEVEL", c.get("log_level", "WARNING")
        ).upper(),
    )


def setup_logging(level: str = "WARNING"):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
