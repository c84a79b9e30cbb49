"""
config.py — Runtime settings read from the environment (and .env).

Variables:
    ICONSMITH_OUTPUT_DIR       where the CLI writes files       (default: outputs)
    ICONSMITH_EXPORT_WORKERS   export thread pool size          (default: 4)
    ICONSMITH_DEFAULT_MASK     mask used when none is given     (default: squircle)
    ICONSMITH_LOG_LEVEL        logging level for the CLI        (default: INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_OUTPUT_DIR = "outputs"
DEFAULT_EXPORT_WORKERS = 4
DEFAULT_MASK = "squircle"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class IconsmithConfig:
    output_dir: Path
    export_workers: int
    default_mask: str
    log_level: str


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(name, "").strip()
    try:
        value = int(raw) if raw else default
    except ValueError:
        value = default
    return max(minimum, value)


def get_config() -> IconsmithConfig:
    return IconsmithConfig(
        output_dir=Path(os.environ.get("ICONSMITH_OUTPUT_DIR", DEFAULT_OUTPUT_DIR).strip() or DEFAULT_OUTPUT_DIR),
        export_workers=_env_int("ICONSMITH_EXPORT_WORKERS", DEFAULT_EXPORT_WORKERS),
        default_mask=os.environ.get("ICONSMITH_DEFAULT_MASK", DEFAULT_MASK).strip() or DEFAULT_MASK,
        log_level=os.environ.get("ICONSMITH_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL,
    )
