"""Runtime settings, read from the environment.

HPOS_DATA_DIR      directory holding the JSON stores (default: ./data)
HPOS_MANAGER_CODE  4-character manager void code (default: 1234)
HPOS_LOG_LEVEL     log level for the ``hpos`` loggers (default: WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from hpos.domain.exceptions import ConfigurationError
from hpos.domain.service.authorization import MANAGER_CODE_LENGTH

DEFAULT_MANAGER_CODE = "1234"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    manager_code: str
    log_level: str


def load_settings(
    env: Mapping[str, str] | None = None,
    data_dir: str | Path | None = None,
    log_level: str | None = None,
) -> Settings:
    """Build settings from *env* (default ``os.environ``); arguments win."""
    env = os.environ if env is None else env

    manager_code = env.get("HPOS_MANAGER_CODE", DEFAULT_MANAGER_CODE)
    if len(manager_code) != MANAGER_CODE_LENGTH:
        raise ConfigurationError(
            f"HPOS_MANAGER_CODE must be exactly {MANAGER_CODE_LENGTH} characters"
        )

    level = (log_level or env.get("HPOS_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log level '{level}'")

    return Settings(
        data_dir=Path(data_dir or env.get("HPOS_DATA_DIR", "data")),
        manager_code=manager_code,
        log_level=level,
    )
