from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


DEFAULT_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration read from the environment (and a local `.env`).

    The bootstrap admin is only created when both its username and password
    are set.
    """

    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT
    bootstrap_admin_username: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None

    @property
    def bootstrap_admin(self) -> bool:
        return bool(self.bootstrap_admin_username and self.bootstrap_admin_password)


def load_settings() -> Settings:
    load_dotenv()

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise RuntimeError(f"LOG_LEVEL has an invalid value: {log_level}")

    return Settings(
        log_level=log_level,
        log_format=os.environ.get("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        bootstrap_admin_username=os.environ.get("BOOTSTRAP_ADMIN_USERNAME") or None,
        bootstrap_admin_password=os.environ.get("BOOTSTRAP_ADMIN_PASSWORD") or None,
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
