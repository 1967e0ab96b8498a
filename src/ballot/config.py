"""Runtime configuration for ballot.

Values come from the process environment, optionally seeded from a
.env file via python-dotenv. Existing environment variables win over
values in the file.

    BALLOT_ADMIN        default admin identity for scenarios (admin)
    BALLOT_LOG_LEVEL    DEBUG / INFO / WARNING / ERROR (INFO)
    BALLOT_LOG_FORMAT   console / json (console)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv

from ballot.observability.logging import LOG_FORMATS


@dataclass(frozen=True)
class BallotConfig:
    admin: str = "admin"
    log_level: str = "INFO"
    log_format: str = "console"

    def __post_init__(self) -> None:
        if not self.admin or not self.admin.strip():
            raise ValueError("BALLOT_ADMIN cannot be empty")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Unknown log format: {self.log_format} "
                f"(expected one of {LOG_FORMATS})"
            )

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> BallotConfig:
        """Load configuration from the environment (and .env if present)."""
        path = env_file if env_file is not None else find_dotenv(usecwd=True)
        if path:
            load_dotenv(path)

        return cls(
            admin=os.getenv("BALLOT_ADMIN", "admin").strip(),
            log_level=os.getenv("BALLOT_LOG_LEVEL", "INFO").strip().upper(),
            log_format=os.getenv("BALLOT_LOG_FORMAT", "console").strip().lower(),
        )

    def summary(self) -> dict[str, Any]:
        return {
            "admin": self.admin,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }
