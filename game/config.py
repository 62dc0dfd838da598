"""Runtime settings read from the environment.

Variables (a ``.env`` file is honoured through python-dotenv):
    SOUL_BRIDGE_SAVE_DIR       directory for save files; unset keeps saves in memory
    SOUL_BRIDGE_SESSION_ID     fixed session id; otherwise one is generated per process
    SOUL_BRIDGE_AUTO_ADVANCE   "true"/"false", drive game time from the wall clock
    SOUL_BRIDGE_TIME_SCALE     game seconds per wall second in auto-advance mode
    SOUL_BRIDGE_SEED           seed for boot-delay randomness
    SOUL_BRIDGE_CONTENT_PATH   alternate default-tree JSON file
    SOUL_BRIDGE_LOG_LEVEL      logging level name
"""

import os
import secrets
import string
import time
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "SOUL_BRIDGE_"

_SESSION_ALPHABET = string.ascii_lowercase + string.digits


def generate_session_id() -> str:
    """Create a ``player_<ms>_<9 chars>`` identifier."""
    suffix = "".join(secrets.choice(_SESSION_ALPHABET) for _ in range(9))
    return f"player_{int(time.time() * 1000)}_{suffix}"


class GameSettings(BaseModel):
    """Settings for one game process.

    Args:
        save_dir: Directory for the JSON file store (None = in-memory store).
        session_id: Identifier the storage keys are derived from.
        auto_advance: Whether a background loop drives game time.
        time_scale: Game seconds per wall second when auto-advancing.
        seed: Seed for the boot-delay RNG (None = nondeterministic).
        content_path: Alternate default-tree JSON file.
        log_level: Logging level name.
    """

    save_dir: Optional[Path] = Field(default=None, description="Save directory")
    session_id: str = Field(
        default_factory=generate_session_id, description="Session identifier"
    )
    auto_advance: bool = Field(default=True, description="Drive time from wall clock")
    time_scale: float = Field(default=1.0, gt=0.0, description="Auto-advance multiplier")
    seed: Optional[int] = Field(default=None, description="Boot RNG seed")
    content_path: Optional[Path] = Field(default=None, description="Default tree JSON")
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("session_id")
    @classmethod
    def validate_session_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("session_id cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        load_dotenv_file: bool = True,
    ) -> "GameSettings":
        """Build settings from ``SOUL_BRIDGE_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.
            load_dotenv_file: Whether to load ``.env`` first (only applies
                when reading ``os.environ``).

        Raises:
            pydantic.ValidationError: If a variable has an invalid value.
        """
        if environ is None:
            if load_dotenv_file:
                load_dotenv()
            environ = os.environ

        fields = {
            "save_dir": "SAVE_DIR",
            "session_id": "SESSION_ID",
            "auto_advance": "AUTO_ADVANCE",
            "time_scale": "TIME_SCALE",
            "seed": "SEED",
            "content_path": "CONTENT_PATH",
            "log_level": "LOG_LEVEL",
        }
        values = {}
        for field_name, suffix in fields.items():
            raw = environ.get(ENV_PREFIX + suffix)
            if raw is not None and raw.strip() != "":
                values[field_name] = raw.strip()

        return cls.model_validate(values)
