"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float = 0.0) -> float:
    """Interpret environment variable values as floats."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}.") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "PayoffSage"
    LOG_FILENAME = "payoffsage.log"
    LOG_MAX_BYTES = 10 * 1024 * 1024
    LOG_BACKUP_COUNT = 5

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("PAYOFFSAGE_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("PAYOFFSAGE_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.LOG_LEVEL = os.getenv("PAYOFFSAGE_LOG_LEVEL", "INFO").strip().upper()
        self.DEFAULT_EXTRA_PAYMENT = _env_float("PAYOFFSAGE_DEFAULT_EXTRA_PAYMENT", 0.0)
        if self.DEFAULT_EXTRA_PAYMENT < 0:
            raise ValueError("PAYOFFSAGE_DEFAULT_EXTRA_PAYMENT must be at least zero.")
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("PAYOFFSAGE_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where log files live."""

        data_root = os.getenv("PAYOFFSAGE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


class DevConfig(BaseConfig):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Configuration used by the test-suite."""

    DEBUG = False
    TESTING = True


__all__ = ["BaseConfig", "DevConfig", "TestConfig"]
