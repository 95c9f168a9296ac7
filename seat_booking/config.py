"""
Centralized configuration with environment variable overrides.

Storage location, seating layout and booking rules are configurable
here. Nothing is hardcoded in the storage or service logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from seat_booking.logging_context import make_session_handler

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class StorageConfig:
    """Where the serialized booking table lives."""

    storage_key: str = os.getenv("STORAGE_KEY", "seat_booking_csv_database")
    data_dir: str = os.getenv("DATA_DIR", ".seat_booking")


@dataclass(frozen=True)
class SeatingConfig:
    """Table layout: one letter per table, numbered seats around each."""

    table_letters: str = os.getenv("TABLE_LETTERS", "ABCDEF")
    seats_per_table: int = _safe_int("SEATS_PER_TABLE", "6")
    tables_per_row: int = _safe_int("TABLES_PER_ROW", "3")


@dataclass(frozen=True)
class BookingConfig:
    """Rules applied by the front end before calling the booking service."""

    min_user_id_length: int = _safe_int("MIN_USER_ID_LENGTH", "3")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    seating: SeatingConfig = field(default_factory=SeatingConfig)
    booking: BookingConfig = field(default_factory=BookingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not config.storage.storage_key.strip():
        raise ValueError("STORAGE_KEY must not be empty")

    letters = config.seating.table_letters
    if not letters:
        raise ValueError("TABLE_LETTERS must contain at least one letter")
    if not all("A" <= ch <= "Z" for ch in letters):
        raise ValueError(f"TABLE_LETTERS must be uppercase A-Z, got {letters!r}")
    if len(set(letters)) != len(letters):
        raise ValueError(f"TABLE_LETTERS must not repeat a letter, got {letters!r}")

    if not 1 <= config.seating.seats_per_table <= 9:
        raise ValueError(
            f"SEATS_PER_TABLE must be between 1 and 9, got {config.seating.seats_per_table}"
        )
    if config.seating.tables_per_row < 1:
        raise ValueError(
            f"TABLES_PER_ROW must be >= 1, got {config.seating.tables_per_row}"
        )
    if config.booking.min_user_id_length < 1:
        raise ValueError(
            f"MIN_USER_ID_LENGTH must be >= 1, got {config.booking.min_user_id_length}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[make_session_handler()],
    )
    logger.info(
        "Configuration loaded: %d tables, storage key '%s'",
        len(config.seating.table_letters),
        config.storage.storage_key,
    )
    return config


# Singleton instance
settings = load_config()
