"""
Centralized configuration with environment variable overrides.

Clinic defaults for working hours, appointment length, buffer time and the
advance-booking window live here. The dashboard's settings screen starts
from these values and may override them per session.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime

from dotenv import load_dotenv

from dentalcare.logging_context import SessionIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

# Options offered by the settings screen
DURATION_OPTIONS = (15, 30, 45, 60)
BUFFER_OPTIONS = (0, 5, 10, 15)
ADVANCE_BOOKING_OPTIONS = (7, 14, 30, 60)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_clock_time(env_var: str, default: str) -> str:
    """Read an HH:MM value from an env var, rejecting anything else."""
    raw = os.getenv(env_var, default)
    try:
        datetime.strptime(raw.strip(), "%H:%M")
    except (ValueError, AttributeError):
        raise ValueError(
            f"Invalid HH:MM time for {env_var}: {raw!r}"
        ) from None
    return raw.strip()


@dataclass(frozen=True)
class ClinicConfig:
    """Clinic identity and weekly opening hours."""

    name: str = os.getenv("CLINIC_NAME", "DentalCare Clinic")
    weekday_start: str = _safe_clock_time("WEEKDAY_START", "09:00")
    weekday_end: str = _safe_clock_time("WEEKDAY_END", "17:00")
    saturday_start: str = _safe_clock_time("SATURDAY_START", "09:00")
    saturday_end: str = _safe_clock_time("SATURDAY_END", "14:00")
    sunday_enabled: bool = os.getenv("SUNDAY_ENABLED", "false").lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class AppointmentConfig:
    """Slot length, turnaround buffer and booking window."""

    duration_minutes: int = _safe_int("APPOINTMENT_DURATION", "30")
    buffer_minutes: int = _safe_int("BUFFER_TIME", "15")
    max_advance_days: int = _safe_int("MAX_ADVANCE_BOOKING", "30")
    lunch_break_start: str = _safe_clock_time("LUNCH_BREAK_START", "12:00")
    lunch_break_end: str = _safe_clock_time("LUNCH_BREAK_END", "13:00")


@dataclass(frozen=True)
class DashboardConfig:
    """Display limits for the doctor dashboard."""

    upcoming_limit: int = _safe_int("UPCOMING_LIMIT", "5")
    recent_activity_limit: int = _safe_int("RECENT_ACTIVITY_LIMIT", "3")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    clinic: ClinicConfig = field(default_factory=ClinicConfig)
    appointments: AppointmentConfig = field(default_factory=AppointmentConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    appt = config.appointments
    if appt.duration_minutes not in DURATION_OPTIONS:
        raise ValueError(
            f"APPOINTMENT_DURATION must be one of {DURATION_OPTIONS}, got {appt.duration_minutes}"
        )
    if appt.buffer_minutes not in BUFFER_OPTIONS:
        raise ValueError(
            f"BUFFER_TIME must be one of {BUFFER_OPTIONS}, got {appt.buffer_minutes}"
        )
    if appt.max_advance_days not in ADVANCE_BOOKING_OPTIONS:
        raise ValueError(
            "MAX_ADVANCE_BOOKING must be one of "
            f"{ADVANCE_BOOKING_OPTIONS}, got {appt.max_advance_days}"
        )
    if appt.lunch_break_start >= appt.lunch_break_end:
        raise ValueError(
            "LUNCH_BREAK_START must be before LUNCH_BREAK_END, "
            f"got {appt.lunch_break_start}-{appt.lunch_break_end}"
        )

    for label, start, end in [
        ("WEEKDAY", config.clinic.weekday_start, config.clinic.weekday_end),
        ("SATURDAY", config.clinic.saturday_start, config.clinic.saturday_end),
    ]:
        if start >= end:
            raise ValueError(f"{label}_START must be before {label}_END, got {start}-{end}")

    if config.dashboard.upcoming_limit < 1:
        raise ValueError(
            f"UPCOMING_LIMIT must be >= 1, got {config.dashboard.upcoming_limit}"
        )
    if config.dashboard.recent_activity_limit < 1:
        raise ValueError(
            "RECENT_ACTIVITY_LIMIT must be >= 1, "
            f"got {config.dashboard.recent_activity_limit}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    handler = logging.StreamHandler()
    handler.addFilter(SessionIdFilter())
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(session_id)s] [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
    )
    logger.info("Configuration loaded for '%s'", config.clinic.name)
    return config


# Singleton instance
settings = load_config()
