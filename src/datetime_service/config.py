"""
Settings for the date-time service, read from a `.env` file and the process
environment (environment wins).

  DATETIME_DEFAULT_TZ        zone used when a call passes no timezone (UTC)
  DATETIME_DEFAULT_CALENDAR  calendar the CLI formats into (persian)
  LOG_LEVEL                  root log level for the CLI (INFO)
  LOG_FILE                   optional rotating log file
  DATETIME_SERVICE_ENV       path of the .env file itself (./.env)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from datetime_service.types.datetime_types import CalendarKind


@dataclass(frozen=True)
class Settings:
    default_timezone: str = "UTC"
    default_calendar: CalendarKind = CalendarKind.PERSIAN
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _env_path(env_path: Optional[Path]) -> Path:
    return Path(env_path or os.getenv("DATETIME_SERVICE_ENV", ".env"))


def _read_env(env_path: Optional[Path]) -> Dict[str, str]:
    path = _env_path(env_path)
    values = {k: v for k, v in dotenv_values(path).items() if v is not None} if path.is_file() else {}
    values.update(os.environ)
    return values


def load_settings(env_path: Optional[Path] = None) -> Settings:
    env = _read_env(env_path)
    calendar = CalendarKind.from_name(env.get("DATETIME_DEFAULT_CALENDAR", "persian"))
    if calendar is CalendarKind.OTHER:
        raise RuntimeError(
            f"DATETIME_DEFAULT_CALENDAR must name Persian, Hijri or Gregorian, "
            f"got {env.get('DATETIME_DEFAULT_CALENDAR')!r}"
        )
    return Settings(
        default_timezone=env.get("DATETIME_DEFAULT_TZ", "UTC").strip() or "UTC",
        default_calendar=calendar,
        log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        log_file=env.get("LOG_FILE") or None,
    )
