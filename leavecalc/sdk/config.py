"""Configuration management for Leave Calc.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - holidays: path to the holiday file (optional, if not colocated)
   - default_output_format: "text" or "json"

2. holidays.yaml - The public holiday list workday counts skip
   - bare list of dates, or {date, name} entries
   - a .json file with the same shape also works

Config directory resolution:
1. LEAVE_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/leave-calc/ (XDG_CONFIG_HOME fallback)

Holiday file resolution:
1. settings.json "holidays" key (if set via CLI)
2. holidays.yaml in the config directory
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError

from .schemas import HolidayEntry, HolidayFile

logger = logging.getLogger(__name__)

APP_NAME = "leave-calc"
SETTINGS_FILENAME = "settings.json"
HOLIDAYS_FILENAME = "holidays.yaml"

OUTPUT_FORMATS = ("text", "json")


class ConfigNotFoundError(Exception):
    """Raised when a required configuration file is missing."""
    pass


class HolidayFileError(Exception):
    """Raised when the holiday file can't be read or fails validation."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. LEAVE_CALC_CONFIG_PATH environment variable
    2. ~/.config/leave-calc/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("LEAVE_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_output_format() -> str:
    """Default output format for CLI commands ("text" unless configured)."""
    fmt = get_setting("default_output_format", "text")
    return fmt if fmt in OUTPUT_FORMATS else "text"


def get_holidays_path(require_exists: bool = False) -> Path:
    """Get the path to the holiday file.

    Resolution order:
    1. settings.json "holidays" key (if set)
    2. holidays.yaml in config directory

    Args:
        require_exists: If True, raises ConfigNotFoundError if not found

    Returns:
        Path to the holiday file (may not exist unless require_exists)

    Raises:
        ConfigNotFoundError: If require_exists=True and the file is missing
    """
    custom = get_setting("holidays")
    if custom:
        path = Path(custom).expanduser()
        if require_exists and not path.exists():
            raise ConfigNotFoundError(
                f"Holiday file not found at configured path: {path}\n\n"
                f"Update with: leave-calc settings holidays-file /path/to/holidays.yaml"
            )
        return path

    path = get_config_dir() / HOLIDAYS_FILENAME
    if require_exists and not path.exists():
        raise ConfigNotFoundError(
            f"No holiday file found at {path}\n\n"
            f"Add one with: leave-calc holidays add YYYY-MM-DD \"Name\"\n"
            f"Or import a list: leave-calc holidays import /path/to/holidays.yaml"
        )
    return path


def _read_holiday_file(path: Path) -> Any:
    try:
        with open(path, "r") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    # ValueError covers JSON decode errors and YAML dates like 2024-13-01
    except (yaml.YAMLError, ValueError) as e:
        raise HolidayFileError(f"Could not parse holiday file {path}: {e}")


def parse_holiday_entries(raw: Any, source: str = "<data>") -> List[HolidayEntry]:
    """Validate raw holiday data and return sorted, de-duplicated entries.

    Duplicates are entries with the same date and name; the same date with
    two different names is kept twice (it still counts once as a holiday).

    Raises:
        HolidayFileError: If the data doesn't match the holiday file schema
    """
    try:
        parsed = HolidayFile.model_validate(raw)
    except ValidationError as e:
        raise HolidayFileError(f"Invalid holiday file {source}:\n{e}")

    seen = set()
    entries = []
    for entry in parsed.holidays:
        key = (entry.date, entry.name)
        if key in seen:
            continue
        seen.add(key)
        entries.append(entry)

    entries.sort(key=lambda e: (e.date, e.name))
    return entries


def load_holiday_entries(path: Optional[Path] = None) -> List[HolidayEntry]:
    """Load holiday entries from the configured holiday file.

    Returns:
        Sorted entries (empty list if the file doesn't exist)

    Raises:
        HolidayFileError: If the file is malformed
    """
    if path is None:
        path = get_holidays_path()

    if not path.exists():
        logger.debug(f"no holiday file at {path}")
        return []

    entries = parse_holiday_entries(_read_holiday_file(path), source=str(path))
    logger.debug(f"loaded {len(entries)} holiday(s) from {path}")
    return entries


def load_holidays(path: Optional[Path] = None) -> List[str]:
    """Holiday dates (YYYY-MM-DD) in the shape the workday functions take."""
    return sorted({e.date for e in load_holiday_entries(path)})


def save_holiday_entries(entries: List[HolidayEntry], path: Optional[Path] = None) -> Path:
    """Write entries to the holiday file as YAML (or JSON for .json paths).

    Returns:
        Path to the saved file
    """
    if path is None:
        path = get_holidays_path()

    path.parent.mkdir(parents=True, exist_ok=True)
    data = [e.model_dump() for e in sorted(entries, key=lambda e: (e.date, e.name))]

    with open(path, "w") as f:
        if path.suffix.lower() == ".json":
            json.dump(data, f, indent=2)
        else:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    return path


def add_holiday(date_iso: str, name: str = "Holiday", path: Optional[Path] = None) -> List[HolidayEntry]:
    """Add a holiday (no-op if that date+name is already listed).

    Raises:
        HolidayFileError: If date_iso is not a valid YYYY-MM-DD date
    """
    try:
        new_entry = HolidayEntry(date=date_iso, name=name)
    except ValidationError as e:
        raise HolidayFileError(str(e))

    entries = load_holiday_entries(path)
    if any(e.date == new_entry.date and e.name == new_entry.name for e in entries):
        return entries

    entries.append(new_entry)
    save_holiday_entries(entries, path)
    return load_holiday_entries(path)


def remove_holiday(date_iso: str, path: Optional[Path] = None) -> int:
    """Remove every entry on date_iso. Returns the number removed."""
    entries = load_holiday_entries(path)
    kept = [e for e in entries if e.date != date_iso]
    removed = len(entries) - len(kept)
    if removed:
        save_holiday_entries(kept, path)
    return removed


def import_holidays(source: Path, replace: bool = False, path: Optional[Path] = None) -> List[HolidayEntry]:
    """Merge (or with replace=True, swap in) holidays from another file.

    Returns:
        The resulting entry list

    Raises:
        HolidayFileError: If the source file is malformed
    """
    incoming = parse_holiday_entries(_read_holiday_file(source), source=str(source))
    existing = [] if replace else load_holiday_entries(path)
    merged = parse_holiday_entries([e.model_dump() for e in existing + incoming])
    save_holiday_entries(merged, path)
    logger.debug(f"imported {len(incoming)} holiday(s) from {source}")
    return merged
