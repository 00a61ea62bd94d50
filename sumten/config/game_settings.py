"""
Game Rules Constants Module

Defines the fixed rules of the game and the bounds that admin-supplied
settings must respect. Unlike app_config.py these values are not read from
the environment: changing them changes the game itself.
"""

from typing import Any, Dict, Final, Mapping, Optional

TARGET_SUM: Final[int] = 10
"""A selection clears its cells only when their values add up to this."""

MIN_CELL_VALUE: Final[int] = 1
MAX_CELL_VALUE: Final[int] = 9
CLEARED_CELL: Final[int] = 0

MAX_NAME_LENGTH: Final[int] = 15
DEFAULT_NAME_PREFIX: Final[str] = "Player"

# Inclusive bounds for admin settings
SETTINGS_BOUNDS: Final[Dict[str, tuple]] = {
    'rows': (1, 30),
    'cols': (1, 40),
    'duration': (5, 3600),
}

# Inclusive bounds for the pre-round countdown, in ticks
COUNTDOWN_BOUNDS: Final[tuple] = (1, 60)


def _parse_int(value: Any) -> Optional[int]:
    """Parse an int the way a form field would arrive, or return None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def parse_settings_update(data: Any) -> Dict[str, int]:
    """
    Extracts the valid fields of an admin settings request.

    Each of ``rows``, ``cols`` and ``duration`` is optional. A field is kept
    only if it parses as an integer inside its SETTINGS_BOUNDS range; any
    other field is dropped so the previous value stays in effect.

    Args:
        data: Raw payload received from the client

    Returns:
        dict: Mapping of accepted field name to its integer value (may be empty)
    """
    if not isinstance(data, Mapping):
        return {}

    accepted = {}
    for field, (low, high) in SETTINGS_BOUNDS.items():
        if field not in data or data[field] in (None, ''):
            continue
        value = _parse_int(data[field])
        if value is not None and low <= value <= high:
            accepted[field] = value
    return accepted


def validate_game_settings(rows: int, cols: int, duration: int) -> bool:
    """
    Validates a complete settings triple against SETTINGS_BOUNDS.

    Raises:
        ValueError: If any value is outside its allowed range
    """
    for field, value in (('rows', rows), ('cols', cols), ('duration', duration)):
        low, high = SETTINGS_BOUNDS[field]
        if not isinstance(value, int) or not low <= value <= high:
            raise ValueError(f"Setting '{field}' must be an integer between {low} and {high}, got {value!r}")
    return True


def validate_countdown_seconds(seconds: int) -> bool:
    """
    Validates the pre-round countdown length against COUNTDOWN_BOUNDS.

    Raises:
        ValueError: If the countdown would not tick down from at least 1
    """
    low, high = COUNTDOWN_BOUNDS
    if isinstance(seconds, bool) or not isinstance(seconds, int) or not low <= seconds <= high:
        raise ValueError(f"Countdown must be an integer between {low} and {high}, got {seconds!r}")
    return True
