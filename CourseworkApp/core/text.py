"""Small text and record formatting helpers."""

from collections.abc import Iterable
from typing import Any

from django.utils.translation import ngettext

_UNITS: list[tuple[int, str, str]] = [
    (604800, "week", "weeks"),
    (86400, "day", "days"),
    (3600, "hour", "hours"),
    (60, "minute", "minutes"),
    (1, "second", "seconds"),
]


def seconds_to_string(seconds: int) -> str:
    """Render a number of seconds as a human readable string, e.g. '1 week, 2 days'.

    Zero-valued units are omitted; zero seconds gives an empty string.
    """
    parts = []
    seconds = int(seconds)
    for divisor, singular, plural in _UNITS:
        count, seconds = divmod(seconds, divisor)
        if count:
            parts.append(f"{count} {ngettext(singular, plural, count)}")
    return ", ".join(parts)


def records_to_menu(records: Iterable[Any] | None, key_field: str, value_field: str) -> dict[Any, Any]:
    """Map `key_field` to `value_field` for each record (later records win on duplicate keys)."""
    menu: dict[Any, Any] = {}
    for record in records or ():
        menu[getattr(record, key_field)] = getattr(record, value_field)
    return menu
