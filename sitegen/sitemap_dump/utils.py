import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from dateutil import parser
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta
from django.urls import reverse
from django.utils import timezone
from django.utils.module_loading import import_string

RELATIVE_UNITS = {
    "sec": "seconds",
    "second": "seconds",
    "min": "minutes",
    "minute": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}

WEEKDAYS = {
    "monday": MO,
    "mon": MO,
    "tuesday": TU,
    "tue": TU,
    "wednesday": WE,
    "wed": WE,
    "thursday": TH,
    "thu": TH,
    "friday": FR,
    "fri": FR,
    "saturday": SA,
    "sat": SA,
    "sunday": SU,
    "sun": SU,
}

RELATIVE_EXPRESSION = re.compile(
    r"^(?:\s*[+-]?\d+\s*[a-z]+\s*)+(?:ago)?\s*$", re.IGNORECASE
)
RELATIVE_PART = re.compile(r"([+-]?\d+)\s*([a-z]+)", re.IGNORECASE)
LAST_OR_NEXT = re.compile(r"^(last|next)\s+([a-z]+)$", re.IGNORECASE)


def reverse_path(route_name: str, params: dict[str, Any] | None = None) -> str:
    """Resolve a named route to an absolute path, e.g. "/blog/my-slug".

    Raises NoReverseMatch for unknown routes or unusable parameters.
    """
    return reverse(route_name, kwargs=params or None)


def read_property(obj: Any, path: str) -> Any:
    """Read a dotted property path off an object.

    Each segment is looked up as a key on mappings and as an attribute on
    anything else. Methods met along the way are called without arguments,
    so "get_absolute_url" or "author.get_full_name" work too.

    :param obj: The object to read from, usually a model instance
    :param path: The dotted path, e.g. "author.username"
    :return: The value at the end of the path
    :raises AttributeError: If any segment of the path can't be read
    """
    value = obj
    for segment in path.split("."):
        if isinstance(value, Mapping):
            if segment not in value:
                raise AttributeError(
                    f"Key '{segment}' of '{path}' not found on {obj!r}"
                )
            value = value[segment]
        else:
            try:
                value = getattr(value, segment)
            except AttributeError as e:
                raise AttributeError(
                    f"Attribute '{segment}' of '{path}' not found on {obj!r}"
                ) from e

        if callable(value) and not isinstance(value, type):
            try:
                value = value()
            except TypeError as e:
                raise AttributeError(
                    f"Method '{segment}' of '{path}' can't be called without "
                    f"arguments"
                ) from e
    return value


def _as_delta(amount: int, unit: str) -> relativedelta:
    unit = unit.lower()
    if unit not in RELATIVE_UNITS and unit.endswith("s"):
        unit = unit[:-1]
    if unit == "fortnight":
        return relativedelta(weeks=2 * amount)
    if unit not in RELATIVE_UNITS:
        raise ValueError(f"Unknown time unit '{unit}'")
    return relativedelta(**{RELATIVE_UNITS[unit]: amount})


def parse_relative_time(
    expression: str, now: datetime | None = None
) -> datetime:
    """Turn a relative time expression into a datetime.

    Understands "now", "today", "yesterday", "tomorrow", "last week",
    "next month", "last monday", "next fri", offsets like "-1 week",
    "+2 days 3 hours" or "3 days ago",
    and falls back to absolute dates such as "2024-01-15".

    :param expression: The expression to parse
    :param now: The moment the expression is relative to, defaults to now
    :return: A datetime, timezone-aware when USE_TZ is on
    :raises ValueError: If the expression can't be understood
    """
    now = now or timezone.now()
    text = expression.strip().lower()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if text == "now":
        return now
    if text == "today":
        return midnight
    if text == "yesterday":
        return midnight - relativedelta(days=1)
    if text == "tomorrow":
        return midnight + relativedelta(days=1)

    match = LAST_OR_NEXT.match(text)
    if match:
        direction, unit = match.groups()
        if unit in WEEKDAYS:
            # The closest such day strictly before or after today, at midnight
            if direction == "last":
                return midnight + relativedelta(
                    days=-1, weekday=WEEKDAYS[unit](-1)
                )
            return midnight + relativedelta(
                days=1, weekday=WEEKDAYS[unit](+1)
            )
        return now + _as_delta(-1 if direction == "last" else 1, unit)

    if RELATIVE_EXPRESSION.match(text):
        delta = relativedelta()
        for amount, unit in RELATIVE_PART.findall(text):
            delta += _as_delta(int(amount), unit)
        if text.endswith("ago"):
            delta = -delta
        return now + delta

    try:
        moment = parser.parse(expression)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Can't parse time expression '{expression}'") from e
    if timezone.is_naive(moment) and timezone.is_aware(now):
        moment = timezone.make_aware(moment)
    return moment


def make_providers_list(dotted_paths: list[str]) -> list[Any]:
    """Import and instantiate the provider classes listed by dotted path."""
    return [import_string(path)() for path in dotted_paths]
