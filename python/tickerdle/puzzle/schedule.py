"""Deterministic daily answer selection.

The schedule is a fixed permutation of the entity list, indexed by the number of
days since ``SCHEDULE_EPOCH``. The permutation depends only on the salt, so all
instances sharing the same entity list and salt pick the same answer, and every
entity is used exactly once per ``len(entities)`` days.

Algorithm (constants must not change once a deployment is live):

* seed: 32-bit FNV-1a over the UTF-8 bytes of the salt
  (offset basis ``0x811C9DC5``, prime ``0x01000193``);
* generator: 32-bit LCG ``state = (1664525 * state + 1013904223) mod 2**32``,
  each draw yields ``state / 2**32`` in ``[0, 1)``;
* shuffle: Fisher-Yates from the last index down to 1 with
  ``j = floor(draw * (i + 1))``.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Sequence, TypeVar
from zoneinfo import ZoneInfo

from .constants import REFERENCE_TIMEZONE, SCHEDULE_EPOCH, SCHEDULE_SALT
from .errors import DataUnavailableError

T = TypeVar("T")

_UINT32_MASK = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193
_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 2**32


def hash_salt(salt: str) -> int:
    """32-bit FNV-1a hash of ``salt``."""
    value = _FNV_OFFSET_BASIS
    for byte in salt.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & _UINT32_MASK
    return value


def lcg(seed: int) -> Callable[[], float]:
    """Return a generator of floats in ``[0, 1)`` seeded with ``seed``."""
    state = seed & _UINT32_MASK

    def draw() -> float:
        nonlocal state
        state = (_LCG_MULTIPLIER * state + _LCG_INCREMENT) % _LCG_MODULUS
        return state / _LCG_MODULUS

    return draw


def shuffled(items: Sequence[T], salt: str = SCHEDULE_SALT) -> list[T]:
    """Return a salt-seeded Fisher-Yates permutation of ``items``."""
    result = list(items)
    draw = lcg(hash_salt(salt))
    for i in range(len(result) - 1, 0, -1):
        j = int(draw() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def parse_day(value: date | datetime | str, tz: str = REFERENCE_TIMEZONE) -> date:
    """Coerce ``value`` to a calendar day.

    Aware datetimes are converted to ``tz`` first; naive ones are taken as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(ZoneInfo(tz)).date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def day_number(value: date | datetime | str) -> int:
    """Days since ``SCHEDULE_EPOCH``; negative before it."""
    return (parse_day(value) - SCHEDULE_EPOCH).days


def today(tz: str = REFERENCE_TIMEZONE, now: datetime | None = None) -> date:
    """Current calendar day in the reference timezone, DST aware."""
    moment = now or datetime.now(timezone.utc)
    return parse_day(moment, tz)


def schedule_for(
    day: date | datetime | str,
    entities: Sequence[T],
    salt: str = SCHEDULE_SALT,
) -> T:
    """Return the answer for ``day``."""
    if not entities:
        raise DataUnavailableError("Cannot schedule a puzzle without entities")
    order = shuffled(entities, salt)
    # Python's modulo is already non-negative for a positive divisor.
    return order[day_number(day) % len(order)]
