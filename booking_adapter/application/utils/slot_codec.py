from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timezone

from booking_adapter.application.exceptions import (
    InvalidDateError,
    InvalidSlotDateError,
    InvalidSlotError,
    InvalidTimeError,
)
from booking_adapter.domain.entities.booking_slot import BookingSlot

DATE_PATTERN = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
HOUR_PATTERN = re.compile(r"^\d+$")
MAX_HOUR = 23


def encode_date(value: date) -> str:
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def encode_time_window(start_hour: int, end_hour: int) -> str:
    return f"{start_hour:02d}:00-{end_hour:02d}:00"


def encode_slot(slot: BookingSlot) -> tuple[str, str]:
    """Encode a slot to the provider's (date, time window) string pair.

    Raises InvalidSlotDateError when the slot carries no date.
    """
    if slot.date is None:
        raise InvalidSlotDateError()
    return encode_date(slot.date), encode_time_window(slot.start_hour, slot.end_hour)


def format_created_date(now: datetime | None = None) -> str:
    """Envelope timestamp, DD/MM/YYYY HH:MM:SS in UTC."""
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is not None:
        current = current.astimezone(timezone.utc)
    return current.strftime("%d/%m/%Y %H:%M:%S")


def decode_date(value: str) -> date:
    match = DATE_PATTERN.match(value.strip())
    if not match:
        raise InvalidDateError(f'parsing time "{value}": expected DD/MM/YYYY')

    day, month, year = (int(part) for part in match.groups())
    if year < 1:
        raise InvalidDateError(f'parsing time "{value}": year out of range')
    if not 1 <= month <= 12:
        raise InvalidDateError(f'parsing time "{value}": month out of range')
    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        raise InvalidDateError(f'parsing time "{value}": day out of range')
    return date(year, month, day)


def _decode_hour(token: str) -> int:
    # Minutes are discarded: "10:30" decodes to hour 10.
    hour_part = token.strip().split(":", 1)[0]
    if not HOUR_PATTERN.match(hour_part):
        raise InvalidTimeError("expected integer")
    return int(hour_part)


def decode_time_window(value: str) -> tuple[int, int]:
    tokens = value.split("-")
    start = _decode_hour(tokens[0])
    if len(tokens) != 2:
        raise InvalidTimeError(f'could not find start and end time: "{value}"')
    end = _decode_hour(tokens[1])

    if not 0 <= start <= MAX_HOUR:
        raise InvalidTimeError(f'invalid start time: "{value}"')
    if not 0 <= end <= MAX_HOUR:
        raise InvalidTimeError(f'invalid end time: "{value}"')
    if start >= end:
        raise InvalidTimeError(f'invalid appointment time: "{value}"')
    return start, end


def decode_slot(date_value: str | None, time_value: str | None) -> BookingSlot:
    """Decode a provider (date, time window) pair into a BookingSlot.

    Presence is checked before any field is parsed: no date and no window is
    InvalidSlotError, a window without a date is InvalidSlotDateError.
    """
    date_value = (date_value or "").strip()
    time_value = (time_value or "").strip()
    if not date_value and not time_value:
        raise InvalidSlotError()
    if not date_value:
        raise InvalidSlotDateError()

    slot_date = decode_date(date_value)
    start_hour, end_hour = decode_time_window(time_value)
    return BookingSlot(date=slot_date, start_hour=start_hour, end_hour=end_hour)
