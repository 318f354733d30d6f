from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class BookingSlot:
    date: date | None
    start_hour: int  # 0..23
    end_hour: int  # 0..23, after start_hour; caller-built slots are checked before sending
