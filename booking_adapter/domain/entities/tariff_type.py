from enum import Enum


class TariffType(str, Enum):
    UNKNOWN = "unknown"
    CREDIT = "credit"
    PREPAYMENT = "prepayment"
