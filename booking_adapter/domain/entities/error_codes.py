from enum import Enum


class AvailabilityErrorCode(str, Enum):
    NO_AVAILABLE_SLOTS = "no_available_slots"
    INVALID_REQUEST = "invalid_request"
    INTERNAL_ERROR = "internal_error"


class BookingErrorCode(str, Enum):
    APPOINTMENT_UNAVAILABLE = "appointment_unavailable"
    DUPLICATE_JOB_EXISTS = "duplicate_job_exists"
    INVALID_SITE = "invalid_site"
    POSTCODE_REFERENCE_MISMATCH = "postcode_reference_mismatch"
    INVALID_REQUEST = "invalid_request"
    NO_AVAILABLE_SLOTS = "no_available_slots"
    INTERNAL_ERROR = "internal_error"


class InvalidParameter(str, Enum):
    POSTCODE = "postcode"
    REFERENCE = "reference"
    SITE = "site"
    APPOINTMENT_DATE = "appointment date"
    APPOINTMENT_TIME = "appointment time"
    MPAN = "mpan"
    MPRN = "mprn"
