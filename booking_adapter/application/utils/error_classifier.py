"""Classify provider failures into domain errors and error codes.

Two independent sources are handled:

* provider response codes carried inside a 200 response body
  (``classify_availability_code`` / ``classify_booking_code``), which become
  structured error codes on the canonical response;
* transport failures (``classify_status`` / ``classify_transport_error``),
  where a status code plus an optional parameter detail becomes a
  ``BookingAdapterError``.

Everything here is a pure function. Nothing retries.
"""

from __future__ import annotations

from typing import Any, Callable

from booking_adapter.application.exceptions import (
    AppointmentAlreadyExistsError,
    AppointmentNotFoundError,
    AppointmentOutOfRangeError,
    BookingAdapterError,
    InternalError,
    InvalidRequestError,
    ProviderTransportError,
    UnhandledErrorCodeError,
)
from booking_adapter.application.status import StatusCode
from booking_adapter.domain.entities.error_codes import (
    AvailabilityErrorCode,
    BookingErrorCode,
    InvalidParameter,
)

# EA01 - No available slots for requested postcode
# EA02 - Unable to identify postcode
# EA03 - Postcode/reference combination invalid, or request outside agreed time parameter
AVAILABILITY_CODES: dict[str, AvailabilityErrorCode] = {
    "EA01": AvailabilityErrorCode.NO_AVAILABLE_SLOTS,
    "EA02": AvailabilityErrorCode.INVALID_REQUEST,
    "EA03": AvailabilityErrorCode.INVALID_REQUEST,
}

BOOKING_SUCCESS_CODES = frozenset({"B01", "R01"})

BOOKING_CODES: dict[str, BookingErrorCode] = {
    # Appointment not available
    "B02": BookingErrorCode.APPOINTMENT_UNAVAILABLE,
    "R02": BookingErrorCode.APPOINTMENT_UNAVAILABLE,
    # Invalid job type code, MPAN, MPRN, appointment date or time
    "B03": BookingErrorCode.INVALID_REQUEST,
    "B04": BookingErrorCode.INVALID_REQUEST,
    "B05": BookingErrorCode.INVALID_REQUEST,
    "B06": BookingErrorCode.INVALID_REQUEST,
    "B07": BookingErrorCode.INVALID_REQUEST,
    "R03": BookingErrorCode.INVALID_REQUEST,
    "R04": BookingErrorCode.INVALID_REQUEST,
    "R05": BookingErrorCode.INVALID_REQUEST,
    "R06": BookingErrorCode.INVALID_REQUEST,
    "R07": BookingErrorCode.INVALID_REQUEST,
    # Invalid reference id
    "B13": BookingErrorCode.INVALID_REQUEST,
    "R12": BookingErrorCode.INVALID_REQUEST,
    # Duplicate elec/gas job exists
    "B08": BookingErrorCode.DUPLICATE_JOB_EXISTS,
    "R08": BookingErrorCode.DUPLICATE_JOB_EXISTS,
}

# B09/R09 share one code for several conditions; the message tells them apart.
BOOKING_MESSAGES: dict[str, BookingErrorCode] = {
    "no available slots for requested postcode": BookingErrorCode.NO_AVAILABLE_SLOTS,
    "site status not suitable for request": BookingErrorCode.INVALID_SITE,
    "not available as site is complete": BookingErrorCode.INVALID_SITE,
    "the site is currently on hold": BookingErrorCode.INVALID_SITE,
    "post code is missing or invalid": BookingErrorCode.POSTCODE_REFERENCE_MISMATCH,
    "postcode and reference id mismatch": BookingErrorCode.POSTCODE_REFERENCE_MISMATCH,
    "no jobs found for reference id": BookingErrorCode.POSTCODE_REFERENCE_MISMATCH,
}

STATUS_ERRORS: dict[StatusCode, Callable[[], BookingAdapterError]] = {
    StatusCode.NOT_FOUND: AppointmentNotFoundError,
    StatusCode.OUT_OF_RANGE: AppointmentOutOfRangeError,
    StatusCode.ALREADY_EXISTS: AppointmentAlreadyExistsError,
    StatusCode.INTERNAL: InternalError,
}

HTTP_STATUSES: dict[int, StatusCode] = {
    400: StatusCode.INVALID_ARGUMENT,
    401: StatusCode.UNAUTHENTICATED,
    403: StatusCode.PERMISSION_DENIED,
    404: StatusCode.NOT_FOUND,
    409: StatusCode.ALREADY_EXISTS,
    416: StatusCode.OUT_OF_RANGE,
    422: StatusCode.INVALID_ARGUMENT,
    500: StatusCode.INTERNAL,
    503: StatusCode.UNAVAILABLE,
    504: StatusCode.DEADLINE_EXCEEDED,
}

PARAMETER_KEYS = ("Parameter", "parameter", "InvalidParameter", "invalid_parameter")


def classify_availability_code(response_code: str | None, response_message: str = "") -> AvailabilityErrorCode | None:
    """Return None for success, otherwise the availability error code.

    Unknown codes are never treated as success.
    """
    code = (response_code or "").strip()
    if not code:
        return None
    return AVAILABILITY_CODES.get(code, AvailabilityErrorCode.INTERNAL_ERROR)


def classify_booking_code(response_code: str | None, response_message: str = "") -> BookingErrorCode | None:
    code = (response_code or "").strip()
    if code in BOOKING_SUCCESS_CODES:
        return None
    if code in BOOKING_CODES:
        return BOOKING_CODES[code]
    if code in ("B09", "R09"):
        message = (response_message or "").strip().lower()
        return BOOKING_MESSAGES.get(message, BookingErrorCode.INTERNAL_ERROR)
    return BookingErrorCode.INTERNAL_ERROR


def classify_status(status: StatusCode, parameter: InvalidParameter | None = None) -> BookingAdapterError:
    if status is StatusCode.INVALID_ARGUMENT:
        return InvalidRequestError(parameter)
    factory = STATUS_ERRORS.get(status)
    if factory is None:
        return UnhandledErrorCodeError()
    return factory()


def status_from_http(http_status: int | None) -> StatusCode:
    if http_status is None:
        return StatusCode.UNAVAILABLE
    return HTTP_STATUSES.get(http_status, StatusCode.UNKNOWN)


def extract_invalid_parameter(payload: Any) -> InvalidParameter | None:
    """Best-effort lookup of a parameter detail in a provider error body."""
    if isinstance(payload, list):
        for item in payload:
            parameter = extract_invalid_parameter(item)
            if parameter is not None:
                return parameter
        return None
    if not isinstance(payload, dict):
        return None

    for key in PARAMETER_KEYS:
        value = payload.get(key)
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", " ")
            for parameter in InvalidParameter:
                if parameter.value == normalized:
                    return parameter
    for key in ("details", "Details", "error", "Error"):
        if key in payload:
            parameter = extract_invalid_parameter(payload[key])
            if parameter is not None:
                return parameter
    return None


def classify_transport_error(exc: ProviderTransportError) -> BookingAdapterError:
    status = status_from_http(exc.status_code)
    parameter = extract_invalid_parameter(exc.payload) if status is StatusCode.INVALID_ARGUMENT else None
    return classify_status(status, parameter)
