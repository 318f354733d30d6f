from __future__ import annotations

from typing import Any

from booking_adapter.domain.entities.error_codes import InvalidParameter


class BookingAdapterError(RuntimeError):
    """Base class for every domain error the mapper and gateway produce."""

    default_message = "booking adapter error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InvalidSlotError(BookingAdapterError):
    """Raised when a booking slot is missing entirely."""

    default_message = "invalid booking slot"


class InvalidSlotDateError(BookingAdapterError):
    """Raised when a booking slot carries a window but no date."""

    default_message = "invalid booking slot date"


class InvalidDateError(BookingAdapterError):
    """Raised when a provider date string is malformed or impossible."""

    default_message = "invalid date"


class InvalidTimeError(BookingAdapterError):
    """Raised when a provider time window is malformed or out of range."""

    default_message = "invalid time"


class InvalidRequestError(BookingAdapterError):
    """Raised when the provider rejected a request parameter."""

    def __init__(self, parameter: InvalidParameter | str | None = None) -> None:
        self.parameter = parameter
        if parameter is None:
            super().__init__("invalid request")
        else:
            label = parameter.value if isinstance(parameter, InvalidParameter) else parameter
            super().__init__(f"invalid request [{label}]")


class AppointmentNotFoundError(BookingAdapterError):
    default_message = "no appointments found"


class AppointmentOutOfRangeError(BookingAdapterError):
    default_message = "appointment out of range"


class AppointmentAlreadyExistsError(BookingAdapterError):
    default_message = "appointment already exists"


class InternalError(BookingAdapterError):
    default_message = "internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(f"{self.default_message} [{detail}]" if detail else None)


class UnhandledErrorCodeError(BookingAdapterError):
    default_message = "error code not handled"


class InvalidTariffTypeError(BookingAdapterError):
    """Raised when a supply point is given without a credit/prepayment tariff."""

    def __init__(self, fuel: str) -> None:
        self.fuel = fuel
        super().__init__(f"invalid {fuel} tariff type")


class ProviderTransportError(RuntimeError):
    """Raised by the provider client for any failed HTTP exchange.

    Carries the HTTP status and the parsed error body when the provider
    answered at all; both are None for connection failures and timeouts.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str,
        status_code: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code
        self.payload = payload
