from __future__ import annotations

from abc import ABC, abstractmethod

from booking_adapter.application.dto.provider_messages import (
    CreateBookingRequest,
    CreateBookingResponse,
    GetCalendarAvailabilityRequest,
    GetCalendarAvailabilityResponse,
    UpdateContactDetailsRequest,
    UpdateContactDetailsResponse,
)


class ProviderPort(ABC):
    """Outbound port to the scheduling provider.

    Implementations perform exactly one round trip per call and raise
    ProviderTransportError for anything other than a well-formed 200 response.
    ``timeout`` is the caller's remaining deadline in seconds, applied to each
    phase of the exchange rather than to the call as a whole.
    """

    @abstractmethod
    def get_calendar_availability(
        self,
        request: GetCalendarAvailabilityRequest,
        timeout: float | None = None,
    ) -> GetCalendarAvailabilityResponse:
        """Fetch available slots for a postcode and reference."""
        raise NotImplementedError

    @abstractmethod
    def get_calendar_availability_point_of_sale(
        self,
        request: GetCalendarAvailabilityRequest,
        timeout: float | None = None,
    ) -> GetCalendarAvailabilityResponse:
        """Fetch available slots for a postcode and supply points."""
        raise NotImplementedError

    @abstractmethod
    def book(
        self,
        request: CreateBookingRequest,
        timeout: float | None = None,
    ) -> CreateBookingResponse:
        raise NotImplementedError

    @abstractmethod
    def book_point_of_sale(
        self,
        request: CreateBookingRequest,
        timeout: float | None = None,
    ) -> CreateBookingResponse:
        raise NotImplementedError

    @abstractmethod
    def update_contact(
        self,
        request: UpdateContactDetailsRequest,
        timeout: float | None = None,
    ) -> UpdateContactDetailsResponse:
        raise NotImplementedError

    @abstractmethod
    def health_check(self, timeout: float | None = None) -> None:
        """Raise ProviderTransportError unless the provider reports healthy."""
        raise NotImplementedError
