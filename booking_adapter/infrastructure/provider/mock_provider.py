from __future__ import annotations

import logging
from datetime import date, timedelta

from booking_adapter.application.dto.provider_messages import (
    AvailabilitySlot,
    CreateBookingRequest,
    CreateBookingResponse,
    GetCalendarAvailabilityRequest,
    GetCalendarAvailabilityResponse,
    UpdateContactDetailsRequest,
    UpdateContactDetailsResponse,
)
from booking_adapter.application.ports.provider import ProviderPort
from booking_adapter.application.utils.slot_codec import encode_date, encode_time_window

MOCK_WINDOWS = ((8, 12), (12, 16))


class MockProviderClient(ProviderPort):
    """In-memory provider for local runs: canned slots, every booking confirmed."""

    def __init__(self, days: int = 5, start: date | None = None) -> None:
        self._days = days
        self._start = start
        self._bookings: dict[str, CreateBookingRequest] = {}
        self._logger = logging.getLogger(__name__)

    @property
    def bookings(self) -> dict[str, CreateBookingRequest]:
        return dict(self._bookings)

    def get_calendar_availability(
        self,
        request: GetCalendarAvailabilityRequest,
        timeout: float | None = None,
    ) -> GetCalendarAvailabilityResponse:
        return self._availability(request)

    def get_calendar_availability_point_of_sale(
        self,
        request: GetCalendarAvailabilityRequest,
        timeout: float | None = None,
    ) -> GetCalendarAvailabilityResponse:
        return self._availability(request)

    def book(
        self,
        request: CreateBookingRequest,
        timeout: float | None = None,
    ) -> CreateBookingResponse:
        return self._confirm(request, request.reference_id)

    def book_point_of_sale(
        self,
        request: CreateBookingRequest,
        timeout: float | None = None,
    ) -> CreateBookingResponse:
        return self._confirm(request, f"MOCK{len(self._bookings) + 1:06d}")

    def update_contact(
        self,
        request: UpdateContactDetailsRequest,
        timeout: float | None = None,
    ) -> UpdateContactDetailsResponse:
        self._logger.info("Mock contact details updated", extra={"reference": request.reference_id})
        return UpdateContactDetailsResponse(
            request_id=request.request_id,
            reference_id=request.reference_id,
            response_code="U01",
            response_message="Contact details updated",
        )

    def health_check(self, timeout: float | None = None) -> None:
        return None

    def _availability(self, request: GetCalendarAvailabilityRequest) -> GetCalendarAvailabilityResponse:
        first = self._start or date.today() + timedelta(days=1)
        slots: list[AvailabilitySlot] = []
        day = first
        while len(slots) < self._days * len(MOCK_WINDOWS):
            if day.weekday() < 5:
                for start_hour, end_hour in MOCK_WINDOWS:
                    slots.append(
                        AvailabilitySlot(
                            appointment_date=encode_date(day),
                            appointment_time=encode_time_window(start_hour, end_hour),
                        )
                    )
            day += timedelta(days=1)

        self._logger.info(
            "Mock availability served",
            extra={"postcode": request.post_code, "reference": request.reference_id},
        )
        return GetCalendarAvailabilityResponse(
            request_id=request.request_id,
            mpan=request.mpan,
            mprn=request.mprn,
            calendar_availability_result=slots,
        )

    def _confirm(self, request: CreateBookingRequest, reference: str) -> CreateBookingResponse:
        self._bookings[reference] = request
        self._logger.info(
            "Mock booking confirmed",
            extra={"reference": reference, "mpan": request.mpan, "mprn": request.mprn},
        )
        return CreateBookingResponse(
            request_id=request.request_id,
            reference_id=reference,
            mpan=request.mpan,
            mprn=request.mprn,
            response_code="B01",
            response_message="Booking confirmed",
        )
