"""Inbound booking API: map, call the provider, map back, classify failures.

Every failure leaves this module as an ``RpcError``. Nothing is retried.

Known gap: when a booking call times out after the provider has committed
the booking, the caller sees a failure and cannot tell it apart from a
booking that never arrived. Callers must not assume a failed
``create_booking`` left nothing behind.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, TypeVar

from booking_adapter.application.exceptions import (
    AppointmentAlreadyExistsError,
    AppointmentNotFoundError,
    AppointmentOutOfRangeError,
    BookingAdapterError,
    InvalidRequestError,
    InvalidSlotDateError,
    InvalidSlotError,
    ProviderTransportError,
)
from booking_adapter.application.ports.metrics import MetricsRecorder, NoopMetricsRecorder
from booking_adapter.application.ports.provider import ProviderPort
from booking_adapter.application.status import RpcError, StatusCode
from booking_adapter.application.use_cases.protocol_mapper import ProtocolMapper
from booking_adapter.application.utils.error_classifier import classify_transport_error
from booking_adapter.domain.entities.booking import (
    AvailableSlotsPointOfSaleRequest,
    AvailableSlotsRequest,
    AvailableSlotsResponse,
    CreateBookingPointOfSaleRequest,
    CreateBookingRequest,
    CreateBookingResponse,
    UpdateContactDetailsRequest,
    UpdateContactDetailsResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

GET_AVAILABLE_SLOTS = "get available slots"
GET_AVAILABLE_SLOTS_POINT_OF_SALE = "get available slots point of sale"
CREATE_BOOKING = "booking"
CREATE_BOOKING_POINT_OF_SALE = "booking point of sale"
UPDATE_CONTACT_DETAILS = "update contact details"

ERROR_STATUSES: tuple[tuple[type[BookingAdapterError], StatusCode], ...] = (
    (InvalidSlotError, StatusCode.INVALID_ARGUMENT),
    (InvalidSlotDateError, StatusCode.INVALID_ARGUMENT),
    (InvalidRequestError, StatusCode.INVALID_ARGUMENT),
    (AppointmentNotFoundError, StatusCode.NOT_FOUND),
    (AppointmentOutOfRangeError, StatusCode.OUT_OF_RANGE),
    (AppointmentAlreadyExistsError, StatusCode.ALREADY_EXISTS),
)


def new_request_id() -> int:
    return random.getrandbits(32)


def status_for_error(error: BaseException) -> StatusCode:
    for error_type, status in ERROR_STATUSES:
        if isinstance(error, error_type):
            return status
    return StatusCode.INTERNAL


class BookingGateway:
    def __init__(
        self,
        provider: ProviderPort,
        mapper: ProtocolMapper,
        metrics: MetricsRecorder | None = None,
        request_ids: Callable[[], int] | None = None,
    ) -> None:
        self._provider = provider
        self._mapper = mapper
        self._metrics = metrics or NoopMetricsRecorder()
        self._request_ids = request_ids or new_request_id

    def get_available_slots(
        self, request: AvailableSlotsRequest, timeout: float | None = None
    ) -> AvailableSlotsResponse:
        request_id = self._request_ids()

        def call() -> AvailableSlotsResponse:
            envelope = self._mapper.availability_request(request_id, request)
            response = self._provider.get_calendar_availability(envelope, timeout=timeout)
            return self._mapper.available_slots_response(response)

        return self._run(
            GET_AVAILABLE_SLOTS,
            call,
            {"request_id": request_id, "reference": request.reference, "postcode": request.postcode},
        )

    def get_available_slots_point_of_sale(
        self, request: AvailableSlotsPointOfSaleRequest, timeout: float | None = None
    ) -> AvailableSlotsResponse:
        request_id = self._request_ids()

        def call() -> AvailableSlotsResponse:
            envelope = self._mapper.availability_request(request_id, request)
            response = self._provider.get_calendar_availability_point_of_sale(envelope, timeout=timeout)
            return self._mapper.available_slots_response(response)

        return self._run(
            GET_AVAILABLE_SLOTS_POINT_OF_SALE,
            call,
            {"request_id": request_id, "postcode": request.postcode, "mpan": request.mpan, "mprn": request.mprn},
        )

    def create_booking(
        self, request: CreateBookingRequest, timeout: float | None = None
    ) -> CreateBookingResponse:
        request_id = self._request_ids()

        def call() -> CreateBookingResponse:
            envelope = self._mapper.booking_request(request_id, request)
            response = self._provider.book(envelope, timeout=timeout)
            return self._mapper.booking_response(response)

        return self._run(
            CREATE_BOOKING,
            call,
            {"request_id": request_id, "reference": request.reference, "postcode": request.postcode},
        )

    def create_booking_point_of_sale(
        self, request: CreateBookingPointOfSaleRequest, timeout: float | None = None
    ) -> CreateBookingResponse:
        request_id = self._request_ids()

        def call() -> CreateBookingResponse:
            envelope = self._mapper.booking_request(request_id, request)
            response = self._provider.book_point_of_sale(envelope, timeout=timeout)
            return self._mapper.booking_response(response)

        return self._run(
            CREATE_BOOKING_POINT_OF_SALE,
            call,
            {
                "request_id": request_id,
                "postcode": request.site_address.postcode,
                "mpan": request.mpan,
                "mprn": request.mprn,
            },
        )

    def update_contact_details(
        self, request: UpdateContactDetailsRequest, timeout: float | None = None
    ) -> UpdateContactDetailsResponse:
        request_id = self._request_ids()

        def call() -> UpdateContactDetailsResponse:
            envelope = self._mapper.update_contact_details_request(request_id, request)
            response = self._provider.update_contact(envelope, timeout=timeout)
            return self._mapper.update_contact_details_response(response)

        return self._run(
            UPDATE_CONTACT_DETAILS,
            call,
            {"request_id": request_id, "reference": request.reference},
        )

    def _run(self, operation: str, call: Callable[[], T], context: dict[str, object]) -> T:
        try:
            return call()
        except ProviderTransportError as e:
            raise self._rpc_error(operation, classify_transport_error(e), context) from e
        except BookingAdapterError as e:
            raise self._rpc_error(operation, e, context) from e
        except Exception as e:
            logger.exception("Unexpected error in booking gateway", extra={"operation": operation, **context})
            raise self._rpc_error(operation, e, context) from e

    def _rpc_error(self, operation: str, error: Exception, context: dict[str, object]) -> RpcError:
        status = status_for_error(error)
        parameter = error.parameter if isinstance(error, InvalidRequestError) else None
        message = f"error making {operation} request: {error}"

        self._metrics.record_error(type(error).__name__, operation)
        logger.error(message, extra={"operation": operation, "status": status.value, "error": str(error), **context})
        return RpcError(status, message, parameter)
