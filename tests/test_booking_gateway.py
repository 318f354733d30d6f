"""
Tests for the booking gateway facade against a fake provider.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from booking_adapter.application.dto import provider_messages as wire
from booking_adapter.application.exceptions import ProviderTransportError

from booking_adapter.application.status import RpcError, StatusCode
from booking_adapter.application.use_cases.booking_gateway import BookingGateway
from booking_adapter.application.use_cases.protocol_mapper import ProtocolMapper
from booking_adapter.domain.entities.booking import (
    AvailableSlotsPointOfSaleRequest,
    AvailableSlotsRequest,
    CreateBookingPointOfSaleRequest,
    CreateBookingRequest,
    UpdateContactDetailsRequest,
)
from booking_adapter.domain.entities.booking_slot import BookingSlot
from booking_adapter.domain.entities.error_codes import BookingErrorCode, InvalidParameter
from booking_adapter.domain.entities.tariff_type import TariffType
from tests.fakes import FakeProvider, RecordingMetrics

SLOT = BookingSlot(date=date(2023, 12, 1), start_hour=10, end_hour=12)


def make_gateway(provider, metrics=None):
    mapper = ProtocolMapper(
        sending_system="UW",
        receiving_system="LB",
        electricity_job_type_codes={TariffType.CREDIT: "EC"},
        clock=lambda: datetime(2023, 11, 20, tzinfo=timezone.utc),
    )
    return BookingGateway(provider=provider, mapper=mapper, metrics=metrics, request_ids=lambda: 1234)


def test_get_available_slots_success():
    provider = FakeProvider(
        response=wire.GetCalendarAvailabilityResponse(
            calendar_availability_result=[
                wire.AvailabilitySlot(appointment_date="01/12/2023", appointment_time="10:00-12:00")
            ]
        )
    )

    result = make_gateway(provider).get_available_slots(
        AvailableSlotsRequest(postcode="E2 1ZZ", reference="ref-1"), timeout=5.0
    )

    assert result.slots == [SLOT]
    name, envelope, timeout = provider.calls[0]
    assert name == "availability"
    assert envelope.request_id == "1234"
    assert timeout == 5.0


def test_transport_not_found_on_availability():
    """Test that a provider 404 surfaces as NOT_FOUND with the operation prefix."""
    metrics = RecordingMetrics()
    provider = FakeProvider(error=ProviderTransportError("404", endpoint="x", status_code=404))

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider, metrics).get_available_slots(AvailableSlotsRequest(postcode="E2 1ZZ", reference="r"))

    assert exc_info.value.code is StatusCode.NOT_FOUND
    assert exc_info.value.message == "error making get available slots request: no appointments found"
    assert metrics.errors == [("AppointmentNotFoundError", "get available slots")]


def test_create_booking_without_slot_is_invalid_argument():
    """Test that validation fails before the provider is called."""
    provider = FakeProvider()

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider).create_booking(CreateBookingRequest(postcode="E2 1ZZ", reference="r", slot=None))

    assert exc_info.value.code is StatusCode.INVALID_ARGUMENT
    assert exc_info.value.message == "error making booking request: invalid booking slot"
    assert provider.calls == []


def test_create_booking_without_slot_date_is_invalid_argument():
    provider = FakeProvider()
    request = CreateBookingRequest(
        postcode="E2 1ZZ", reference="r", slot=BookingSlot(date=None, start_hour=10, end_hour=12)
    )

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider).create_booking(request)

    assert exc_info.value.code is StatusCode.INVALID_ARGUMENT
    assert "invalid booking slot date" in exc_info.value.message
    assert provider.calls == []


def test_create_booking_success():
    provider = FakeProvider(response=wire.CreateBookingResponse(response_code="B01", reference_id="r"))

    result = make_gateway(provider).create_booking(CreateBookingRequest(postcode="E2 1ZZ", reference="r", slot=SLOT))

    assert result.success is True


def test_create_booking_refusal_is_not_an_error():
    provider = FakeProvider(response=wire.CreateBookingResponse(response_code="B02"))

    result = make_gateway(provider).create_booking(CreateBookingRequest(postcode="E2 1ZZ", reference="r", slot=SLOT))

    assert result.success is False
    assert result.error_code is BookingErrorCode.APPOINTMENT_UNAVAILABLE


def test_invalid_argument_keeps_parameter():
    provider = FakeProvider(
        error=ProviderTransportError("bad", endpoint="x", status_code=400, payload={"Parameter": "postcode"})
    )

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider).create_booking(CreateBookingRequest(postcode="E2", reference="r", slot=SLOT))

    assert exc_info.value.code is StatusCode.INVALID_ARGUMENT
    assert exc_info.value.parameter is InvalidParameter.POSTCODE
    assert exc_info.value.message == "error making booking request: invalid request [postcode]"


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (409, StatusCode.ALREADY_EXISTS),
        (416, StatusCode.OUT_OF_RANGE),
        (500, StatusCode.INTERNAL),
        (403, StatusCode.INTERNAL),
        (None, StatusCode.INTERNAL),
    ],
)
def test_transport_status_mapping(status_code, expected):
    provider = FakeProvider(error=ProviderTransportError("x", endpoint="x", status_code=status_code))

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider).update_contact_details(UpdateContactDetailsRequest(reference="r"))

    assert exc_info.value.code is expected
    assert exc_info.value.message.startswith("error making update contact details request: ")


def test_bad_provider_slot_is_internal():
    """Test that an undecodable provider date is an internal failure."""
    provider = FakeProvider(
        response=wire.GetCalendarAvailabilityResponse(
            calendar_availability_result=[
                wire.AvailabilitySlot(appointment_date="01/13/2023", appointment_time="10:00-12:00")
            ]
        )
    )

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider).get_available_slots(AvailableSlotsRequest(postcode="E2 1ZZ", reference="r"))

    assert exc_info.value.code is StatusCode.INTERNAL
    assert "month out of range" in exc_info.value.message


def test_point_of_sale_unknown_tariff_is_internal():
    provider = FakeProvider()
    request = AvailableSlotsPointOfSaleRequest(postcode="E2 1ZZ", mpan="123")

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider).get_available_slots_point_of_sale(request)

    assert exc_info.value.code is StatusCode.INTERNAL
    assert exc_info.value.message == (
        "error making get available slots point of sale request: invalid electricity tariff type"
    )
    assert provider.calls == []


def test_point_of_sale_booking_returns_allocated_reference():
    provider = FakeProvider(response=wire.CreateBookingResponse(response_code="B01", reference_id="NEW1"))
    request = CreateBookingPointOfSaleRequest(
        mpan="123",
        mprn="",
        electricity_tariff_type=TariffType.CREDIT,
        gas_tariff_type=TariffType.UNKNOWN,
        slot=SLOT,
    )

    result = make_gateway(provider).create_booking_point_of_sale(request)

    assert result.success is True
    assert result.reference == "NEW1"
    assert provider.calls[0][0] == "book_pos"
    assert provider.calls[0][1].elec_job_type_code == "EC"


def test_unexpected_exception_is_internal():
    provider = FakeProvider(error=KeyError("boom"))

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider).create_booking(CreateBookingRequest(postcode="E2 1ZZ", reference="r", slot=SLOT))

    assert exc_info.value.code is StatusCode.INTERNAL
    assert str(exc_info.value).startswith("rpc error: code = internal desc = error making booking request")


@pytest.mark.parametrize(("start", "end"), [(14, 10), (23, 24), (-1, 5)])
def test_bad_caller_window_is_invalid_argument(start, end):
    """Test that a bad caller window never reaches the provider."""
    provider = FakeProvider(response=wire.CreateBookingResponse(response_code="B01"))
    request = CreateBookingRequest(
        postcode="E2 1ZZ",
        reference="r",
        slot=BookingSlot(date=date(2023, 12, 1), start_hour=start, end_hour=end),
    )

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider).create_booking(request)

    assert exc_info.value.code is StatusCode.INVALID_ARGUMENT
    assert exc_info.value.message == f"error making booking request: invalid appointment time: {start}-{end}"
    assert provider.calls == []


def test_provider_slot_without_date_is_internal():
    """Test that an empty provider date is not blamed on the caller."""
    provider = FakeProvider(
        response=wire.GetCalendarAvailabilityResponse(
            calendar_availability_result=[wire.AvailabilitySlot(appointment_date="", appointment_time="10:00-12:00")]
        )
    )

    with pytest.raises(RpcError) as exc_info:
        make_gateway(provider).get_available_slots(AvailableSlotsRequest(postcode="E2 1ZZ", reference="r"))

    assert exc_info.value.code is StatusCode.INTERNAL
    assert "missing appointment date" in exc_info.value.message
