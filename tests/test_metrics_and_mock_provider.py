"""
Tests for the Prometheus recorder and the local mock provider.
"""

from __future__ import annotations

from datetime import date

from prometheus_client import CollectorRegistry

from booking_adapter.application.dto import provider_messages as wire
from booking_adapter.application.use_cases.booking_gateway import BookingGateway
from booking_adapter.application.use_cases.protocol_mapper import ProtocolMapper
from booking_adapter.domain.entities.booking import AvailableSlotsRequest
from booking_adapter.infrastructure.metrics.prometheus_recorder import PrometheusMetricsRecorder
from booking_adapter.infrastructure.provider.mock_provider import MockProviderClient


def test_prometheus_recorder_counts_on_its_own_registry():
    registry = CollectorRegistry()
    recorder = PrometheusMetricsRecorder(registry=registry)

    recorder.record_provider_response("appointmentManagement/book", "200")
    recorder.record_provider_response("appointmentManagement/book", "200")
    recorder.record_error("AppointmentNotFoundError", "get available slots")

    assert registry.get_sample_value(
        "provider_responses_total", {"status": "200", "endpoint": "appointmentManagement/book"}
    ) == 2.0
    assert registry.get_sample_value(
        "provider_errors_total", {"kind": "AppointmentNotFoundError", "operation": "get available slots"}
    ) == 1.0


def test_mock_provider_serves_weekday_slots():
    """Test that canned slots skip weekends and decode cleanly."""
    provider = MockProviderClient(days=2, start=date(2024, 1, 5))  # Friday
    gateway = BookingGateway(provider=provider, mapper=ProtocolMapper("UW", "LB"))

    result = gateway.get_available_slots(AvailableSlotsRequest(postcode="E2 1ZZ", reference="ref-1"))

    assert [slot.date for slot in result.slots] == [date(2024, 1, 5)] * 2 + [date(2024, 1, 8)] * 2
    assert [(slot.start_hour, slot.end_hour) for slot in result.slots[:2]] == [(8, 12), (12, 16)]


def test_mock_provider_confirms_bookings():
    provider = MockProviderClient()

    response = provider.book_point_of_sale(wire.CreateBookingRequest(mpan="123"))

    assert response.response_code == "B01"
    assert response.reference_id == "MOCK000001"
    assert "MOCK000001" in provider.bookings


def test_recorders_do_not_share_a_registry():
    """Test that two recorders built without a registry keep separate counters."""
    first = PrometheusMetricsRecorder()
    second = PrometheusMetricsRecorder()

    first.record_error("InternalError", "booking")

    assert first.registry is not second.registry
    assert first.registry.get_sample_value(
        "provider_errors_total", {"kind": "InternalError", "operation": "booking"}
    ) == 1.0
    assert second.registry.get_sample_value(
        "provider_errors_total", {"kind": "InternalError", "operation": "booking"}
    ) is None
