from __future__ import annotations

from booking_adapter.application.ports.metrics import MetricsRecorder
from booking_adapter.application.ports.provider import ProviderPort


class FakeProvider(ProviderPort):
    """Returns one canned response (or raises one error) for every call."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def _answer(self, name, request, timeout):
        self.calls.append((name, request, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def get_calendar_availability(self, request, timeout=None):
        return self._answer("availability", request, timeout)

    def get_calendar_availability_point_of_sale(self, request, timeout=None):
        return self._answer("availability_pos", request, timeout)

    def book(self, request, timeout=None):
        return self._answer("book", request, timeout)

    def book_point_of_sale(self, request, timeout=None):
        return self._answer("book_pos", request, timeout)

    def update_contact(self, request, timeout=None):
        return self._answer("update_contact", request, timeout)

    def health_check(self, timeout=None):
        return None


class RecordingMetrics(MetricsRecorder):
    def __init__(self):
        self.responses = []
        self.errors = []

    def record_provider_response(self, endpoint, status):
        self.responses.append((endpoint, status))

    def record_error(self, kind, operation):
        self.errors.append((kind, operation))
