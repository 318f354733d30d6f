"""Prometheus implementation of the MetricsRecorder port."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter

from booking_adapter.application.ports.metrics import MetricsRecorder


class PrometheusMetricsRecorder(MetricsRecorder):
    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self._provider_responses = Counter(
            "provider_responses_total",
            "Responses received from the scheduling provider",
            ["status", "endpoint"],
            registry=self.registry,
        )
        self._errors = Counter(
            "provider_errors_total",
            "Gateway operations that failed, by error kind",
            ["kind", "operation"],
            registry=self.registry,
        )

    def record_provider_response(self, endpoint: str, status: str) -> None:
        self._provider_responses.labels(status=status, endpoint=endpoint).inc()

    def record_error(self, kind: str, operation: str) -> None:
        self._errors.labels(kind=kind, operation=operation).inc()
