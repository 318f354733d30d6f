from __future__ import annotations

from abc import ABC, abstractmethod


class MetricsRecorder(ABC):
    @abstractmethod
    def record_provider_response(self, endpoint: str, status: str) -> None:
        """Count one provider response by endpoint and HTTP status (or "error")."""
        raise NotImplementedError

    @abstractmethod
    def record_error(self, kind: str, operation: str) -> None:
        """Count one failed gateway operation by error kind."""
        raise NotImplementedError


class NoopMetricsRecorder(MetricsRecorder):
    def record_provider_response(self, endpoint: str, status: str) -> None:
        return None

    def record_error(self, kind: str, operation: str) -> None:
        return None
