from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from booking_adapter.application.dto.provider_messages import (
    CreateBookingRequest,
    CreateBookingResponse,
    GetCalendarAvailabilityRequest,
    GetCalendarAvailabilityResponse,
    ProviderMessage,
    UpdateContactDetailsRequest,
    UpdateContactDetailsResponse,
)
from booking_adapter.application.exceptions import ProviderTransportError
from booking_adapter.application.ports.metrics import MetricsRecorder, NoopMetricsRecorder
from booking_adapter.application.ports.provider import ProviderPort
from booking_adapter.core.config import settings

AVAILABILITY_PATH = "appointmentManagement/getCalendarAvailability"
BOOK_PATH = "appointmentManagement/book"
UPDATE_CONTACT_PATH = "appointmentManagement/updateContact"
HEALTH_PATH = "health/get"

ResponseT = TypeVar("ResponseT", bound=ProviderMessage)


class ProviderClient(ProviderPort):
    """HTTP/JSON client for the scheduling provider.

    Transport only: response codes inside a 200 body are returned untouched
    for the mapper to interpret.

    ``timeout`` bounds each phase of the exchange (connect, write, read, pool
    acquisition) separately; it is not one deadline for the whole call. Each
    read waits at most ``timeout`` seconds for the next chunk, so a provider
    trickling its body can keep a call alive past the caller's deadline.
    """

    def __init__(
        self,
        base_url: str | None = None,
        auth_user: str | None = None,
        auth_password: str | None = None,
        timeout_seconds: float | None = None,
        http_client: httpx.Client | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        base_url = base_url or settings.PROVIDER_BASE_URL
        if not base_url:
            raise ValueError("PROVIDER_BASE_URL is required for the provider client")

        self._base_url = base_url.rstrip("/") + "/"
        self._auth = httpx.BasicAuth(
            auth_user if auth_user is not None else settings.PROVIDER_AUTH_USER,
            auth_password if auth_password is not None else settings.PROVIDER_AUTH_PASSWORD,
        )
        self._client = http_client or httpx.Client(
            timeout=timeout_seconds or settings.PROVIDER_TIMEOUT_SECONDS
        )
        self._metrics = metrics or NoopMetricsRecorder()
        self._logger = logging.getLogger(__name__)

    def __enter__(self) -> ProviderClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_calendar_availability(
        self,
        request: GetCalendarAvailabilityRequest,
        timeout: float | None = None,
    ) -> GetCalendarAvailabilityResponse:
        return self._post(AVAILABILITY_PATH, request, GetCalendarAvailabilityResponse, timeout)

    def get_calendar_availability_point_of_sale(
        self,
        request: GetCalendarAvailabilityRequest,
        timeout: float | None = None,
    ) -> GetCalendarAvailabilityResponse:
        return self._post(AVAILABILITY_PATH, request, GetCalendarAvailabilityResponse, timeout)

    def book(
        self,
        request: CreateBookingRequest,
        timeout: float | None = None,
    ) -> CreateBookingResponse:
        return self._post(BOOK_PATH, request, CreateBookingResponse, timeout)

    def book_point_of_sale(
        self,
        request: CreateBookingRequest,
        timeout: float | None = None,
    ) -> CreateBookingResponse:
        return self._post(BOOK_PATH, request, CreateBookingResponse, timeout)

    def update_contact(
        self,
        request: UpdateContactDetailsRequest,
        timeout: float | None = None,
    ) -> UpdateContactDetailsResponse:
        return self._post(UPDATE_CONTACT_PATH, request, UpdateContactDetailsResponse, timeout)

    def health_check(self, timeout: float | None = None) -> None:
        response = self._send("GET", HEALTH_PATH, timeout=timeout)
        if response.status_code != 200:
            raise self._status_error(HEALTH_PATH, response)

    def _post(
        self,
        path: str,
        request: ProviderMessage,
        response_type: type[ResponseT],
        timeout: float | None,
    ) -> ResponseT:
        response = self._send("POST", path, json=request.to_payload(), timeout=timeout)
        if response.status_code != 200:
            raise self._status_error(path, response)

        try:
            return response_type.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            self._logger.error(
                "Unreadable provider response",
                extra={"endpoint": path, "status": response.status_code, "error": str(e)},
            )
            raise ProviderTransportError(
                f"unreadable response from {path}: {e}",
                endpoint=path,
                status_code=response.status_code,
            ) from e

    def _send(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        url = self._base_url + path
        kwargs: dict[str, Any] = {"auth": self._auth}
        if json is not None:
            kwargs["json"] = json
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            self._metrics.record_provider_response(path, "error")
            self._logger.error("Provider request timed out", extra={"endpoint": path, "error": str(e)})
            raise ProviderTransportError(f"request to {path} timed out", endpoint=path) from e
        except httpx.HTTPError as e:
            self._metrics.record_provider_response(path, "error")
            self._logger.error("Provider request failed", extra={"endpoint": path, "error": str(e)})
            raise ProviderTransportError(f"request to {path} failed: {e}", endpoint=path) from e

        self._metrics.record_provider_response(path, str(response.status_code))
        self._logger.debug("Provider response", extra={"endpoint": path, "status": response.status_code})
        return response

    def _status_error(self, path: str, response: httpx.Response) -> ProviderTransportError:
        try:
            payload: Any = response.json()
        except ValueError:
            payload = response.text

        self._logger.error(
            "Provider returned an error status",
            extra={"endpoint": path, "status": response.status_code, "error": response.text[:500]},
        )
        return ProviderTransportError(
            f"unexpected status {response.status_code} from {path}",
            endpoint=path,
            status_code=response.status_code,
            payload=payload,
        )
