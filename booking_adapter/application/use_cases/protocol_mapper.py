"""Translate canonical booking requests/responses to and from provider envelopes.

Request mapping validates before anything is sent: a booking needs a dated
slot whose window starts before it ends, within hours 0..23. Response mapping classifies the provider's response
code first and only then decodes the payload.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from booking_adapter.application.dto import provider_messages as wire
from booking_adapter.application.exceptions import (
    InvalidDateError,
    InvalidSlotDateError,
    InvalidSlotError,
    InvalidTariffTypeError,
)
from booking_adapter.application.utils.error_classifier import (
    classify_availability_code,
    classify_booking_code,
)
from booking_adapter.application.utils.slot_codec import (
    MAX_HOUR,
    decode_slot,
    encode_slot,
    format_created_date,
)
from booking_adapter.application.utils.vulnerability_codec import encode_vulnerabilities
from booking_adapter.domain.entities.booking import (
    AvailabilityRequest,
    AvailableSlotsPointOfSaleRequest,
    AvailableSlotsResponse,
    BookingRequest,
    CreateBookingPointOfSaleRequest,
    CreateBookingResponse,
    UpdateContactDetailsRequest,
    UpdateContactDetailsResponse,
)
from booking_adapter.domain.entities.booking_slot import BookingSlot
from booking_adapter.domain.entities.site_address import SiteAddress
from booking_adapter.domain.entities.tariff_type import TariffType

logger = logging.getLogger(__name__)

CONTACT_UPDATED_CODE = "U01"


class ProtocolMapper:
    def __init__(
        self,
        sending_system: str,
        receiving_system: str,
        electricity_job_type_codes: dict[TariffType, str] | None = None,
        gas_job_type_codes: dict[TariffType, str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._sending_system = sending_system
        self._receiving_system = receiving_system
        self._electricity_job_type_codes = electricity_job_type_codes or {}
        self._gas_job_type_codes = gas_job_type_codes or {}
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def availability_request(
        self, request_id: int, request: AvailabilityRequest
    ) -> wire.GetCalendarAvailabilityRequest:
        if isinstance(request, AvailableSlotsPointOfSaleRequest):
            return wire.GetCalendarAvailabilityRequest(
                **self._envelope(request_id),
                post_code=request.postcode,
                mpan=request.mpan,
                mprn=request.mprn,
                elec_job_type_code=self._job_type_code("electricity", request.mpan, request.electricity_tariff_type),
                gas_job_type_code=self._job_type_code("gas", request.mprn, request.gas_tariff_type),
            )
        return wire.GetCalendarAvailabilityRequest(
            **self._envelope(request_id),
            post_code=request.postcode,
            reference_id=request.reference,
        )

    def available_slots_response(self, response: wire.GetCalendarAvailabilityResponse) -> AvailableSlotsResponse:
        error_code = classify_availability_code(response.response_code, response.response_message)
        if error_code is not None:
            logger.info(
                "Provider refused availability request",
                extra={
                    "request_id": response.request_id,
                    "status": response.response_code,
                    "error": response.response_message,
                },
            )
            return AvailableSlotsResponse(slots=[], error_code=error_code)

        slots = [self._decode_provider_slot(result) for result in response.calendar_availability_result]
        return AvailableSlotsResponse(slots=slots)

    def booking_request(self, request_id: int, request: BookingRequest) -> wire.CreateBookingRequest:
        appointment_date, appointment_time = self._encode_required_slot(request.slot)
        contact = request.contact_details
        vulnerability_details = request.vulnerability_details
        fields = dict(
            self._envelope(request_id),
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            site_contact_name=contact.site_contact_name(),
            site_contact_number=contact.phone,
            vulnerabilities=encode_vulnerabilities(vulnerability_details.vulnerabilities),
            vulnerabilities_other=vulnerability_details.other,
        )

        if isinstance(request, CreateBookingPointOfSaleRequest):
            fields.update(
                mpan=request.mpan,
                mprn=request.mprn,
                elec_job_type_code=self._job_type_code("electricity", request.mpan, request.electricity_tariff_type),
                gas_job_type_code=self._job_type_code("gas", request.mprn, request.gas_tariff_type),
                **_site_address_fields(request.site_address),
            )
        else:
            fields.update(reference_id=request.reference, post_code=request.postcode)
        return wire.CreateBookingRequest(**fields)

    def booking_response(self, response: wire.CreateBookingResponse) -> CreateBookingResponse:
        error_code = classify_booking_code(response.response_code, response.response_message)
        if error_code is not None:
            logger.info(
                "Provider refused booking",
                extra={
                    "request_id": response.request_id,
                    "status": response.response_code,
                    "error": response.response_message,
                },
            )
            return CreateBookingResponse(success=False, reference=response.reference_id, error_code=error_code)
        return CreateBookingResponse(success=True, reference=response.reference_id)

    def update_contact_details_request(
        self, request_id: int, request: UpdateContactDetailsRequest
    ) -> wire.UpdateContactDetailsRequest:
        contact = request.contact_details
        return wire.UpdateContactDetailsRequest(
            **self._envelope(request_id),
            reference_id=request.reference,
            site_contact_name=contact.site_contact_name(),
            site_contact_number=contact.phone,
            vulnerabilities=encode_vulnerabilities(request.vulnerability_details.vulnerabilities),
            vulnerabilities_other=request.vulnerability_details.other,
        )

    def update_contact_details_response(
        self, response: wire.UpdateContactDetailsResponse
    ) -> UpdateContactDetailsResponse:
        success = response.response_code.strip() == CONTACT_UPDATED_CODE
        if not success:
            logger.info(
                "Provider refused contact update",
                extra={
                    "reference": response.reference_id,
                    "status": response.response_code,
                    "error": response.response_message,
                },
            )
        return UpdateContactDetailsResponse(success=success, reference=response.reference_id)

    def _envelope(self, request_id: int) -> dict[str, str]:
        return {
            "request_id": str(request_id),
            "sending_system": self._sending_system,
            "receiving_system": self._receiving_system,
            "created_date": format_created_date(self._clock()),
        }

    def _encode_required_slot(self, slot: BookingSlot | None) -> tuple[str, str]:
        if slot is None:
            raise InvalidSlotError()
        if slot.date is None:
            raise InvalidSlotDateError()
        if not 0 <= slot.start_hour < slot.end_hour <= MAX_HOUR:
            raise InvalidSlotError(f"invalid appointment time: {slot.start_hour}-{slot.end_hour}")
        return encode_slot(slot)

    def _decode_provider_slot(self, result: wire.AvailabilitySlot) -> BookingSlot:
        # A slot missing its fields is bad provider data, not a caller error.
        try:
            return decode_slot(result.appointment_date, result.appointment_time)
        except (InvalidSlotError, InvalidSlotDateError) as e:
            raise InvalidDateError(f'missing appointment date for window "{result.appointment_time}"') from e

    def _job_type_code(self, fuel: str, supply_point: str, tariff_type: TariffType) -> str:
        if not supply_point:
            return ""
        if tariff_type is TariffType.UNKNOWN:
            raise InvalidTariffTypeError(fuel)
        codes = self._electricity_job_type_codes if fuel == "electricity" else self._gas_job_type_codes
        return codes.get(tariff_type, "")


def _site_address_fields(address: SiteAddress) -> dict[str, str]:
    # The provider has one building field; number goes first ("12 Rose Cottage").
    building = " ".join(part for part in (address.building_number.strip(), address.building_name.strip()) if part)
    return {
        "sub_build_name": address.sub_building,
        "building_name": building,
        "depend_throughfare": address.dependent_thoroughfare,
        "throughfare": address.thoroughfare,
        "double_dependant_locality": address.double_dependent_locality,
        "dependant_locality": address.dependent_locality,
        "post_town": address.post_town,
        "post_code": address.postcode,
    }
