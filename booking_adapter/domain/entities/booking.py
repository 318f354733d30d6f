from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from booking_adapter.domain.entities.booking_slot import BookingSlot
from booking_adapter.domain.entities.contact_details import ContactDetails
from booking_adapter.domain.entities.error_codes import AvailabilityErrorCode, BookingErrorCode
from booking_adapter.domain.entities.site_address import SiteAddress
from booking_adapter.domain.entities.tariff_type import TariffType
from booking_adapter.domain.entities.vulnerability import VulnerabilityDetails


@dataclass(frozen=True)
class AvailableSlotsRequest:
    postcode: str
    reference: str


@dataclass(frozen=True)
class AvailableSlotsPointOfSaleRequest:
    postcode: str
    mpan: str = ""
    mprn: str = ""
    electricity_tariff_type: TariffType = TariffType.UNKNOWN
    gas_tariff_type: TariffType = TariffType.UNKNOWN


@dataclass(frozen=True)
class AvailableSlotsResponse:
    slots: list[BookingSlot] = field(default_factory=list)
    error_code: AvailabilityErrorCode | None = None  # set instead of slots when the provider refused


@dataclass(frozen=True)
class CreateBookingRequest:
    postcode: str
    reference: str
    slot: BookingSlot | None
    vulnerability_details: VulnerabilityDetails = field(default_factory=VulnerabilityDetails)
    contact_details: ContactDetails = field(default_factory=ContactDetails)


@dataclass(frozen=True)
class CreateBookingPointOfSaleRequest:
    mpan: str
    mprn: str
    electricity_tariff_type: TariffType
    gas_tariff_type: TariffType
    slot: BookingSlot | None
    site_address: SiteAddress = field(default_factory=SiteAddress)
    vulnerability_details: VulnerabilityDetails = field(default_factory=VulnerabilityDetails)
    contact_details: ContactDetails = field(default_factory=ContactDetails)


@dataclass(frozen=True)
class CreateBookingResponse:
    success: bool
    reference: str = ""  # allocated by the provider on the point-of-sale flow
    error_code: BookingErrorCode | None = None


@dataclass(frozen=True)
class UpdateContactDetailsRequest:
    reference: str
    contact_details: ContactDetails = field(default_factory=ContactDetails)
    vulnerability_details: VulnerabilityDetails = field(default_factory=VulnerabilityDetails)


@dataclass(frozen=True)
class UpdateContactDetailsResponse:
    success: bool
    reference: str = ""


AvailabilityRequest = Union[AvailableSlotsRequest, AvailableSlotsPointOfSaleRequest]
BookingRequest = Union[CreateBookingRequest, CreateBookingPointOfSaleRequest]
