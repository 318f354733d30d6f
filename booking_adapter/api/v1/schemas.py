import datetime as dt

from pydantic import BaseModel, Field

from booking_adapter.domain.entities.error_codes import (
    AvailabilityErrorCode,
    BookingErrorCode,
    InvalidParameter,
)
from booking_adapter.domain.entities.tariff_type import TariffType
from booking_adapter.domain.entities.vulnerability import Vulnerability


class BookingSlotSchema(BaseModel):
    date: dt.date | None = None
    start_hour: int = Field(ge=0, le=23)
    end_hour: int = Field(ge=0, le=23)


class VulnerabilityDetailsSchema(BaseModel):
    vulnerabilities: list[Vulnerability] = Field(default_factory=list)
    other: str = ""


class ContactDetailsSchema(BaseModel):
    title: str = ""
    first_name: str = ""
    last_name: str = ""
    phone: str = ""


class SiteAddressSchema(BaseModel):
    uprn: str = ""
    organisation: str = ""
    department: str = ""
    sub_building: str = ""
    building_name: str = ""
    building_number: str = ""
    dependent_thoroughfare: str = ""
    thoroughfare: str = ""
    double_dependent_locality: str = ""
    dependent_locality: str = ""
    post_town: str = ""
    postcode: str = ""


class AvailableSlotsRequestSchema(BaseModel):
    postcode: str
    reference: str


class AvailableSlotsPointOfSaleRequestSchema(BaseModel):
    postcode: str
    mpan: str = ""
    mprn: str = ""
    electricity_tariff_type: TariffType = TariffType.UNKNOWN
    gas_tariff_type: TariffType = TariffType.UNKNOWN


class AvailableSlotsResponseSchema(BaseModel):
    slots: list[BookingSlotSchema] = Field(default_factory=list)
    error_code: AvailabilityErrorCode | None = None


class CreateBookingRequestSchema(BaseModel):
    postcode: str
    reference: str
    slot: BookingSlotSchema | None = None
    vulnerability_details: VulnerabilityDetailsSchema = Field(default_factory=VulnerabilityDetailsSchema)
    contact_details: ContactDetailsSchema = Field(default_factory=ContactDetailsSchema)


class CreateBookingPointOfSaleRequestSchema(BaseModel):
    mpan: str = ""
    mprn: str = ""
    electricity_tariff_type: TariffType = TariffType.UNKNOWN
    gas_tariff_type: TariffType = TariffType.UNKNOWN
    slot: BookingSlotSchema | None = None
    site_address: SiteAddressSchema = Field(default_factory=SiteAddressSchema)
    vulnerability_details: VulnerabilityDetailsSchema = Field(default_factory=VulnerabilityDetailsSchema)
    contact_details: ContactDetailsSchema = Field(default_factory=ContactDetailsSchema)


class CreateBookingResponseSchema(BaseModel):
    success: bool
    reference: str = ""
    error_code: BookingErrorCode | None = None


class UpdateContactDetailsRequestSchema(BaseModel):
    reference: str
    vulnerability_details: VulnerabilityDetailsSchema = Field(default_factory=VulnerabilityDetailsSchema)
    contact_details: ContactDetailsSchema = Field(default_factory=ContactDetailsSchema)


class UpdateContactDetailsResponseSchema(BaseModel):
    success: bool
    reference: str = ""


class ErrorSchema(BaseModel):
    code: str
    message: str
    parameter: InvalidParameter | None = None
