"""Wire envelopes exchanged with the scheduling provider.

Field aliases are the provider's PascalCase JSON names. Empty fields are
omitted on the way out (``to_payload``) and nulls are tolerated on the way in.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProviderMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_defaults=True)


class EnvelopeFields(ProviderMessage):
    request_id: str = Field(default="", alias="RequestId")
    sending_system: str = Field(default="", alias="SendingSystem")
    receiving_system: str = Field(default="", alias="ReceivingSystem")
    created_date: str = Field(default="", alias="CreatedDate")


class ResponseFields(EnvelopeFields):
    response_code: str = Field(default="", alias="ResponseCode")
    response_message: str = Field(default="", alias="ResponseMessage")


class GetCalendarAvailabilityRequest(EnvelopeFields):
    reference_id: str = Field(default="", alias="ReferenceId")
    post_code: str = Field(default="", alias="PostCode")
    mpan: str = Field(default="", alias="Mpan")
    mprn: str = Field(default="", alias="Mprn")
    elec_job_type_code: str = Field(default="", alias="ElecJobTypeCode")
    gas_job_type_code: str = Field(default="", alias="GasJobTypeCode")


class AvailabilitySlot(ProviderMessage):
    appointment_date: str = Field(default="", alias="AppointmentDate")
    appointment_time: str = Field(default="", alias="AppointmentTime")


class GetCalendarAvailabilityResponse(ResponseFields):
    mpan: str = Field(default="", alias="Mpan")
    mprn: str = Field(default="", alias="Mprn")
    elec_job_type_code: str = Field(default="", alias="ElecJobTypeCode")
    gas_job_type_code: str = Field(default="", alias="GasJobTypeCode")
    calendar_availability_result: list[AvailabilitySlot] = Field(
        default_factory=list, alias="CalendarAvailabilityResult"
    )


class CreateBookingRequest(EnvelopeFields):
    appointment_date: str = Field(default="", alias="AppointmentDate")
    appointment_time: str = Field(default="", alias="AppointmentTime")
    reference_id: str = Field(default="", alias="ReferenceId")
    # PAF site address, spelled the way the provider spells it
    sub_build_name: str = Field(default="", alias="SubBuildName")
    building_name: str = Field(default="", alias="BuildingName")
    depend_throughfare: str = Field(default="", alias="DependThroughfare")
    throughfare: str = Field(default="", alias="Throughfare")
    double_dependant_locality: str = Field(default="", alias="DoubleDependantLocality")
    dependant_locality: str = Field(default="", alias="DependantLocality")
    post_town: str = Field(default="", alias="PostTown")
    county: str = Field(default="", alias="County")
    post_code: str = Field(default="", alias="PostCode")
    mpan: str = Field(default="", alias="Mpan")
    mprn: str = Field(default="", alias="Mprn")
    elec_job_type_code: str = Field(default="", alias="ElecJobTypeCode")
    gas_job_type_code: str = Field(default="", alias="GasJobTypeCode")
    site_contact_name: str = Field(default="", alias="SiteContactName")
    site_contact_number: str = Field(default="", alias="SiteContactNumber")
    site_contact_number_alt: str = Field(default="", alias="SiteContactNumberAlt")
    access_password: str = Field(default="", alias="AccessPassword")
    additional_info: str = Field(default="", alias="AdditionalInfo")
    vulnerabilities: str = Field(default="", alias="Vulnerabilities")
    vulnerabilities_other: str = Field(default="", alias="VulnerabilitiesOther")


class CreateBookingResponse(ResponseFields):
    reference_id: str = Field(default="", alias="ReferenceId")
    mpan: str = Field(default="", alias="Mpan")
    mprn: str = Field(default="", alias="Mprn")


class UpdateContactDetailsRequest(EnvelopeFields):
    reference_id: str = Field(default="", alias="ReferenceId")
    site_contact_name: str = Field(default="", alias="SiteContactName")
    site_contact_number: str = Field(default="", alias="SiteContactNumber")
    site_contact_number_alt: str = Field(default="", alias="SiteContactNumberAlt")
    vulnerabilities: str = Field(default="", alias="Vulnerabilities")
    vulnerabilities_other: str = Field(default="", alias="VulnerabilitiesOther")
    access_password: str = Field(default="", alias="AccessPassword")
    additional_info: str = Field(default="", alias="AdditionalInfo")
    contact_preferences: str = Field(default="", alias="ContactPreferences")


class UpdateContactDetailsResponse(ResponseFields):
    reference_id: str = Field(default="", alias="ReferenceId")
    mpan: str = Field(default="", alias="Mpan")
    mprn: str = Field(default="", alias="Mprn")
