from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from booking_adapter.api.v1.schemas import (
    AvailableSlotsPointOfSaleRequestSchema,
    AvailableSlotsRequestSchema,
    AvailableSlotsResponseSchema,
    BookingSlotSchema,
    ContactDetailsSchema,
    CreateBookingPointOfSaleRequestSchema,
    CreateBookingRequestSchema,
    CreateBookingResponseSchema,
    ErrorSchema,
    UpdateContactDetailsRequestSchema,
    UpdateContactDetailsResponseSchema,
    VulnerabilityDetailsSchema,
)
from booking_adapter.application.status import RpcError, StatusCode
from booking_adapter.application.use_cases.booking_gateway import BookingGateway
from booking_adapter.domain.entities.booking import (
    AvailableSlotsPointOfSaleRequest,
    AvailableSlotsRequest,
    AvailableSlotsResponse,
    CreateBookingPointOfSaleRequest,
    CreateBookingRequest,
    UpdateContactDetailsRequest,
)
from booking_adapter.domain.entities.booking_slot import BookingSlot
from booking_adapter.domain.entities.contact_details import ContactDetails
from booking_adapter.domain.entities.site_address import SiteAddress
from booking_adapter.domain.entities.vulnerability import VulnerabilityDetails
from booking_adapter.wiring.dependencies import get_booking_gateway

router = APIRouter()

HTTP_STATUS_FOR_CODE = {
    StatusCode.INVALID_ARGUMENT: 400,
    StatusCode.NOT_FOUND: 404,
    StatusCode.ALREADY_EXISTS: 409,
    StatusCode.OUT_OF_RANGE: 422,
}

ERROR_RESPONSES = {status: {"model": ErrorSchema} for status in (400, 404, 409, 422, 500)}


def error_response(error: RpcError) -> JSONResponse:
    body = ErrorSchema(code=error.code.value, message=error.message, parameter=error.parameter)
    return JSONResponse(
        status_code=HTTP_STATUS_FOR_CODE.get(error.code, 500),
        content=body.model_dump(mode="json"),
    )


def _slot(slot: BookingSlotSchema | None) -> BookingSlot | None:
    if slot is None:
        return None
    return BookingSlot(date=slot.date, start_hour=slot.start_hour, end_hour=slot.end_hour)


def _vulnerabilities(details: VulnerabilityDetailsSchema) -> VulnerabilityDetails:
    return VulnerabilityDetails(vulnerabilities=frozenset(details.vulnerabilities), other=details.other)


def _contact(contact: ContactDetailsSchema) -> ContactDetails:
    return ContactDetails(**contact.model_dump())


def _slots_response(response: AvailableSlotsResponse) -> AvailableSlotsResponseSchema:
    return AvailableSlotsResponseSchema(
        slots=[
            BookingSlotSchema(date=s.date, start_hour=s.start_hour, end_hour=s.end_hour)
            for s in response.slots
        ],
        error_code=response.error_code,
    )


@router.post("/slots", response_model=AvailableSlotsResponseSchema, responses=ERROR_RESPONSES)
def get_available_slots(
    req: AvailableSlotsRequestSchema,
    gateway: BookingGateway = Depends(get_booking_gateway),
):
    try:
        response = gateway.get_available_slots(
            AvailableSlotsRequest(postcode=req.postcode, reference=req.reference)
        )
    except RpcError as e:
        return error_response(e)
    return _slots_response(response)


@router.post("/slots/point-of-sale", response_model=AvailableSlotsResponseSchema, responses=ERROR_RESPONSES)
def get_available_slots_point_of_sale(
    req: AvailableSlotsPointOfSaleRequestSchema,
    gateway: BookingGateway = Depends(get_booking_gateway),
):
    try:
        response = gateway.get_available_slots_point_of_sale(
            AvailableSlotsPointOfSaleRequest(
                postcode=req.postcode,
                mpan=req.mpan,
                mprn=req.mprn,
                electricity_tariff_type=req.electricity_tariff_type,
                gas_tariff_type=req.gas_tariff_type,
            )
        )
    except RpcError as e:
        return error_response(e)
    return _slots_response(response)


@router.post("/bookings", response_model=CreateBookingResponseSchema, responses=ERROR_RESPONSES)
def create_booking(
    req: CreateBookingRequestSchema,
    gateway: BookingGateway = Depends(get_booking_gateway),
):
    try:
        response = gateway.create_booking(
            CreateBookingRequest(
                postcode=req.postcode,
                reference=req.reference,
                slot=_slot(req.slot),
                vulnerability_details=_vulnerabilities(req.vulnerability_details),
                contact_details=_contact(req.contact_details),
            )
        )
    except RpcError as e:
        return error_response(e)
    return CreateBookingResponseSchema(
        success=response.success, reference=response.reference, error_code=response.error_code
    )


@router.post("/bookings/point-of-sale", response_model=CreateBookingResponseSchema, responses=ERROR_RESPONSES)
def create_booking_point_of_sale(
    req: CreateBookingPointOfSaleRequestSchema,
    gateway: BookingGateway = Depends(get_booking_gateway),
):
    try:
        response = gateway.create_booking_point_of_sale(
            CreateBookingPointOfSaleRequest(
                mpan=req.mpan,
                mprn=req.mprn,
                electricity_tariff_type=req.electricity_tariff_type,
                gas_tariff_type=req.gas_tariff_type,
                slot=_slot(req.slot),
                site_address=SiteAddress(**req.site_address.model_dump()),
                vulnerability_details=_vulnerabilities(req.vulnerability_details),
                contact_details=_contact(req.contact_details),
            )
        )
    except RpcError as e:
        return error_response(e)
    return CreateBookingResponseSchema(
        success=response.success, reference=response.reference, error_code=response.error_code
    )


@router.post("/contact-details", response_model=UpdateContactDetailsResponseSchema, responses=ERROR_RESPONSES)
def update_contact_details(
    req: UpdateContactDetailsRequestSchema,
    gateway: BookingGateway = Depends(get_booking_gateway),
):
    try:
        response = gateway.update_contact_details(
            UpdateContactDetailsRequest(
                reference=req.reference,
                contact_details=_contact(req.contact_details),
                vulnerability_details=_vulnerabilities(req.vulnerability_details),
            )
        )
    except RpcError as e:
        return error_response(e)
    return UpdateContactDetailsResponseSchema(success=response.success, reference=response.reference)
