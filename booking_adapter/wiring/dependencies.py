from functools import lru_cache
import logging

from prometheus_client import CollectorRegistry

from booking_adapter.core.config import settings
from booking_adapter.application.ports.provider import ProviderPort
from booking_adapter.application.use_cases.booking_gateway import BookingGateway
from booking_adapter.application.use_cases.protocol_mapper import ProtocolMapper
from booking_adapter.domain.entities.tariff_type import TariffType
from booking_adapter.infrastructure.metrics.prometheus_recorder import PrometheusMetricsRecorder
from booking_adapter.infrastructure.provider.mock_provider import MockProviderClient
from booking_adapter.infrastructure.provider.provider_client import ProviderClient


logger = logging.getLogger(__name__)


@lru_cache
def get_metrics_recorder() -> PrometheusMetricsRecorder:
    return PrometheusMetricsRecorder(registry=CollectorRegistry())


@lru_cache
def get_provider() -> ProviderPort:
    if not settings.PROVIDER_BASE_URL and settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockProviderClient (PROVIDER_BASE_URL missing, ENV=dev/local)")
        return MockProviderClient()

    logger.info("Using ProviderClient", extra={"endpoint": settings.PROVIDER_BASE_URL})
    return ProviderClient(metrics=get_metrics_recorder())


@lru_cache
def get_protocol_mapper() -> ProtocolMapper:
    return ProtocolMapper(
        sending_system=settings.SENDING_SYSTEM,
        receiving_system=settings.RECEIVING_SYSTEM,
        electricity_job_type_codes={
            TariffType.CREDIT: settings.ELECTRICITY_JOB_TYPE_CODE_CREDIT,
            TariffType.PREPAYMENT: settings.ELECTRICITY_JOB_TYPE_CODE_PREPAYMENT,
        },
        gas_job_type_codes={
            TariffType.CREDIT: settings.GAS_JOB_TYPE_CODE_CREDIT,
            TariffType.PREPAYMENT: settings.GAS_JOB_TYPE_CODE_PREPAYMENT,
        },
    )


@lru_cache
def get_booking_gateway() -> BookingGateway:
    return BookingGateway(
        provider=get_provider(),
        mapper=get_protocol_mapper(),
        metrics=get_metrics_recorder(),
    )
