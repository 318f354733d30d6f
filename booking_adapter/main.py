import logging

from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from booking_adapter.api.v1.bookings import router as bookings_router
from booking_adapter.application.exceptions import ProviderTransportError
from booking_adapter.core.config import settings
from booking_adapter.wiring.dependencies import get_metrics_recorder, get_provider


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("request_id", "operation", "endpoint", "status", "reference", "postcode", "mpan", "mprn", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Booking Protocol Adapter", version="1.0.0")

app.include_router(bookings_router, prefix="/v1", tags=["bookings"])


@app.get("/health")
def health():
    if settings.USE_HEALTHCHECK:
        try:
            get_provider().health_check()
        except ProviderTransportError as e:
            logging.getLogger(__name__).warning("Provider health check failed", extra={"error": str(e)})
            return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}


@app.get("/metrics")
def metrics() -> Response:
    recorder = get_metrics_recorder()
    return Response(content=generate_latest(recorder.registry), media_type=CONTENT_TYPE_LATEST)
