import logging
import sys
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

import httpx
import uvicorn
from fastapi import FastAPI

from app.config import Settings
from app.exceptions.custom import MissingCallerPhoneError
from app.exceptions.handlers import missing_phone_error_handler
from app.routers.elevenlabs import router as elevenlabs_router
from app.routers.health import router as health_router
from app.routers.lookup import router as lookup_router
from app.services.call_webhook import CallWebhookService
from app.services.claude import TranscriptExtractor
from app.services.ghl import CRMClient, GHLService, SimulatedGHLService
from app.services.lookup import LookupService
from app.snapshots import WebhookSnapshotStore

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if settings.log_dir:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        root = logging.getLogger()
        for filename, level in (("ghl.log", logging.INFO), ("ghl-error.log", logging.ERROR)):
            handler = RotatingFileHandler(
                log_dir / filename, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
            )
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(handler)

    return logging.getLogger("app")


def build_crm_client(
    settings: Settings, client: httpx.AsyncClient, log: logging.Logger
) -> CRMClient:
    if settings.is_production:
        return GHLService(
            client,
            settings.ghl_api_key,
            settings.ghl_location_id,
            base_url=settings.ghl_base_url,
            log=log.getChild("ghl"),
        )
    log.info("Non-production environment %r: CRM calls are simulated", settings.environment)
    return SimulatedGHLService(log=log.getChild("ghl"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    log = configure_logging(settings)
    app.state.log = log

    async with httpx.AsyncClient(timeout=30.0) as client:
        crm = build_crm_client(settings, client, log)

        extractor: TranscriptExtractor | None = None
        if settings.anthropic_api_key:
            extractor = TranscriptExtractor(
                settings.anthropic_api_key, log=log.getChild("extractor")
            )

        app.state.call_webhook_service = CallWebhookService(
            crm,
            extractor,
            production=settings.is_production,
            placeholder_phone=settings.placeholder_phone,
            log=log.getChild("webhook"),
        )
        app.state.lookup_service = LookupService(
            crm,
            production=settings.is_production,
            placeholder_phone=settings.placeholder_phone,
            log=log.getChild("lookup"),
        )

        app.state.snapshot_store = None
        if settings.snapshot_dir:
            app.state.snapshot_store = WebhookSnapshotStore(
                settings.snapshot_dir,
                max_entries=settings.snapshot_history_size,
                log=log.getChild("snapshots"),
            )

        yield


app = FastAPI(title="ElevenLabs GHL Relay", lifespan=lifespan)

app.add_exception_handler(MissingCallerPhoneError, missing_phone_error_handler)

app.include_router(health_router)
app.include_router(elevenlabs_router)
app.include_router(lookup_router)


def run() -> None:
    settings = Settings()
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
