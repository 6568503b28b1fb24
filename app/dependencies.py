import logging
from typing import Annotated

from fastapi import Depends, Request

from app.services.call_webhook import CallWebhookService
from app.services.lookup import LookupService
from app.snapshots import WebhookSnapshotStore

logger = logging.getLogger(__name__)


def get_call_webhook_service(request: Request) -> CallWebhookService:
    return request.app.state.call_webhook_service


def get_lookup_service(request: Request) -> LookupService:
    return request.app.state.lookup_service


def get_snapshot_store(request: Request) -> WebhookSnapshotStore | None:
    return getattr(request.app.state, "snapshot_store", None)


def get_logger(request: Request) -> logging.Logger:
    return getattr(request.app.state, "log", logger)


CallWebhookDep = Annotated[CallWebhookService, Depends(get_call_webhook_service)]
LookupDep = Annotated[LookupService, Depends(get_lookup_service)]
SnapshotStoreDep = Annotated[WebhookSnapshotStore | None, Depends(get_snapshot_store)]
LoggerDep = Annotated[logging.Logger, Depends(get_logger)]
