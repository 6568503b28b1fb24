import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from app.dependencies import CallWebhookDep, LoggerDep, SnapshotStoreDep
from app.exceptions.custom import GHLError, MissingCallerPhoneError, UnrecognizedResponseShapeError
from app.snapshots import WebhookSnapshotStore

router = APIRouter()


async def read_json_body(request: Request, log: logging.Logger) -> dict:
    try:
        body = await request.json()
    except ValueError:
        log.warning("Request body is not valid JSON")
        return {}
    return body if isinstance(body, dict) else {}


def record_snapshot(
    store: WebhookSnapshotStore | None, body: dict, log: logging.Logger
) -> None:
    if store is None:
        return
    try:
        store.record(body)
    except (OSError, ValueError):
        log.exception("Failed to write webhook snapshot")


@router.post("/elevenlabs", response_class=PlainTextResponse)
async def elevenlabs_webhook(
    request: Request,
    service: CallWebhookDep,
    snapshots: SnapshotStoreDep,
    log: LoggerDep,
) -> PlainTextResponse:
    log = log.getChild("elevenlabs")
    body = await read_json_body(request, log)
    log.info("Incoming ElevenLabs post-call webhook (type=%s)", body.get("type"))
    record_snapshot(snapshots, body, log)

    try:
        result = await service.process(body)
    except MissingCallerPhoneError:
        # Rendered as plain-text 400 by the app-level handler
        raise
    except UnrecognizedResponseShapeError as exc:
        log.error("Failed to extract contact ID: %s (body=%r)", exc, exc.body)
        return PlainTextResponse("Could not determine contact ID", status_code=500)
    except GHLError as exc:
        log.exception(
            "Error processing ElevenLabs webhook (upstream status=%s): %s",
            exc.status_code,
            exc.message,
        )
        return PlainTextResponse("Error processing webhook", status_code=500)
    except Exception:
        log.exception("Error processing ElevenLabs webhook")
        return PlainTextResponse("Error processing webhook", status_code=500)

    log.info("Webhook processed for contact %s", result.contact_id)
    return PlainTextResponse("Webhook processed successfully", status_code=200)
