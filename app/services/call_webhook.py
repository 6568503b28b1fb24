import logging

from app.exceptions.custom import MissingCallerPhoneError
from app.mappers.call_note_builder import (
    build_call_metadata_note,
    build_summary_note,
    build_transcript_note,
    flatten_transcript,
)
from app.mappers.ghl_response import extract_contact_id
from app.mappers.phone import normalize_phone
from app.schemas.elevenlabs import InboundCallPayload
from app.schemas.ghl import ContactUpsert
from app.schemas.responses import CallWebhookResult
from app.services.claude import TranscriptExtractor
from app.services.ghl import CRMClient

logger = logging.getLogger(__name__)


def resolve_phone(
    raw_phone: str | None,
    production: bool,
    placeholder_phone: str,
    log: logging.Logger,
) -> str:
    """Normalize ``raw_phone`` or apply the missing-phone policy.

    Production rejects the request; other environments fall back to the
    placeholder number so local testing is never blocked.
    """
    phone = normalize_phone(raw_phone)
    if phone:
        return phone
    if production:
        log.warning("Missing caller phone in request")
        raise MissingCallerPhoneError()
    log.warning("Missing caller phone, using placeholder %s", placeholder_phone)
    return placeholder_phone


class CallWebhookService:
    def __init__(
        self,
        crm: CRMClient,
        extractor: TranscriptExtractor | None = None,
        production: bool = False,
        placeholder_phone: str = "+15555550100",
        log: logging.Logger | None = None,
    ):
        self._crm = crm
        self._extractor = extractor
        self._production = production
        self._placeholder_phone = placeholder_phone
        self._log = log or logger

    async def process(self, body: dict | None) -> CallWebhookResult:
        payload = InboundCallPayload.from_webhook(body)
        phone = resolve_phone(
            payload.caller_phone, self._production, self._placeholder_phone, self._log
        )
        self._log.info(
            "Extracted caller info: phone=%s call_id=%s turns=%d",
            phone,
            payload.call_id,
            len(payload.transcript_turns),
        )

        transcript = flatten_transcript(payload.transcript_turns)

        extracted = None
        if self._extractor is not None and transcript:
            extracted = await self._extractor.extract(transcript)
        if extracted is None:
            self._log.info("No extracted profile for call %s", payload.call_id)

        upsert = ContactUpsert(phone=phone)
        if extracted is not None:
            upsert = ContactUpsert(
                phone=phone,
                first_name=extracted.first_name,
                last_name=extracted.last_name,
                email=extracted.email,
                company=extracted.business_name,
            )
        response = await self._crm.create_or_update_contact(upsert)
        contact_id = extract_contact_id(response)
        self._log.info("GHL contact created/updated: %s", contact_id)

        notes = [
            build_call_metadata_note(
                phone,
                payload.call_id,
                payload.start_time_unix_secs,
                payload.end_time_unix_secs,
            ),
            build_transcript_note(transcript),
            build_summary_note(extracted),
        ]
        for note in notes:
            await self._crm.add_note(contact_id, note)

        return CallWebhookResult(
            contact_id=contact_id,
            phone=phone,
            call_id=payload.call_id,
            extracted=extracted,
            notes_attempted=len(notes),
        )
