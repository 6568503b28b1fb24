import logging

from app.mappers.call_note_builder import (
    combine_notes,
    is_transcript_note,
    strip_transcript_marker,
)
from app.schemas.responses import LookupResponse
from app.services.call_webhook import resolve_phone
from app.services.ghl import CRMClient

logger = logging.getLogger(__name__)


class LookupService:
    def __init__(
        self,
        crm: CRMClient,
        production: bool = False,
        placeholder_phone: str = "+15555550100",
        log: logging.Logger | None = None,
    ):
        self._crm = crm
        self._production = production
        self._placeholder_phone = placeholder_phone
        self._log = log or logger

    async def lookup(self, raw_phone: str | None) -> LookupResponse:
        phone = resolve_phone(
            raw_phone, self._production, self._placeholder_phone, self._log
        )
        self._log.info("Lookup request for %s", phone)

        contact = await self._crm.find_contact_by_phone(phone)
        if contact is None:
            self._log.info("Contact not found for %s", phone)
            return LookupResponse(found=False)

        notes = await self._crm.get_contact_notes(contact.id)
        transcript_note = next((n for n in notes if is_transcript_note(n.body)), None)
        transcript = strip_transcript_marker(transcript_note.body) if transcript_note else ""

        self._log.info("Contact found: %s (%d notes)", contact.id, len(notes))
        return LookupResponse(
            found=True,
            firstName=contact.firstName or "",
            lastName=contact.lastName or "",
            email=contact.email or "",
            company=contact.companyName or "",
            transcript=transcript,
            notes=combine_notes([n.body for n in notes]),
        )
