import logging
from abc import ABC, abstractmethod

import httpx

from app.exceptions.custom import GHLError, RateLimitError, UnrecognizedResponseShapeError
from app.mappers.ghl_response import parse_contact, parse_contact_list, parse_note_list
from app.mappers.phone import digits_only
from app.schemas.ghl import ContactUpsert, GHLContact, GHLNote

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://rest.gohighlevel.com/v1"

MOCK_FIND_CONTACT_ID = "mock-contact"
MOCK_UPSERT_CONTACT_ID = "mock-upsert"


class CRMClient(ABC):
    """Contact/note operations the webhook handlers need from the CRM."""

    @abstractmethod
    async def find_contact_by_phone(self, phone: str | None) -> GHLContact | None: ...

    @abstractmethod
    async def create_or_update_contact(self, contact: ContactUpsert) -> dict: ...

    @abstractmethod
    async def add_note(self, contact_id: str | None, body: str | None) -> None: ...

    @abstractmethod
    async def get_contact_notes(self, contact_id: str) -> list[GHLNote]: ...


class GHLService(CRMClient):
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        location_id: str,
        base_url: str = DEFAULT_BASE_URL,
        log: logging.Logger | None = None,
    ):
        self._client = client
        self._location_id = location_id
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._log = log or logger

    @property
    def contacts_url(self) -> str:
        return f"{self._base_url}/contacts/"

    def notes_url(self, contact_id: str) -> str:
        return f"{self._base_url}/contacts/{contact_id}/notes"

    @staticmethod
    def _raise_for_status(resp: httpx.Response) -> None:
        if resp.status_code == 429:
            raise RateLimitError("GHL")
        if resp.status_code >= 400:
            raise GHLError(resp.text, status_code=resp.status_code)

    async def find_contact_by_phone(self, phone: str | None) -> GHLContact | None:
        if not phone:
            return None

        self._log.info("Searching GHL contact by phone %s", phone)
        try:
            resp = await self._client.get(
                self.contacts_url,
                params={"locationId": self._location_id, "query": phone},
                headers=self._headers,
            )
            self._raise_for_status(resp)
            candidates = parse_contact_list(resp.json())
        except (
            httpx.HTTPError, ValueError, GHLError, RateLimitError, UnrecognizedResponseShapeError
        ) as exc:
            self._log.error("Error finding contact for %s: %s", phone, _describe(exc))
            return None

        wanted = digits_only(phone)
        contact = next(
            (c for c in candidates if digits_only(c.phone) == wanted),
            candidates[0] if candidates else None,
        )

        if contact:
            self._log.info("Found contact %s", contact.id)
        else:
            self._log.info("No contact found for %s", phone)
        return contact

    async def create_or_update_contact(self, contact: ContactUpsert) -> dict:
        payload = {
            "locationId": self._location_id,
            "phone": contact.phone,
            "firstName": contact.first_name,
            "lastName": contact.last_name,
            "email": contact.email,
            "companyName": contact.company,
        }
        # Empty strings would blank out fields GHL already has
        payload = {k: v for k, v in payload.items() if v}

        self._log.info("Creating/updating GHL contact for %s", contact.phone)
        try:
            resp = await self._client.post(
                self.contacts_url, json=payload, headers=self._headers
            )
        except httpx.HTTPError as exc:
            raise GHLError(f"Transport error: {exc}") from exc
        self._raise_for_status(resp)

        body = resp.json()
        upserted = parse_contact(body)
        self._log.info("GHL contact %s created/updated", upserted.id)
        return body

    async def add_note(self, contact_id: str | None, body: str | None) -> None:
        if not contact_id or not body:
            self._log.warning("Skipped add_note due to missing contact_id or body")
            return

        try:
            resp = await self._client.post(
                self.notes_url(contact_id), json={"body": body}, headers=self._headers
            )
            self._raise_for_status(resp)
        except (httpx.HTTPError, GHLError, RateLimitError) as exc:
            self._log.error("Error adding note to contact %s: %s", contact_id, _describe(exc))
            return

        self._log.info("Note added to contact %s", contact_id)

    async def get_contact_notes(self, contact_id: str) -> list[GHLNote]:
        try:
            resp = await self._client.get(self.notes_url(contact_id), headers=self._headers)
            self._raise_for_status(resp)
            notes = parse_note_list(resp.json())
        except (
            httpx.HTTPError, ValueError, GHLError, RateLimitError, UnrecognizedResponseShapeError
        ) as exc:
            self._log.error("Error listing notes for contact %s: %s", contact_id, _describe(exc))
            return []

        notes.sort(key=lambda n: n.dateAdded or "", reverse=True)
        self._log.info("Fetched %d notes for contact %s", len(notes), contact_id)
        return notes


class SimulatedGHLService(CRMClient):
    """Stands in for GHL outside production. Makes no network calls."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    async def find_contact_by_phone(self, phone: str | None) -> GHLContact | None:
        if not phone:
            return None
        self._log.info("[TEST MODE] Simulating find_contact_by_phone for %s", phone)
        return GHLContact(id=MOCK_FIND_CONTACT_ID, phone=phone)

    async def create_or_update_contact(self, contact: ContactUpsert) -> dict:
        self._log.info("[TEST MODE] Simulating create_or_update_contact for %s", contact.phone)
        return {
            "contact": {
                "id": MOCK_UPSERT_CONTACT_ID,
                "phone": contact.phone,
                "firstName": contact.first_name,
                "lastName": contact.last_name,
                "email": contact.email,
                "companyName": contact.company,
            }
        }

    async def add_note(self, contact_id: str | None, body: str | None) -> None:
        if not contact_id or not body:
            self._log.warning("Skipped add_note due to missing contact_id or body")
            return
        self._log.info(
            "[TEST MODE] Simulating add_note for %s: %r", contact_id, body[:40]
        )

    async def get_contact_notes(self, contact_id: str) -> list[GHLNote]:
        self._log.info("[TEST MODE] Simulating get_contact_notes for %s", contact_id)
        return []


def _describe(exc: Exception) -> str:
    if isinstance(exc, GHLError):
        return f"{exc.message} (status={exc.status_code})"
    return str(exc)
