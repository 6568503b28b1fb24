"""Parsers for the response bodies returned by the GoHighLevel API.

GHL wraps the same object differently depending on the endpoint and API
revision. Each parser tries the known shapes in a fixed priority order and
raises ``UnrecognizedResponseShapeError`` when none of them match, or when
the matching shape holds records that fail validation.
"""

from pydantic import ValidationError

from app.exceptions.custom import UnrecognizedResponseShapeError
from app.schemas.ghl import GHLContact, GHLNote


def _looks_like_contact(obj: object) -> bool:
    return isinstance(obj, dict) and bool(obj.get("id"))


def parse_contact(body: object) -> GHLContact:
    """Single contact, tried as ``contact`` → ``contacts`` → ``data`` → body."""
    candidates: list[object] = []
    if isinstance(body, dict):
        candidates.extend(
            [body.get("contact"), body.get("contacts"), body.get("data"), body]
        )

    for candidate in candidates:
        if _looks_like_contact(candidate):
            try:
                return GHLContact.model_validate(candidate)
            except ValidationError:
                continue

    raise UnrecognizedResponseShapeError("contact", body)


def extract_contact_id(body: object) -> str:
    return parse_contact(body).id


def parse_contact_list(body: object) -> list[GHLContact]:
    """Contact list, tried as ``contacts.contacts`` → ``contacts.items`` →
    ``contacts`` → ``data``."""
    if not isinstance(body, dict):
        raise UnrecognizedResponseShapeError("contact list", body)

    contacts = body.get("contacts")
    candidates: list[object] = []
    if isinstance(contacts, dict):
        candidates.extend([contacts.get("contacts"), contacts.get("items")])
    candidates.extend([contacts, body.get("data")])

    for candidate in candidates:
        if isinstance(candidate, list):
            try:
                return [
                    GHLContact.model_validate(c)
                    for c in candidate
                    if _looks_like_contact(c)
                ]
            except ValidationError as exc:
                raise UnrecognizedResponseShapeError("contact list", body) from exc

    raise UnrecognizedResponseShapeError("contact list", body)


def parse_note_list(body: object) -> list[GHLNote]:
    """Note list, tried as ``notes`` → ``data`` → a bare list."""
    candidates: list[object] = []
    if isinstance(body, dict):
        candidates.extend([body.get("notes"), body.get("data")])
    else:
        candidates.append(body)

    for candidate in candidates:
        if isinstance(candidate, list):
            try:
                return [
                    GHLNote.model_validate(n) for n in candidate if isinstance(n, dict)
                ]
            except ValidationError as exc:
                raise UnrecognizedResponseShapeError("note list", body) from exc

    raise UnrecognizedResponseShapeError("note list", body)
