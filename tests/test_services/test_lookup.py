from unittest.mock import AsyncMock

import pytest

from app.exceptions.custom import MissingCallerPhoneError
from app.mappers.call_note_builder import NOTES_SEPARATOR, build_transcript_note
from app.schemas.ghl import GHLContact, GHLNote
from app.services.ghl import CRMClient
from app.services.lookup import LookupService


@pytest.fixture
def crm():
    return AsyncMock(spec=CRMClient)


async def test_not_found(crm):
    crm.find_contact_by_phone.return_value = None
    service = LookupService(crm, production=True)

    result = await service.lookup("415-555-0100")

    assert result.model_dump() == {
        "found": False,
        "firstName": None,
        "lastName": None,
        "email": None,
        "company": None,
        "transcript": None,
        "notes": None,
    }
    crm.find_contact_by_phone.assert_awaited_once_with("+14155550100")
    crm.get_contact_notes.assert_not_awaited()


async def test_found_with_notes(crm):
    crm.find_contact_by_phone.return_value = GHLContact(
        id="c1", firstName="Ada", lastName="Lovelace", email="ada@acme.io", companyName="Acme"
    )
    transcript_body = build_transcript_note("AGENT: Hello\nUSER: Hi")
    crm.get_contact_notes.return_value = [
        GHLNote(id="3", body="Follow up next week"),
        GHLNote(id="2", body=transcript_body),
        GHLNote(id="1", body="First call"),
    ]
    service = LookupService(crm, production=True)

    result = await service.lookup("+14155550100")

    assert result.found is True
    assert result.firstName == "Ada"
    assert result.company == "Acme"
    assert result.transcript == "AGENT: Hello\nUSER: Hi"
    assert result.notes == NOTES_SEPARATOR.join(
        ["Follow up next week", transcript_body, "First call"]
    )
    crm.get_contact_notes.assert_awaited_once_with("c1")


async def test_found_uses_newest_transcript(crm):
    crm.find_contact_by_phone.return_value = GHLContact(id="c1")
    crm.get_contact_notes.return_value = [
        GHLNote(body=build_transcript_note("USER: newest")),
        GHLNote(body=build_transcript_note("USER: oldest")),
    ]
    result = await LookupService(crm, production=True).lookup("+14155550100")
    assert result.transcript == "USER: newest"


async def test_found_without_fields_or_notes_defaults_to_empty(crm):
    crm.find_contact_by_phone.return_value = GHLContact(id="c1")
    crm.get_contact_notes.return_value = []

    result = await LookupService(crm, production=True).lookup("+14155550100")

    assert result.found is True
    assert result.firstName == ""
    assert result.lastName == ""
    assert result.email == ""
    assert result.company == ""
    assert result.transcript == ""
    assert result.notes == ""


async def test_missing_phone_production(crm):
    with pytest.raises(MissingCallerPhoneError):
        await LookupService(crm, production=True).lookup(None)
    crm.find_contact_by_phone.assert_not_awaited()


async def test_missing_phone_placeholder(crm):
    crm.find_contact_by_phone.return_value = None
    await LookupService(crm, production=False, placeholder_phone="+15555550100").lookup("")
    crm.find_contact_by_phone.assert_awaited_once_with("+15555550100")
