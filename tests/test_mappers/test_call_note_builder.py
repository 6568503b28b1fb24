from app.mappers.call_note_builder import (
    NOTES_SEPARATOR,
    TRANSCRIPT_NOTE_MARKER,
    build_call_metadata_note,
    build_summary_note,
    build_transcript_note,
    combine_notes,
    flatten_transcript,
    format_unix_time,
    is_transcript_note,
    strip_transcript_marker,
)
from app.schemas.elevenlabs import ConversationTranscriptEntry
from app.schemas.responses import ExtractedProfile


def test_marker_is_versioned():
    assert TRANSCRIPT_NOTE_MARKER == "[transcript:v1]"


def test_flatten_one_line_per_turn():
    turns = [
        ConversationTranscriptEntry(role="agent", message="Hi, how can I help?"),
        ConversationTranscriptEntry(role="user", message="I need a quote"),
        ConversationTranscriptEntry(role="agent", message="Sure"),
    ]
    lines = flatten_transcript(turns).split("\n")

    assert len(lines) == 3
    assert lines[0] == "AGENT: Hi, how can I help?"
    assert lines[1] == "USER: I need a quote"
    assert all(line.startswith(("AGENT: ", "USER: ")) for line in lines)


def test_flatten_none_message():
    turns = [ConversationTranscriptEntry(role="user", message=None)]
    assert flatten_transcript(turns) == "USER: "


def test_flatten_empty():
    assert flatten_transcript([]) == ""


def test_format_unix_time():
    assert format_unix_time(0) == "1970-01-01T00:00:00Z"
    assert format_unix_time(None) == "Unknown"


def test_call_metadata_note():
    note = build_call_metadata_note("+14155550100", "CA123", 1700000000, 1700000090)

    assert "Caller: +14155550100" in note
    assert "Call ID: CA123" in note
    assert "Start: 2023-11-14T22:13:20Z" in note
    assert "End: 2023-11-14T22:14:50Z" in note
    assert not is_transcript_note(note)


def test_call_metadata_note_unknowns():
    note = build_call_metadata_note("+14155550100", None, None, None)
    assert "Call ID: Unknown" in note
    assert "Start: Unknown" in note


def test_transcript_note_round_trip():
    note = build_transcript_note("AGENT: Hello\nUSER: Hi")
    assert is_transcript_note(note)
    assert strip_transcript_marker(note) == "AGENT: Hello\nUSER: Hi"


def test_strip_leaves_other_notes_alone():
    assert strip_transcript_marker("just a note") == "just a note"


def test_summary_note_with_profile():
    profile = ExtractedProfile(
        first_name="Ada", last_name="Lovelace", email="ada@acme.io",
        business_name="Acme", summary="Wants a demo",
    )
    note = build_summary_note(profile)
    assert "Name: Ada Lovelace" in note
    assert "Email: ada@acme.io" in note
    assert "Business: Acme" in note
    assert "Summary: Wants a demo" in note


def test_summary_note_without_profile_has_empty_fields():
    note = build_summary_note(None)
    assert "Name: \n" in note
    assert note.endswith("Summary: ")


def test_combine_notes():
    assert combine_notes(["a", "", "b", "c"]) == f"a{NOTES_SEPARATOR}b{NOTES_SEPARATOR}c"
    assert combine_notes([]) == ""
