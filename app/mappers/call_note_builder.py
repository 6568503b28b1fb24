from datetime import datetime, timezone

from app.schemas.elevenlabs import ConversationTranscriptEntry
from app.schemas.responses import ExtractedProfile

# Transcript notes start with this line; lookups match on it.
TRANSCRIPT_NOTE_MARKER = "[transcript:v1]"
CALL_NOTE_MARKER = "[call:v1]"
SUMMARY_NOTE_MARKER = "[summary:v1]"

NOTES_SEPARATOR = "\n\n---\n\n"

_UNKNOWN = "Unknown"


def format_unix_time(value: int | None) -> str:
    if value is None:
        return _UNKNOWN
    return (
        datetime.fromtimestamp(value, tz=timezone.utc)
        .isoformat(timespec="seconds")
        .replace("+00:00", "Z")
    )


def flatten_transcript(turns: list[ConversationTranscriptEntry]) -> str:
    """One ``ROLE: message`` line per turn."""
    return "\n".join(
        f"{turn.role.upper()}: {turn.message or ''}" for turn in turns
    )


def build_call_metadata_note(
    phone: str,
    call_id: str | None,
    start_time_unix_secs: int | None,
    end_time_unix_secs: int | None,
) -> str:
    lines = [
        CALL_NOTE_MARKER,
        "ElevenLabs Call",
        f"Caller: {phone}",
        f"Call ID: {call_id or _UNKNOWN}",
        f"Start: {format_unix_time(start_time_unix_secs)}",
        f"End: {format_unix_time(end_time_unix_secs)}",
    ]
    return "\n".join(lines)


def build_transcript_note(transcript: str) -> str:
    return f"{TRANSCRIPT_NOTE_MARKER}\n{transcript}"


def build_summary_note(extracted: ExtractedProfile | None) -> str:
    profile = extracted or ExtractedProfile()
    name = " ".join(p for p in (profile.first_name, profile.last_name) if p)
    lines = [
        SUMMARY_NOTE_MARKER,
        "AI Call Summary",
        f"Name: {name}",
        f"Email: {profile.email}",
        f"Business: {profile.business_name}",
        f"Summary: {profile.summary}",
    ]
    return "\n".join(lines)


def is_transcript_note(body: str) -> bool:
    return body.startswith(TRANSCRIPT_NOTE_MARKER)


def strip_transcript_marker(body: str) -> str:
    if not is_transcript_note(body):
        return body
    return body[len(TRANSCRIPT_NOTE_MARKER):].lstrip("\r\n")


def combine_notes(bodies: list[str]) -> str:
    return NOTES_SEPARATOR.join(b for b in bodies if b)
