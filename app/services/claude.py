import json
import logging
import re

from anthropic import AsyncAnthropic
from pydantic import ValidationError

from app.schemas.responses import ExtractedProfile

logger = logging.getLogger(__name__)

MODEL = "claude-sonnet-4-20250514"

SYSTEM_PROMPT = "You extract structured data from transcripts."

_JSON_RE = re.compile(r"\{[^{}]*\}")

_USER_PROMPT_TEMPLATE = '''Extract the following fields from this phone call transcript:

Transcript:
"""
{transcript}
"""

Return JSON only with this structure:

{{
  "firstName": "",
  "lastName": "",
  "email": "",
  "businessName": "",
  "summary": ""
}}
'''


def build_user_prompt(transcript: str) -> str:
    return _USER_PROMPT_TEMPLATE.format(transcript=transcript)


class TranscriptExtractor:
    def __init__(
        self,
        api_key: str,
        log: logging.Logger | None = None,
        client: AsyncAnthropic | None = None,
    ):
        self._client = client or AsyncAnthropic(api_key=api_key)
        self._log = log or logger

    async def extract(self, transcript: str) -> ExtractedProfile | None:
        """Ask the model for contact fields found in ``transcript``.

        Returns None when the reply is not usable JSON. API errors are not
        caught here.
        """
        response = await self._client.messages.create(
            model=MODEL,
            max_tokens=1024,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": build_user_prompt(transcript)}],
        )
        text = response.content[0].text

        data = self._try_parse_json(text)
        if data is None:
            self._log.error("AI JSON parse error, raw response: %r", text)
            return None

        try:
            return ExtractedProfile.model_validate(data)
        except ValidationError:
            self._log.exception("AI response did not match the profile shape")
            return None

    @staticmethod
    def _try_parse_json(text: str) -> dict | None:
        # Strip markdown fences
        stripped = re.sub(r"```(?:json)?\s*", "", text).strip().rstrip("`")

        try:
            obj = json.loads(stripped)
            if isinstance(obj, dict):
                return obj
        except (json.JSONDecodeError, ValueError):
            pass

        # Fallback: find JSON object in the text
        match = _JSON_RE.search(text)
        if match:
            try:
                return json.loads(match.group(0))
            except (json.JSONDecodeError, ValueError):
                pass

        return None
