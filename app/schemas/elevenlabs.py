from pydantic import BaseModel


class ConversationTranscriptEntry(BaseModel):
    role: str = ""  # "agent" | "user"
    message: str | None = ""


class PhoneCallMetadata(BaseModel):
    external_number: str | None = None
    call_sid: str | None = None


class ConversationMetadata(BaseModel):
    start_time_unix_secs: int | None = None
    accepted_time_unix_secs: int | None = None
    call_duration_secs: int | None = None
    phone_call: PhoneCallMetadata | None = None


class DynamicVariables(BaseModel):
    model_config = {"extra": "allow"}

    system__caller_id: str | None = None
    system__call_sid: str | None = None


class ConversationInitiationClientData(BaseModel):
    dynamic_variables: DynamicVariables = DynamicVariables()


class PostCallData(BaseModel):
    conversation_id: str | None = None
    transcript: list[ConversationTranscriptEntry] | None = None
    metadata: ConversationMetadata = ConversationMetadata()
    conversation_initiation_client_data: ConversationInitiationClientData = (
        ConversationInitiationClientData()
    )


class PostCallWebhook(BaseModel):
    """Raw ElevenLabs ``post_call_transcription`` body."""

    model_config = {"extra": "allow"}

    type: str | None = None
    caller_id: str | None = None
    data: PostCallData = PostCallData()


class InboundCallPayload(BaseModel):
    caller_phone: str | None = None
    call_id: str | None = None
    transcript_turns: list[ConversationTranscriptEntry] = []
    start_time_unix_secs: int | None = None
    end_time_unix_secs: int | None = None

    @classmethod
    def from_webhook(cls, body: dict | None) -> "InboundCallPayload":
        raw = PostCallWebhook.model_validate(body or {})
        data = raw.data
        dynamic = data.conversation_initiation_client_data.dynamic_variables
        metadata = data.metadata
        phone_call = metadata.phone_call or PhoneCallMetadata()

        end_time = metadata.accepted_time_unix_secs
        if (
            end_time is None
            and metadata.start_time_unix_secs is not None
            and metadata.call_duration_secs is not None
        ):
            end_time = metadata.start_time_unix_secs + metadata.call_duration_secs

        return cls(
            caller_phone=(
                dynamic.system__caller_id
                or phone_call.external_number
                or raw.caller_id
            ),
            call_id=dynamic.system__call_sid or phone_call.call_sid or data.conversation_id,
            transcript_turns=data.transcript or [],
            start_time_unix_secs=metadata.start_time_unix_secs,
            end_time_unix_secs=end_time,
        )
