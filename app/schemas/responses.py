from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExtractedProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    business_name: str = Field("", alias="businessName")
    summary: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> str:
        # The model sometimes answers null or a number for missing fields
        if value is None:
            return ""
        return str(value).strip()


class LookupResponse(BaseModel):
    found: bool
    firstName: str | None = None
    lastName: str | None = None
    email: str | None = None
    company: str | None = None
    transcript: str | None = None
    notes: str | None = None


class CallWebhookResult(BaseModel):
    contact_id: str
    phone: str
    call_id: str | None = None
    extracted: ExtractedProfile | None = None
    notes_attempted: int = 0
