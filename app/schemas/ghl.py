from pydantic import BaseModel, field_validator


class GHLContact(BaseModel):
    model_config = {"extra": "allow"}

    id: str
    firstName: str | None = None
    lastName: str | None = None
    email: str | None = None
    companyName: str | None = None
    phone: str | None = None


class GHLNote(BaseModel):
    model_config = {"extra": "allow"}

    id: str | None = None
    body: str = ""
    dateAdded: str | None = None

    @field_validator("body", mode="before")
    @classmethod
    def _null_body_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class ContactUpsert(BaseModel):
    phone: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    company: str = ""
