from pydantic import BaseModel, Field, StrictStr, field_validator

class ContactMessage(BaseModel):
    message: StrictStr = Field(..., description="Free text message, trimmed here and HTML escaped by the route")

    @field_validator("message")
    @classmethod
    def trim_and_require(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message cannot be empty")
        return value
