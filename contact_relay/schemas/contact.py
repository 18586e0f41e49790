from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ContactSubmission(BaseModel):
    """Validated contact form submission"""
    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    message: str


class EmailMessage(BaseModel):
    """Email payload in the shape the Resend API expects"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sender: str = Field(alias="from")
    to: str
    reply_to: str = Field(alias="replyTo")
    subject: str
    html: str

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class ContactResponse(BaseModel):
    """Contact response schema"""
    success: bool = True
    message: str


class ContactErrorResponse(BaseModel):
    """Error body returned for rejected or failed submissions"""
    success: bool = False
    error: str
    details: Optional[str] = None


class ContactReply(BaseModel):
    """Status and JSON body of a handled contact request, independent of the web framework"""
    status_code: int
    body: Optional[dict] = None
