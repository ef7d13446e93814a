"""Pydantic schemas for outgoing email."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class EmailRecipient(BaseModel):
    """Email recipient with optional name."""

    email: EmailStr = Field(..., description="Recipient email address")
    name: str | None = Field(None, description="Recipient display name")


class SendEmailRequest(BaseModel):
    """Request to send an email."""

    to: list[EmailRecipient] = Field(
        ..., min_length=1, max_length=50, description="Recipients (max 50)"
    )
    subject: str = Field(..., min_length=1, max_length=998, description="Email subject")
    body_html: str = Field(..., min_length=1, description="HTML body content")
    body_text: str | None = Field(None, description="Plain text body (fallback)")


class SendEmailResponse(BaseModel):
    """Result of a send attempt."""

    model_config = ConfigDict(from_attributes=True)

    success: bool = Field(..., description="Whether the email was accepted")
    message_id: str | None = Field(None, description="Transport message ID")
    error: str | None = Field(None, description="Error message if failed")
