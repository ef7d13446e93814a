"""Email module for outgoing account emails."""

from .schemas import EmailRecipient, SendEmailRequest, SendEmailResponse
from .service import EmailSender, LoggingEmailSender


__all__ = [
    "EmailRecipient",
    "EmailSender",
    "LoggingEmailSender",
    "SendEmailRequest",
    "SendEmailResponse",
]
