"""Outgoing email.

``EmailSender`` is the interface the rest of the application talks to.
The default implementation, ``LoggingEmailSender``, does not deliver
anything: it records the message in the structured log. Message bodies
carry confirmation tokens, so they are logged only when ``log_body`` is
set (development).
"""

from abc import ABC, abstractmethod
from uuid import uuid4

from postsomething.core.logging import get_logger

from .schemas import EmailRecipient, SendEmailRequest, SendEmailResponse


logger = get_logger(__name__)


class EmailSender(ABC):
    """Base class for email transports."""

    @abstractmethod
    async def send_email(self, request: SendEmailRequest) -> SendEmailResponse:
        """Deliver ``request`` to every recipient."""

    async def send_simple_email(
        self,
        to: str,
        subject: str,
        body_html: str,
        body_text: str | None = None,
        to_name: str | None = None,
    ) -> SendEmailResponse:
        """Send a single-recipient email (convenience method)."""
        request = SendEmailRequest(
            to=[EmailRecipient(email=to, name=to_name)],
            subject=subject,
            body_html=body_html,
            body_text=body_text,
        )
        return await self.send_email(request)


class LoggingEmailSender(EmailSender):
    """Writes outgoing emails to the log instead of sending them."""

    def __init__(
        self,
        sender_address: str = "no-reply@postsomething.local",
        log_body: bool = False,
    ):
        self.sender_address = sender_address
        self.log_body = log_body

    async def send_email(self, request: SendEmailRequest) -> SendEmailResponse:
        message_id = uuid4().hex
        extra = {"body_text": request.body_text} if self.log_body else {}
        logger.info(
            "email_sent",
            message_id=message_id,
            sender=self.sender_address,
            to=[r.email for r in request.to],
            subject=request.subject[:50],
            **extra,
        )
        return SendEmailResponse(success=True, message_id=message_id)
