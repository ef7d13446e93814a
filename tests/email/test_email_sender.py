"""Tests for the logging email sender and confirmation template."""

from unittest.mock import patch

import pytest

from postsomething.email.service import EmailSender, LoggingEmailSender
from postsomething.email.templates import render_account_confirmation


class TestRenderAccountConfirmation:
    def test_contains_link_and_name(self) -> None:
        html, text = render_account_confirmation(
            "bob", "http://localhost:8000/confirm-account/u1/tok", 24
        )

        assert 'href="http://localhost:8000/confirm-account/u1/tok"' in html
        assert "bob" in html
        assert "http://localhost:8000/confirm-account/u1/tok" in text
        assert "24 hours" in text

    def test_escapes_user_name_in_html(self) -> None:
        html, _text = render_account_confirmation("<script>", "http://x/y", 24)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestLoggingEmailSender:
    @pytest.mark.asyncio
    async def test_send_simple_email_succeeds(self) -> None:
        sender = LoggingEmailSender()

        result = await sender.send_simple_email(
            to="bob@example.com", subject="Hi", body_html="<p>Hi</p>"
        )

        assert result.success is True
        assert result.message_id

    def test_base_sender_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            EmailSender()

    @pytest.mark.asyncio
    async def test_body_is_not_logged_by_default(self) -> None:
        sender = LoggingEmailSender()

        with patch("postsomething.email.service.logger") as mock_logger:
            await sender.send_simple_email(
                to="bob@example.com",
                subject="Confirm",
                body_html="<p>link</p>",
                body_text="http://x/confirm-account/u1/secret-token",
            )

        kwargs = mock_logger.info.call_args.kwargs
        assert "body_text" not in kwargs
        assert "secret-token" not in repr(kwargs)

    @pytest.mark.asyncio
    async def test_body_is_logged_when_enabled(self) -> None:
        sender = LoggingEmailSender(log_body=True)

        with patch("postsomething.email.service.logger") as mock_logger:
            await sender.send_simple_email(
                to="bob@example.com",
                subject="Confirm",
                body_html="<p>link</p>",
                body_text="http://x/confirm-account/u1/tok",
            )

        assert mock_logger.info.call_args.kwargs["body_text"] == (
            "http://x/confirm-account/u1/tok"
        )
