import aiosmtplib
import pytest
from identity.mail.smtp_adapter import SmtpMailer


@pytest.fixture()
def mailer():
    return SmtpMailer(
        host="smtp.example.com",
        port=587,
        username="postmaster",
        password="secret",
        sender="Storefront <no-reply@storefront.example.com>",
        use_tls=True,
    )


class TestSmtpMailer:
    def test_message_is_handed_to_aiosmtplib(self, mailer, monkeypatch):
        calls = []

        async def fake_send(message, **kwargs):
            calls.append((message, kwargs))

        monkeypatch.setattr(aiosmtplib, "send", fake_send)

        result = mailer.send("ada@example.com", "Reset your password", "Follow the link")

        assert result["status"] == "sent"
        assert result["message_id"]

        message, kwargs = calls[0]
        assert message["To"] == "ada@example.com"
        assert message["Subject"] == "Reset your password"
        assert message["Message-ID"] == result["message_id"]
        assert message.get_content().strip() == "Follow the link"
        assert kwargs["hostname"] == "smtp.example.com"
        assert kwargs["port"] == 587
        assert kwargs["username"] == "postmaster"
        assert kwargs["password"] == "secret"
        assert kwargs["start_tls"] is True

    def test_anonymous_relay_sends_no_credentials(self, monkeypatch):
        calls = []

        async def fake_send(message, **kwargs):
            calls.append(kwargs)

        monkeypatch.setattr(aiosmtplib, "send", fake_send)

        SmtpMailer(host="relay.local", port=25, username="", password="", use_tls=False).send(
            "ada@example.com", "Hi", "Body"
        )

        assert calls[0]["username"] is None
        assert calls[0]["password"] is None
        assert calls[0]["start_tls"] is False

    @pytest.mark.parametrize(
        "error",
        [aiosmtplib.SMTPServerDisconnected("Connection lost"), ConnectionRefusedError("refused")],
    )
    def test_delivery_failure_is_reported(self, mailer, monkeypatch, error):
        async def failing_send(message, **kwargs):
            raise error

        monkeypatch.setattr(aiosmtplib, "send", failing_send)

        result = mailer.send("ada@example.com", "Reset your password", "Follow the link")

        assert result["status"] == "failed"
        assert result["message_id"] is None
        assert result["error"]
