"""Mail adapter registry for account emails.

Uses FakeMailer by default. Set MAIL_ADAPTER=smtp to deliver through the
SMTP server configured in ``shared.config``.
"""

from shared import config

_mailer_instance = None


def get_mailer():
    """Return the configured mail adapter (singleton)."""
    global _mailer_instance
    if _mailer_instance is None:
        adapter = config.MAIL_ADAPTER
        if adapter == "fake":
            from identity.mail.fake_adapter import FakeMailer

            _mailer_instance = FakeMailer()
        elif adapter == "smtp":
            from identity.mail.smtp_adapter import SmtpMailer

            _mailer_instance = SmtpMailer()
        else:
            raise ValueError(f"Unknown mail adapter: {adapter}")
    return _mailer_instance


def reset_mailer():
    """Reset the mailer singleton (useful for testing)."""
    global _mailer_instance
    _mailer_instance = None
