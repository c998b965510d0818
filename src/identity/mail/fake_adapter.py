"""Fake mailer: keeps an outbox in memory for tests and local runs."""

from uuid import uuid4

from identity.mail.port import MailPort


class FakeMailer(MailPort):
    def __init__(self):
        self.outbox: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Mail delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Mail delivery failed"):
        """Configure the fake mailer behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, to: str, subject: str, body: str) -> dict:
        if not self.should_succeed:
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"mail-{uuid4().hex[:12]}"
        self.outbox.append({"message_id": message_id, "to": to, "subject": subject, "body": body})
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Empty the outbox (useful between tests)."""
        self.outbox.clear()
        self.should_succeed = True
        self.failure_reason = "Mail delivery failed"
