"""Mail port: abstract interface for outbound account emails."""

from abc import ABC, abstractmethod


class MailPort(ABC):
    """Abstract interface for mail delivery adapters."""

    @abstractmethod
    def send(self, to: str, subject: str, body: str) -> dict:
        """Deliver a plain-text message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
