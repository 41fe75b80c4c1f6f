"""Outbound side of a chat transport."""

from abc import ABC, abstractmethod


class Transport(ABC):
    """Sends plain-text replies to a chat."""

    @abstractmethod
    async def send_text(self, chat_id: int, text: str) -> None:
        """Send one plain-text message.

        Raises:
            TransportSendError: If delivery fails.
        """
        pass
