"""Base interface for outbound chat messengers."""

from abc import ABC, abstractmethod


class BaseMessenger(ABC):
    """Abstract base class for chat delivery transports."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return provider identifier."""
        pass

    @property
    @abstractmethod
    def configured(self) -> bool:
        """Whether credentials are present to attempt delivery."""
        pass

    @abstractmethod
    async def send(self, destination: int | str, text: str) -> None:
        """Deliver `text` to `destination`.

        Raises:
            DeliveryError: the message could not be delivered.
        """
        pass

    async def aclose(self) -> None:
        """Release transport resources."""
        pass
