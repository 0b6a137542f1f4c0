"""Hand-off port: abstract interface for sending a placed order's summary out."""

from abc import ABC, abstractmethod


class HandoffPort(ABC):
    """Abstract interface for order hand-off adapters."""

    @abstractmethod
    def send(self, summary: str) -> dict:
        """Hand a human-readable order summary to the outbound channel.

        Returns:
            dict with keys: handoff_id, status ("sent" or "failed"), error (optional)
        """
        ...
