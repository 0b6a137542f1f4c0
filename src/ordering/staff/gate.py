"""Auth gate port: resolves a staff session from a credential."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StaffSession:
    staff_name: str
    token: str


class AuthGate(ABC):
    @abstractmethod
    def current_session(self, token: str | None) -> StaffSession | None:
        """Return the session for ``token``, or ``None`` when there is none."""
        ...
