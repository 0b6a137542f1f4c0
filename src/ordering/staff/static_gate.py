"""Auth gate backed by a fixed token table (``ORDERBOARD_STAFF_TOKENS``)."""

import secrets

from ordering.staff.gate import AuthGate, StaffSession


class StaticTokenGate(AuthGate):
    def __init__(self, tokens: dict[str, str]):
        self._tokens = dict(tokens)

    def current_session(self, token: str | None) -> StaffSession | None:
        if not token:
            return None
        for known, staff_name in self._tokens.items():
            if secrets.compare_digest(known, token):
                return StaffSession(staff_name=staff_name, token=token)
        return None

    def revoke(self, token: str) -> None:
        """Log a staff member out."""
        self._tokens.pop(token, None)
