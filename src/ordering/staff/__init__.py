"""Auth gate registry."""

from ordering import settings
from ordering.staff.gate import AuthGate

_gate_instance: AuthGate | None = None


def get_auth_gate() -> AuthGate:
    """Return the configured auth gate (singleton)."""
    global _gate_instance
    if _gate_instance is None:
        from ordering.staff.static_gate import StaticTokenGate

        _gate_instance = StaticTokenGate(settings.staff_tokens())
    return _gate_instance


def set_auth_gate(gate: AuthGate) -> None:
    global _gate_instance
    _gate_instance = gate


def reset_auth_gate():
    """Reset the gate singleton (useful for testing)."""
    global _gate_instance
    _gate_instance = None
