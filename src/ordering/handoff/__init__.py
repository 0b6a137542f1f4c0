"""Hand-off adapter registry.

Uses the fake adapter by default; ``ORDERBOARD_HANDOFF=whatsapp`` selects
the WhatsApp deep-link adapter.
"""

from ordering import settings

_handoff_instance = None


def get_handoff():
    """Return the configured hand-off adapter (singleton)."""
    global _handoff_instance
    if _handoff_instance is None:
        adapter = settings.handoff_adapter()
        if adapter == "fake":
            from ordering.handoff.fake import FakeHandoffAdapter

            _handoff_instance = FakeHandoffAdapter()
        elif adapter == "whatsapp":
            from ordering.handoff.whatsapp import WhatsAppLinkAdapter

            _handoff_instance = WhatsAppLinkAdapter(phone=settings.store_phone())
        else:
            raise ValueError(f"Unknown hand-off adapter: {adapter}")

    return _handoff_instance


def reset_handoff():
    """Reset the adapter singleton (useful for testing)."""
    global _handoff_instance
    _handoff_instance = None
