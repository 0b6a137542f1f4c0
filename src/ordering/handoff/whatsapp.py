"""WhatsApp hand-off adapter.

Builds a ``wa.me`` deep link carrying the summary. The store opens the link
(or a configured ``opener`` does) to receive the order in WhatsApp.
"""

from urllib.parse import quote
from uuid import uuid4

import structlog

from ordering.handoff.port import HandoffPort

logger = structlog.get_logger(__name__)

WHATSAPP_BASE_URL = "https://wa.me"


def whatsapp_link(phone: str, text: str) -> str:
    digits = "".join(ch for ch in phone if ch.isdigit())
    return f"{WHATSAPP_BASE_URL}/{digits}?text={quote(text, safe='')}"


class WhatsAppLinkAdapter(HandoffPort):
    def __init__(self, phone: str, opener=None):
        self.phone = phone
        self.opener = opener
        self.last_link: str | None = None

    def send(self, summary: str) -> dict:
        if not self.phone:
            return {"handoff_id": None, "status": "failed", "error": "No store phone configured"}

        link = whatsapp_link(self.phone, summary)
        self.last_link = link
        if self.opener is not None:
            self.opener(link)

        handoff_id = f"wa-{uuid4().hex[:12]}"
        logger.info("WhatsApp hand-off link ready", handoff_id=handoff_id, link=link)
        return {"handoff_id": handoff_id, "status": "sent", "link": link}
