"""Fake hand-off adapter: records summaries for testing."""

from uuid import uuid4

from ordering.handoff.port import HandoffPort


class FakeHandoffAdapter(HandoffPort):
    """Hand-off adapter that keeps summaries in memory for test assertions."""

    def __init__(self):
        self.sent_summaries: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Hand-off failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Hand-off failed"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, summary: str) -> dict:
        if not self.should_succeed:
            return {"handoff_id": None, "status": "failed", "error": self.failure_reason}

        handoff_id = f"handoff-{uuid4().hex[:12]}"
        self.sent_summaries.append({"handoff_id": handoff_id, "summary": summary})
        return {"handoff_id": handoff_id, "status": "sent"}

    def reset(self):
        """Clear recorded summaries (useful between tests)."""
        self.sent_summaries.clear()
        self.should_succeed = True
        self.failure_reason = "Hand-off failed"
