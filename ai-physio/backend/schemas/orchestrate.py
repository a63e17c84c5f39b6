from typing import Any

from pydantic import BaseModel

from services.intent_service import Intent


class TurnRequest(BaseModel):
    # Typed loosely so the route can answer 400 (not 422) for missing or non-string input.
    input: Any = None


class OrchestrateResult(BaseModel):
    reply: str
    intent: Intent
    changes: dict[str, Any] | None = None
