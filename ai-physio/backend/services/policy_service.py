from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from services.intent_service import matches_red_flag

SAFETY_MESSAGE = (
    "Your recent input/logs suggest red-flag symptoms. Please seek in-person medical care. "
    "I won't change your plan right now."
)
SEVERE_PAIN_THRESHOLD = 7


def _pain_of(log: Any) -> float:
    pain = log.get("pain") if isinstance(log, Mapping) else getattr(log, "pain", None)
    return pain if isinstance(pain, (int, float)) else 0


def should_gate_for_red_flags(input_text: str, recent_logs: Sequence[Any] = ()) -> bool:
    """
    Safety check that runs before intent classification and before any mutation.
    True if the text carries a red-flag phrase or any recent log reports pain >= 7.
    """
    red_in_text = matches_red_flag(input_text)
    severe_in_logs = any(_pain_of(log) >= SEVERE_PAIN_THRESHOLD for log in recent_logs)

    if red_in_text or severe_in_logs:
        logger.warning(f"Red-flag gate triggered (text={red_in_text}, logs={severe_in_logs})")
        return True
    return False
