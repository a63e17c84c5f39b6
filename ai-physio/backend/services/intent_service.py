import re
from enum import Enum
from typing import Any


class Intent(str, Enum):
    CLARIFY_NEEDED = "clarify_needed"
    REPORT_SYMPTOM = "report_symptom"
    LOG_SESSION = "log_session"
    REQUEST_PLAN = "request_plan"
    UPDATE_HYPOTHESIS = "update_hypothesis"
    ADJUST_PLAN = "adjust_plan"
    ASK_QUESTION = "ask_question"
    RED_FLAG = "red_flag"
    NONE = "none"


# Shared with the policy gate.
RED_FLAG_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"numb|tingl|loss of sensation", re.IGNORECASE),
    re.compile(r"fever|chills|night sweats", re.IGNORECASE),
    re.compile(r"severe|unbearable", re.IGNORECASE),
)
SEVERE_RATING = re.compile(r"(?<!\d)(?:8|9|10)\s*/\s*10\b")

# An "8/10" that belongs to RPE is effort, not pain.
_RPE_BEFORE = re.compile(r"\brpe\b\D{0,6}$", re.IGNORECASE)
_RPE_AFTER = re.compile(r"\D{0,6}\brpe\b", re.IGNORECASE)
_PAIN_BEFORE = re.compile(r"(?:pain|ache)\D{0,6}$", re.IGNORECASE)

_LOG_SESSION = re.compile(
    r"\b(?:rpe|rate of perceived|logged|did my|completed|today['’]?s session)\b", re.IGNORECASE
)
_REPORT_SYMPTOM = re.compile(
    r"\b(?:new|worse|now hurts|started hurting|clicking|swelling|tenderness)", re.IGNORECASE
)
_PLAN_NOUN = re.compile(r"\b(?:plan|workout|program)s?\b", re.IGNORECASE)
_PLAN_VERB = re.compile(r"\b(?:make|generate|update|adjust)", re.IGNORECASE)
_QUESTION = re.compile(r"\b(?:how|should|can i|what if)\b", re.IGNORECASE)


def _is_rpe_rating(text: str, start: int, end: int) -> bool:
    before, after = text[:start], text[end:]
    if _RPE_BEFORE.search(before):
        return True
    return bool(_RPE_AFTER.match(after)) and not _PAIN_BEFORE.search(before)


def has_severe_rating(text: str) -> bool:
    """Any 8/10..10/10 rating in the text, unless it is an RPE."""
    return any(not _is_rpe_rating(text, m.start(), m.end()) for m in SEVERE_RATING.finditer(text))


def matches_red_flag(text: str) -> bool:
    return any(p.search(text) for p in RED_FLAG_PATTERNS) or has_severe_rating(text)


def classify_intent(text: str, context: Any = None) -> Intent:
    """
    Ordered rules, first match wins. `context` is accepted for a future
    context-aware classifier but does not influence the result today.
    """
    t = text.strip()

    if matches_red_flag(t):
        return Intent.RED_FLAG
    if _LOG_SESSION.search(t):
        return Intent.LOG_SESSION
    if _REPORT_SYMPTOM.search(t):
        return Intent.REPORT_SYMPTOM
    if _PLAN_NOUN.search(t) and _PLAN_VERB.search(t):
        return Intent.REQUEST_PLAN
    if _QUESTION.search(t):
        return Intent.ASK_QUESTION
    return Intent.NONE
