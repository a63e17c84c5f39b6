"""0..10 self-report scales (pain, RPE): datastore coercion and free-text extraction."""

from __future__ import annotations

import json
import re
from typing import Any

SCALE_MIN = 0
SCALE_MAX = 10

PAIN_KEYWORD = re.compile(r"pain|ache", re.IGNORECASE)
RPE_KEYWORD = re.compile(r"\brpe\b", re.IGNORECASE)

_RATING = r"(?<!\d)(\d{1,2})\s*/\s*10\b"


def _in_range(n: float) -> bool:
    return SCALE_MIN <= n <= SCALE_MAX


def coerce_overall(value: Any) -> int | float | None:
    """
    Read a stored pain/RPE value as a plain number. Whole numbers come back as int.

    Rows may hold a bare number or {"overall": n}, either as a Python value or as JSON text.
    Anything else, or a number outside 0..10, is None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = json.loads(text)
        except json.JSONDecodeError:
            return None
    if isinstance(value, dict):
        value = value.get("overall")
    # bool is an int subclass; True is not a pain score.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not _in_range(value):
        return None
    return int(value) if float(value).is_integer() else value


def extract_scale(text: str, keyword: re.Pattern[str]) -> int | None:
    """
    Pull a 0..10 rating for `keyword` out of free text, or None. Never guesses.

    1. An "N/10" rating attached to the keyword ("pain 2/10", "2/10 pain").
    2. The keyword followed within 6 characters by 1-2 digits ("RPE 6").
    """
    if not keyword.search(text):
        return None
    kw = keyword.pattern

    rated = re.search(rf"(?:{kw})\D{{0,6}}{_RATING}", text, re.IGNORECASE) or re.search(
        rf"{_RATING}\D{{0,6}}(?:{kw})", text, re.IGNORECASE
    )
    if rated:
        n = int(rated.group(1))
        if _in_range(n):
            return n

    near = re.search(rf"(?:{kw})\D{{0,6}}(\d{{1,2}})", text, re.IGNORECASE)
    if near:
        n = int(near.group(1))
        if _in_range(n):
            return n
    return None
