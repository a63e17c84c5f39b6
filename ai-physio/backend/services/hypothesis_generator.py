import re
from decimal import ROUND_HALF_UP, Decimal

from schemas.hypothesis import Differential, Subjective

# (pattern, [(code, raw weight), ...]) applied in order; weights are normalized afterwards.
DIFFERENTIAL_RULES: list[tuple[re.Pattern[str], list[tuple[str, float]]]] = [
    (re.compile(r"overhead|press|pull[- ]?up"), [("SIS_subacromial", 0.5), ("RC_strain", 0.3)]),
    (re.compile(r"biceps?|groove"), [("LHBT_tendinopathy", 0.4)]),
]
FALLBACK_DIFFERENTIAL = ("NonSpecific_shoulder_pain", 0.6)

_CENT = Decimal("0.01")


def seed_differentials(report: Subjective) -> list[Differential]:
    haystack = " ".join([report.narrative, *report.aggravators]).lower()

    candidates: list[tuple[str, float]] = []
    for pattern, diffs in DIFFERENTIAL_RULES:
        if pattern.search(haystack):
            candidates.extend(diffs)
    if not candidates:
        candidates.append(FALLBACK_DIFFERENTIAL)

    total = sum(Decimal(str(w)) for _, w in candidates)
    shares = [(Decimal(str(w)) / total).quantize(_CENT, rounding=ROUND_HALF_UP) for _, w in candidates]

    # Rounding can leave the set at 0.99 or 1.01; the largest share absorbs the drift.
    drift = Decimal("1.00") - sum(shares)
    if drift:
        top = shares.index(max(shares))
        shares[top] += drift

    # Insertion order, not sorted by confidence.
    return [Differential(code=code, confidence=float(share)) for (code, _), share in zip(candidates, shares)]
