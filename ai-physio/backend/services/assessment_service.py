from __future__ import annotations

from dataclasses import dataclass

from loguru import logger
from sqlalchemy import desc
from sqlalchemy.orm import Session

from models.hypothesis import SymptomAssessment
from schemas.hypothesis import AssessmentItem

MAX_CONFIDENCE = 10

# First region whose keywords appear in the symptoms wins.
COMMON_CONDITIONS: list[tuple[tuple[str, ...], str, int]] = [
    (
        ("back", "lower back", "spine", "lumbar"),
        "Lower back strain or muscle spasm, possibly due to poor posture or sudden movement",
        7,
    ),
    (
        ("knee", "kneecap", "patella"),
        "Patellofemoral pain syndrome or knee strain from overuse or improper movement",
        6,
    ),
    (
        ("shoulder", "arm", "rotator"),
        "Rotator cuff strain or shoulder impingement from repetitive overhead movements",
        8,
    ),
    (
        ("neck", "cervical", "stiff neck"),
        "Cervical strain or tension headache from poor posture or stress",
        7,
    ),
    (
        ("ankle", "foot", "heel"),
        "Ankle sprain or plantar fasciitis from overuse or improper footwear",
        6,
    ),
]
GENERAL_STRAIN = (
    "General musculoskeletal strain. Recommend rest, ice, and gentle movement. "
    "Consider consulting a healthcare professional for persistent symptoms.",
    5,
)


@dataclass(frozen=True)
class AssessmentResult:
    hypothesis: str
    confidence: int


def assess_symptoms(symptoms: str) -> AssessmentResult:
    lowered = symptoms.lower()
    for keywords, hypothesis, confidence in COMMON_CONDITIONS:
        if any(k in lowered for k in keywords):
            return AssessmentResult(hypothesis=hypothesis, confidence=min(confidence, MAX_CONFIDENCE))
    hypothesis, confidence = GENERAL_STRAIN
    return AssessmentResult(hypothesis=hypothesis, confidence=confidence)


def to_item(a: SymptomAssessment) -> AssessmentItem:
    return AssessmentItem(
        id=str(a.id),
        symptoms=a.symptoms,
        hypothesis=a.hypothesis,
        confidence_score=int(a.confidence_score),
        created_at=a.created_at.isoformat(),
    )


def create_assessment(db: Session, user_id: str, symptoms: str) -> SymptomAssessment:
    text = symptoms.strip()
    result = assess_symptoms(text)
    a = SymptomAssessment(
        user_id=user_id,
        symptoms=text,
        hypothesis=result.hypothesis,
        confidence_score=result.confidence,
    )
    db.add(a)
    db.commit()
    db.refresh(a)
    logger.info(f"Stored symptom assessment {a.id} (confidence={a.confidence_score})")
    return a


def list_assessments(db: Session, user_id: str, limit: int = 50) -> list[SymptomAssessment]:
    return (
        db.query(SymptomAssessment)
        .filter(SymptomAssessment.user_id == user_id)
        .order_by(desc(SymptomAssessment.created_at))
        .limit(limit)
        .all()
    )
