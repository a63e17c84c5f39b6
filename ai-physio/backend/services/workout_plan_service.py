from __future__ import annotations

import json

from loguru import logger
from sqlalchemy import desc
from sqlalchemy.orm import Session

from models.hypothesis import SymptomAssessment
from models.plan import CustomWorkoutPlan
from schemas.plan import CustomExercise, CustomPlanCreate, CustomPlanItem

DIFFICULTY_EXERCISES: dict[str, list[CustomExercise]] = {
    "beginner": [
        CustomExercise(
            name="Gentle Stretching",
            sets=1,
            reps="Hold 30 seconds",
            instructions="Gentle stretches to improve flexibility and reduce stiffness",
        ),
        CustomExercise(
            name="Walking",
            sets=1,
            reps="10-15 minutes",
            duration="10-15 min",
            instructions="Light walking to promote circulation and gentle movement",
        ),
        CustomExercise(
            name="Basic Range of Motion",
            sets=2,
            reps="10 repetitions",
            instructions="Slow, controlled movements to maintain joint mobility",
        ),
    ],
    "intermediate": [
        CustomExercise(
            name="Resistance Band Exercises",
            sets=3,
            reps="12-15 repetitions",
            instructions="Use light to moderate resistance to strengthen muscles",
        ),
        CustomExercise(
            name="Core Strengthening",
            sets=3,
            reps="10-12 repetitions",
            instructions="Planks, modified crunches, and stability exercises",
        ),
        CustomExercise(
            name="Balance Training",
            sets=2,
            reps="30 seconds each",
            instructions="Single-leg stands and stability challenges",
        ),
        CustomExercise(
            name="Functional Movements",
            sets=2,
            reps="8-10 repetitions",
            instructions="Squats, lunges, and movement patterns for daily activities",
        ),
    ],
    "advanced": [
        CustomExercise(
            name="Progressive Strength Training",
            sets=4,
            reps="8-12 repetitions",
            instructions="Compound movements with progressive overload",
        ),
        CustomExercise(
            name="Plyometric Exercises",
            sets=3,
            reps="6-8 repetitions",
            instructions="Jump training and explosive movements for power development",
        ),
        CustomExercise(
            name="Sport-Specific Drills",
            sets=3,
            reps="10-15 repetitions",
            instructions="Movements that mimic sport or activity demands",
        ),
        CustomExercise(
            name="Advanced Stability",
            sets=3,
            reps="45 seconds each",
            instructions="Complex balance and proprioception challenges",
        ),
    ],
}


def exercises_for_difficulty(level: str) -> list[CustomExercise]:
    return DIFFICULTY_EXERCISES.get(level.strip().lower(), DIFFICULTY_EXERCISES["beginner"])


def to_item(p: CustomWorkoutPlan) -> CustomPlanItem:
    return CustomPlanItem(
        id=str(p.id),
        plan_name=p.plan_name,
        duration_weeks=int(p.duration_weeks),
        difficulty_level=p.difficulty_level,
        injury_hypothesis_id=p.injury_hypothesis_id,
        exercises=[CustomExercise.model_validate(e) for e in json.loads(p.exercises_json or "[]")],
        created_at=p.created_at.isoformat(),
    )


def get_assessment(db: Session, user_id: str, assessment_id: str) -> SymptomAssessment | None:
    return (
        db.query(SymptomAssessment)
        .filter(SymptomAssessment.id == assessment_id, SymptomAssessment.user_id == user_id)
        .first()
    )


def create_custom_plan(db: Session, user_id: str, payload: CustomPlanCreate) -> CustomWorkoutPlan:
    level = payload.difficulty_level.strip().lower()
    exercises = exercises_for_difficulty(level)
    p = CustomWorkoutPlan(
        user_id=user_id,
        injury_hypothesis_id=payload.injury_hypothesis_id or None,
        plan_name=payload.plan_name.strip(),
        exercises_json=json.dumps([e.model_dump(exclude_none=True) for e in exercises]),
        duration_weeks=int(payload.duration_weeks),
        difficulty_level=level,
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    logger.info(f"Created custom workout plan {p.id} ({level}, {p.duration_weeks} weeks)")
    return p


def list_custom_plans(db: Session, user_id: str, limit: int = 50) -> list[CustomWorkoutPlan]:
    return (
        db.query(CustomWorkoutPlan)
        .filter(CustomWorkoutPlan.user_id == user_id)
        .order_by(desc(CustomWorkoutPlan.created_at))
        .limit(limit)
        .all()
    )
