from __future__ import annotations

import json

from loguru import logger
from sqlalchemy import desc
from sqlalchemy.orm import Session

from models.plan import CustomWorkoutPlan
from models.session_log import CheckIn
from schemas.checkin import CheckInCreate, CheckInItem


def get_custom_plan(db: Session, user_id: str, plan_id: str) -> CustomWorkoutPlan | None:
    return (
        db.query(CustomWorkoutPlan)
        .filter(CustomWorkoutPlan.id == plan_id, CustomWorkoutPlan.user_id == user_id)
        .first()
    )


def create_check_in(db: Session, user_id: str, payload: CheckInCreate) -> CheckIn:
    completed = [name.strip() for name in payload.completed_exercises if name and name.strip()]
    c = CheckIn(
        user_id=user_id,
        workout_plan_id=payload.workout_plan_id or None,
        pain_level=payload.pain_level,
        mobility_score=payload.mobility_score,
        notes=(payload.notes or "").strip() or None,
        completed_exercises_json=json.dumps(completed) if completed else None,
    )
    db.add(c)
    db.commit()
    db.refresh(c)
    logger.info(f"Stored check-in {c.id} (pain={c.pain_level}, mobility={c.mobility_score})")
    return c


def list_check_ins(db: Session, user_id: str, limit: int = 30) -> list[CheckInItem]:
    rows = (
        db.query(CheckIn, CustomWorkoutPlan.plan_name)
        .outerjoin(CustomWorkoutPlan, CheckIn.workout_plan_id == CustomWorkoutPlan.id)
        .filter(CheckIn.user_id == user_id)
        .order_by(desc(CheckIn.created_at))
        .limit(limit)
        .all()
    )
    return [to_item(c, plan_name) for c, plan_name in rows]


def to_item(c: CheckIn, plan_name: str | None = None) -> CheckInItem:
    return CheckInItem(
        id=str(c.id),
        created_at=c.created_at.isoformat(),
        pain_level=int(c.pain_level),
        mobility_score=int(c.mobility_score),
        notes=c.notes,
        workout_plan_id=c.workout_plan_id,
        plan_name=plan_name,
        completed_exercises=json.loads(c.completed_exercises_json) if c.completed_exercises_json else None,
    )
