"""
Domain handlers: the only code paths the orchestrator uses to write the datastore.

Each handler wraps datastore failures in a HandlerError named after itself and
rolls the session back before re-raising.
"""

from __future__ import annotations

import json

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import HandlerError
from models.hypothesis import InjuryHypothesis
from models.plan import WorkoutPlan
from models.session_log import SessionLog
from schemas.hypothesis import Differential, HypothesisOut, Subjective
from schemas.plan import Microcycle, SessionLogOut, WorkoutPlanOut
from services.hypothesis_generator import seed_differentials
from services.plan_generator import generate_from_hypothesis
from services.scales import coerce_overall


def to_hypothesis_out(h: InjuryHypothesis) -> HypothesisOut:
    return HypothesisOut(
        id=str(h.id),
        version=int(h.version),
        subjective=Subjective.model_validate(json.loads(h.subjective_json or "{}")),
        differentials=[Differential.model_validate(d) for d in json.loads(h.differentials_json or "[]")],
        status=h.status,
        created_at=h.created_at.isoformat(),
        updated_at=h.updated_at.isoformat(),
    )


def to_plan_out(p: WorkoutPlan) -> WorkoutPlanOut:
    return WorkoutPlanOut(
        id=str(p.id),
        version=int(p.version),
        linked_hypothesis=p.linked_hypothesis,
        mesocycle_weeks=int(p.mesocycle_weeks),
        microcycles=[Microcycle.model_validate(m) for m in json.loads(p.microcycles_json or "[]")],
        progression_logic=p.progression_logic,
        created_at=p.created_at.isoformat(),
        updated_at=p.updated_at.isoformat(),
    )


def to_session_log_out(s: SessionLog) -> SessionLogOut:
    return SessionLogOut(
        id=str(s.id),
        plan_id=str(s.plan_id),
        performed_at=s.performed_at.isoformat(),
        pain=coerce_overall(s.pain_json),
        rpe=coerce_overall(s.rpe_json),
        notes=s.notes,
    )


def _next_hypothesis_version(db: Session, user_id: str) -> int:
    current = (
        db.query(func.max(InjuryHypothesis.version)).filter(InjuryHypothesis.user_id == user_id).scalar()
    )
    return int(current or 0) + 1


def create_hypothesis(db: Session, user_id: str, report: Subjective) -> InjuryHypothesis:
    try:
        version = _next_hypothesis_version(db, user_id)
        differentials = seed_differentials(report)

        h = InjuryHypothesis(
            user_id=user_id,
            version=version,
            subjective_json=report.model_dump_json(),
            differentials_json=json.dumps([d.model_dump() for d in differentials]),
            status="active",
        )
        db.add(h)
        db.commit()
        db.refresh(h)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HandlerError("create_hypothesis", str(exc)) from exc

    logger.info(f"Created hypothesis v{h.version} for user {user_id}")
    return h


def generate_plan(db: Session, user_id: str, hypothesis_id: str | None) -> WorkoutPlan:
    base = generate_from_hypothesis(hypothesis_id)
    try:
        p = WorkoutPlan(
            user_id=user_id,
            linked_hypothesis=hypothesis_id,
            version=base.version,
            mesocycle_weeks=base.mesocycle_weeks,
            microcycles_json=json.dumps([m.model_dump() for m in base.microcycles]),
            progression_logic=base.progression_logic,
        )
        db.add(p)
        db.commit()
        db.refresh(p)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HandlerError("generate_plan", str(exc)) from exc

    logger.info(f"Generated plan {p.id} (hypothesis={hypothesis_id}) for user {user_id}")
    return p


def log_session(
    db: Session,
    user_id: str,
    plan_id: str,
    pain: int | None = None,
    rpe: int | None = None,
    notes: str | None = None,
) -> SessionLog:
    try:
        s = SessionLog(
            user_id=user_id,
            plan_id=plan_id,
            exercises_json="[]",
            pain_json=json.dumps({"overall": pain}) if pain is not None else None,
            rpe_json=json.dumps({"overall": rpe}) if rpe is not None else None,
            adherence=None,
            notes=notes or None,
        )
        db.add(s)
        db.commit()
        db.refresh(s)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HandlerError("log_session", str(exc)) from exc

    logger.info(f"Logged session {s.id} on plan {plan_id} (pain={pain}, rpe={rpe})")
    return s
