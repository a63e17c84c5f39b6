"""
Concise per-user context for the model prompt and the orchestrator.

Every query is scoped to the requesting user. Payloads stay small: free text is
truncated and only the newest few session logs are read.
"""

from __future__ import annotations

import json
from statistics import median
from typing import Any

from sqlalchemy import desc
from sqlalchemy.orm import Session

from core.config import settings
from models.hypothesis import InjuryHypothesis
from models.plan import WorkoutPlan
from models.session_log import SessionLog
from schemas.context import AgentContext, HypothesisSummary, PlanSummary, RecentLogBundle, SessionMini
from schemas.hypothesis import Differential
from services.scales import coerce_overall

TRUNCATE_AT = 240
DEFAULT_MESOCYCLE_WEEKS = 6


def safe_trunc(value: Any, n: int = TRUNCATE_AT) -> str | None:
    if not isinstance(value, str):
        return None
    return f"{value[:n]}…" if len(value) > n else value


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _loads(raw: str | None, default: Any) -> Any:
    try:
        return json.loads(raw) if raw else default
    except json.JSONDecodeError:
        return default


def _median(values: list[float]) -> float | None:
    return float(median(values)) if values else None


def get_latest_hypothesis_summary(db: Session, user_id: str) -> HypothesisSummary | None:
    h = (
        db.query(InjuryHypothesis)
        .filter(InjuryHypothesis.user_id == user_id)
        .order_by(desc(InjuryHypothesis.updated_at), desc(InjuryHypothesis.version))
        .first()
    )
    if not h:
        return None

    subj = _loads(h.subjective_json, {})
    if not isinstance(subj, dict):
        subj = {}
    bits = [
        subj.get("narrative"),
        subj.get("location"),
        ", ".join(str(a) for a in _as_list(subj.get("aggravators"))[:3]),
    ]
    key_findings = " • ".join(b for b in bits if b)

    differentials = [
        Differential.model_validate(d) for d in _as_list(_loads(h.differentials_json, [])) if isinstance(d, dict)
    ]
    return HypothesisSummary(
        id=str(h.id),
        version=int(h.version),
        differentials=differentials,
        key_findings=safe_trunc(key_findings) if key_findings else None,
    )


def get_latest_plan_summary(db: Session, user_id: str, linked_hypothesis_id: str | None = None) -> PlanSummary | None:
    """Newest plan for `linked_hypothesis_id` when given, otherwise the user's newest plan."""
    query = db.query(WorkoutPlan).filter(WorkoutPlan.user_id == user_id)
    if linked_hypothesis_id:
        query = query.filter(WorkoutPlan.linked_hypothesis == linked_hypothesis_id)
    p = query.order_by(desc(WorkoutPlan.updated_at)).first()
    if not p:
        return None

    micro = _as_list(_loads(p.microcycles_json, []))
    first_week = micro[0] if micro and isinstance(micro[0], dict) else {}
    sessions = _as_list(first_week.get("sessions"))
    nxt = sessions[0] if sessions and isinstance(sessions[0], dict) else None

    preview = None
    if nxt:
        names = [e.get("name") for e in _as_list(nxt.get("exercises")) if isinstance(e, dict) and e.get("name")]
        preview = f"{nxt.get('day')}: {', '.join(names[:3])}"

    week = first_week.get("week")
    return PlanSummary(
        id=str(p.id),
        version=int(p.version),
        linked_hypothesis=p.linked_hypothesis,
        mesocycle_weeks=int(p.mesocycle_weeks) if p.mesocycle_weeks else DEFAULT_MESOCYCLE_WEEKS,
        current_week=week if isinstance(week, int) and week >= 1 else 1,
        next_session_preview=preview,
        rules=safe_trunc(p.progression_logic),
    )


def get_recent_logs(db: Session, user_id: str, plan_id: str | None, limit: int | None = None) -> RecentLogBundle:
    """Newest `limit` logs for the plan (most recent first) plus median pain / RPE."""
    if not plan_id:
        return RecentLogBundle()

    rows = (
        db.query(SessionLog)
        .filter(SessionLog.user_id == user_id, SessionLog.plan_id == plan_id)
        .order_by(desc(SessionLog.performed_at))
        .limit(limit or settings.recent_log_limit)
        .all()
    )
    logs = [
        SessionMini(
            id=str(r.id),
            performed_at=r.performed_at.isoformat(),
            pain=coerce_overall(r.pain_json),
            rpe=coerce_overall(r.rpe_json),
            notes=r.notes,
        )
        for r in rows
    ]
    return RecentLogBundle(
        logs=logs,
        median_pain=_median([l.pain for l in logs if l.pain is not None]),
        median_rpe=_median([l.rpe for l in logs if l.rpe is not None]),
    )


def build_context(db: Session, user_id: str) -> AgentContext:
    hypothesis = get_latest_hypothesis_summary(db, user_id)
    plan = get_latest_plan_summary(db, user_id, hypothesis.id if hypothesis else None)
    logs = get_recent_logs(db, user_id, plan.id if plan else None)
    return AgentContext(hypothesis=hypothesis, plan=plan, logs=logs)
