from fastapi import APIRouter, HTTPException, status
from sqlalchemy import desc

from api.deps import CurrentUserDep, DbDep
from models.plan import WorkoutPlan
from models.session_log import SessionLog
from schemas.plan import (
    CustomPlanCreate,
    CustomPlanItem,
    CustomPlanListResponse,
    SessionLogListResponse,
    WorkoutPlanListResponse,
)
from services.context_service import build_context
from services.handlers import to_plan_out, to_session_log_out
from services.workout_plan_service import create_custom_plan, get_assessment, list_custom_plans, to_item

router = APIRouter()


@router.get("/plans", response_model=WorkoutPlanListResponse)
def list_plans(db: DbDep, user: CurrentUserDep):
    rows = (
        db.query(WorkoutPlan)
        .filter(WorkoutPlan.user_id == user.id)
        .order_by(desc(WorkoutPlan.updated_at))
        .limit(50)
        .all()
    )
    return WorkoutPlanListResponse(plans=[to_plan_out(p) for p in rows])


@router.get("/plans/logs", response_model=SessionLogListResponse)
def list_session_logs(db: DbDep, user: CurrentUserDep, plan_id: str | None = None):
    if plan_id is None:
        current = build_context(db, user.id).plan
        plan_id = current.id if current else None
    if plan_id is None:
        return SessionLogListResponse(plan_id=None, logs=[])

    plan = db.query(WorkoutPlan).filter(WorkoutPlan.id == plan_id, WorkoutPlan.user_id == user.id).first()
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found.")

    rows = (
        db.query(SessionLog)
        .filter(SessionLog.plan_id == plan_id, SessionLog.user_id == user.id)
        .order_by(desc(SessionLog.performed_at))
        .limit(60)
        .all()
    )
    return SessionLogListResponse(plan_id=plan_id, logs=[to_session_log_out(s) for s in rows])


@router.post("/workout-plans", response_model=CustomPlanItem)
def create_workout_plan(payload: CustomPlanCreate, db: DbDep, user: CurrentUserDep):
    if not payload.plan_name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="plan_name must not be blank.")
    if payload.injury_hypothesis_id and not get_assessment(db, user.id, payload.injury_hypothesis_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assessment not found.")
    return to_item(create_custom_plan(db, user.id, payload))


@router.get("/workout-plans", response_model=CustomPlanListResponse)
def workout_plans(db: DbDep, user: CurrentUserDep):
    return CustomPlanListResponse(plans=[to_item(p) for p in list_custom_plans(db, user.id)])
