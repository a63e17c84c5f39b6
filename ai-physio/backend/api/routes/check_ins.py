from fastapi import APIRouter, HTTPException, status

from api.deps import CurrentUserDep, DbDep
from schemas.checkin import CheckInCreate, CheckInItem, CheckInListResponse
from services.checkin_service import create_check_in, get_custom_plan, list_check_ins, to_item

router = APIRouter()


@router.post("/check-ins", response_model=CheckInItem)
def submit_check_in(payload: CheckInCreate, db: DbDep, user: CurrentUserDep):
    plan = None
    if payload.workout_plan_id:
        plan = get_custom_plan(db, user.id, payload.workout_plan_id)
        if not plan:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout plan not found.")
    c = create_check_in(db, user.id, payload)
    return to_item(c, plan.plan_name if plan else None)


@router.get("/check-ins", response_model=CheckInListResponse)
def check_ins(db: DbDep, user: CurrentUserDep):
    return CheckInListResponse(check_ins=list_check_ins(db, user.id))
