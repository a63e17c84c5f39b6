from fastapi import APIRouter, HTTPException, status
from sqlalchemy import desc

from api.deps import CurrentUserDep, DbDep
from models.hypothesis import InjuryHypothesis
from schemas.hypothesis import AssessmentCreate, AssessmentItem, AssessmentListResponse, HypothesisListResponse
from services.assessment_service import create_assessment, list_assessments, to_item
from services.handlers import to_hypothesis_out

router = APIRouter()


@router.get("/hypotheses", response_model=HypothesisListResponse)
def list_hypotheses(db: DbDep, user: CurrentUserDep):
    rows = (
        db.query(InjuryHypothesis)
        .filter(InjuryHypothesis.user_id == user.id)
        .order_by(desc(InjuryHypothesis.version))
        .limit(50)
        .all()
    )
    return HypothesisListResponse(hypotheses=[to_hypothesis_out(h) for h in rows])


@router.post("/assessments", response_model=AssessmentItem)
def submit_assessment(payload: AssessmentCreate, db: DbDep, user: CurrentUserDep):
    if not payload.symptoms.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="symptoms must not be blank.")
    return to_item(create_assessment(db, user.id, payload.symptoms))


@router.get("/assessments", response_model=AssessmentListResponse)
def assessments(db: DbDep, user: CurrentUserDep):
    return AssessmentListResponse(assessments=[to_item(a) for a in list_assessments(db, user.id)])
