from fastapi import APIRouter

from api.deps import CurrentUserDep, DbDep
from schemas.context import AgentContext
from services.context_service import build_context

router = APIRouter()


@router.get("/context", response_model=AgentContext)
def current_context(db: DbDep, user: CurrentUserDep):
    return build_context(db, user.id)
