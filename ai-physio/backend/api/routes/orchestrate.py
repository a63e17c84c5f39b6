from fastapi import APIRouter

from api.deps import CurrentUserDep, DbDep, InputDep
from schemas.orchestrate import OrchestrateResult
from services.context_service import build_context
from services.intent_service import Intent, classify_intent
from services.orchestration_service import execute
from services.policy_service import SAFETY_MESSAGE, should_gate_for_red_flags

router = APIRouter()


@router.post("/orchestrate", response_model=OrchestrateResult)
def orchestrate(text: InputDep, db: DbDep, user: CurrentUserDep):
    # Minimal context, scoped to the caller.
    context = build_context(db, user.id)

    # Safety first: no classification and no writes on a red-flag turn.
    if should_gate_for_red_flags(text, context.logs.logs):
        return OrchestrateResult(reply=SAFETY_MESSAGE, intent=Intent.RED_FLAG, changes=None)

    intent = classify_intent(text, context)
    return execute(db, intent=intent, user_id=user.id, input_text=text, context=context)
