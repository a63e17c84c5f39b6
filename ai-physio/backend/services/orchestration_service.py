from __future__ import annotations

from sqlalchemy.orm import Session

from schemas.context import AgentContext
from schemas.hypothesis import Subjective
from schemas.orchestrate import OrchestrateResult
from services.handlers import (
    create_hypothesis,
    generate_plan,
    log_session,
    to_hypothesis_out,
    to_plan_out,
    to_session_log_out,
)
from services.intent_service import Intent
from services.scales import PAIN_KEYWORD, RPE_KEYWORD, extract_scale

NO_PLAN_REPLY = "I don't see an active plan. Tell me what hurts and I'll create a hypothesis and plan."
SYMPTOM_REPLY = "I've updated your injury hypothesis and generated a new plan based on what you reported."
PLAN_REPLY = "Here's a plan based on your current hypothesis."
HELP_REPLY = (
    "Got it. If you'd like me to log a session, say something like "
    "\"I completed today's session at RPE 6, pain 2/10.\" "
    "If symptoms changed, tell me what's new and I can update your hypothesis."
)


def _log_session_reply(pain: int | None, rpe: int | None) -> str:
    parts = ["Logged your session"]
    if pain is not None:
        parts.append(f" (pain {pain}/10)")
    if rpe is not None:
        parts.append(f" (RPE {rpe}/10)")
    return "".join(parts) + "."


def execute(
    db: Session,
    *,
    intent: Intent,
    user_id: str,
    input_text: str,
    context: AgentContext,
) -> OrchestrateResult:
    """Run exactly one action for the classified intent. Red flags are gated before this is called."""
    if intent == Intent.LOG_SESSION:
        if not context.plan:
            return OrchestrateResult(reply=NO_PLAN_REPLY, intent=intent, changes=None)

        pain = extract_scale(input_text, PAIN_KEYWORD)
        rpe = extract_scale(input_text, RPE_KEYWORD)
        entry = log_session(db, user_id, context.plan.id, pain=pain, rpe=rpe, notes=input_text)
        return OrchestrateResult(
            reply=_log_session_reply(pain, rpe),
            intent=intent,
            changes={"session_log": to_session_log_out(entry).model_dump()},
        )

    if intent == Intent.REPORT_SYMPTOM:
        hyp = create_hypothesis(db, user_id, Subjective(narrative=input_text))
        plan = generate_plan(db, user_id, hyp.id)
        return OrchestrateResult(
            reply=SYMPTOM_REPLY,
            intent=intent,
            changes={
                "injury_hypothesis": to_hypothesis_out(hyp).model_dump(),
                "workout_plan": to_plan_out(plan).model_dump(),
            },
        )

    if intent == Intent.REQUEST_PLAN:
        hypothesis_id = context.hypothesis.id if context.hypothesis else None
        if not hypothesis_id:
            hypothesis_id = create_hypothesis(db, user_id, Subjective(narrative=input_text)).id
        plan = generate_plan(db, user_id, hypothesis_id)
        return OrchestrateResult(
            reply=PLAN_REPLY,
            intent=intent,
            changes={"workout_plan": to_plan_out(plan).model_dump()},
        )

    # ask_question, none, red_flag (if it ever gets here) and the unrouted intents: no mutation.
    return OrchestrateResult(reply=HELP_REPLY, intent=intent, changes=None)
