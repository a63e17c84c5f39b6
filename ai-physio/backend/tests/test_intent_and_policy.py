import pytest

from schemas.context import AgentContext, SessionMini
from services.intent_service import Intent, classify_intent
from services.policy_service import should_gate_for_red_flags


@pytest.mark.parametrize(
    "text, intent",
    [
        ("numbness down my arm", Intent.RED_FLAG),
        ("I had fever and chills last night", Intent.RED_FLAG),
        ("the pain is unbearable", Intent.RED_FLAG),
        ("pain 9/10 after lifting", Intent.RED_FLAG),
        ("I completed today's session at RPE 6, pain 2/10", Intent.LOG_SESSION),
        ("did my band work this morning", Intent.LOG_SESSION),
        ("my shoulder started hurting after overhead press", Intent.REPORT_SYMPTOM),
        ("there is some clicking when I reach back", Intent.REPORT_SYMPTOM),
        ("my shoulder has worsened since Monday", Intent.REPORT_SYMPTOM),
        ("newly swollen around the knee", Intent.REPORT_SYMPTOM),
        ("please generate a workout for me", Intent.REQUEST_PLAN),
        ("can you adjust my program", Intent.REQUEST_PLAN),
        ("I'm adjusting my plan for next week", Intent.REQUEST_PLAN),
        ("how long should I rest between sets?", Intent.ASK_QUESTION),
        ("what if I skip a day", Intent.ASK_QUESTION),
        ("thanks!", Intent.NONE),
    ],
)
def test_classify_intent_one_example_per_rule(text, intent):
    assert classify_intent(text, AgentContext()) == intent


def test_classify_precedence_red_flag_beats_logging():
    assert classify_intent("completed my session but pain 8/10", None) == Intent.RED_FLAG


def test_classify_plan_noun_without_verb_is_not_a_plan_request():
    assert classify_intent("my plan is going fine", None) == Intent.NONE


def test_classify_is_deterministic_and_ignores_context():
    ctx = AgentContext(logs={"logs": [{"id": "1", "performed_at": "2025-01-01T00:00:00", "pain": 9}]})
    text = "how should I warm up?"
    assert classify_intent(text, ctx) == classify_intent(text, AgentContext()) == Intent.ASK_QUESTION


def test_gate_on_text():
    assert should_gate_for_red_flags("pain 9/10", []) is True
    assert should_gate_for_red_flags("pain 3/10", []) is False
    assert should_gate_for_red_flags("tingling in my fingers") is True


def test_gate_on_recent_logs():
    assert should_gate_for_red_flags("all good", [{"pain": 8}]) is True
    assert should_gate_for_red_flags("all good", [{"pain": 6}, {"pain": None}, {}]) is False
    logs = [SessionMini(id="a", performed_at="2025-01-01T00:00:00", pain=7)]
    assert should_gate_for_red_flags("all good", logs) is True


def test_shoulder_is_not_a_question_word():
    assert classify_intent("my shoulder is fine", None) == Intent.NONE


@pytest.mark.parametrize(
    "text",
    [
        "9/10 pain after today's session",
        "my pain level is 9/10",
        "felt like a 10 / 10 this morning",
        "pain 9/10, rpe 7",
    ],
)
def test_gate_on_any_severe_rating(text):
    assert should_gate_for_red_flags(text, []) is True
    assert classify_intent(text, None) == Intent.RED_FLAG


@pytest.mark.parametrize("text", ["RPE 8/10, pain 2/10", "that was a solid 9/10 rpe", "pain 7/10", "18/10 reps"])
def test_gate_ignores_rpe_and_lower_ratings(text):
    assert should_gate_for_red_flags(text, []) is False
