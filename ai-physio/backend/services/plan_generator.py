from schemas.plan import Exercise, Microcycle, PlanTemplate, SessionBlock

MESOCYCLE_WEEKS = 6
PROGRESSION_LOGIC = (
    "If median RPE ≤5 and pain ≤2/10 for 2 sessions → +5° ROM or +1 set next week. "
    "If RPE ≥8 or pain ≥4/10 → regress ROM/load or swap to isometric."
)


def generate_from_hypothesis(hypothesis_ref: str | None) -> PlanTemplate:
    # Templated: the hypothesis is not consulted yet, every plan starts from the same week.
    week_one = Microcycle(
        week=1,
        sessions=[
            SessionBlock(
                day="Mon",
                exercises=[
                    Exercise(name="Scaption to 90°", sets=3, reps="10–12", rpe=6, notes="Pain-free range"),
                    Exercise(name="Isometric ER @ side", sets=3, reps="3x30s", rpe="comfortable"),
                ],
            ),
            SessionBlock(
                day="Thu",
                exercises=[
                    Exercise(name="Cable row (neutral)", sets=3, reps="8–10", rpe=6),
                    Exercise(name="Prone Y-T-W", sets=2, reps="8 each", rpe=5),
                ],
            ),
        ],
    )
    return PlanTemplate(
        microcycles=[week_one],
        progression_logic=PROGRESSION_LOGIC,
        mesocycle_weeks=MESOCYCLE_WEEKS,
        version=1,
    )
