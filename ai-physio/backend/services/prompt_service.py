from schemas.context import AgentContext

NOTES_PREVIEW_CHARS = 80


def system_prompt() -> str:
    return " ".join(
        [
            "You are an AI Physio.",
            "Goal: help the user safely rehab by reading the latest hypothesis, plan, and recent logs.",
            "Guardrails: if severe pain/red-flag symptoms, advise in-person care and do not progress the plan.",
            "Policy: read context first; be concise; explain rationale for any progression/regression.",
        ]
    )


def _fmt(value: float | None) -> str:
    if value is None:
        return "?"
    return str(int(value)) if float(value).is_integer() else str(value)


def compose_user_message(user_input: str, context: AgentContext) -> str:
    parts: list[str] = []

    h = context.hypothesis
    if h:
        diffs = ", ".join(f"{d.code}:{d.confidence}" for d in h.differentials) or "n/a"
        parts.append(f"HYPOTHESIS v{h.version} ({h.id}):")
        parts.append(f"- Differentials: {diffs}")
        if h.key_findings:
            parts.append(f"- Key findings: {h.key_findings}")

    p = context.plan
    if p:
        parts.append(f"PLAN v{p.version} ({p.id}): week {p.current_week}/{p.mesocycle_weeks}")
        if p.rules:
            parts.append(f"- Rules: {p.rules}")
        if p.next_session_preview:
            parts.append(f"- Next session: {p.next_session_preview}")

    if context.logs.logs:
        parts.append("RECENT LOGS:")
        for log in context.logs.logs:
            line = f"- {log.performed_at}: pain={_fmt(log.pain)}, rpe={_fmt(log.rpe)}"
            if log.notes:
                line += f', notes="{log.notes[:NOTES_PREVIEW_CHARS]}"'
            parts.append(line)

    parts.append(f"USER INPUT: {user_input}")
    return "\n".join(parts)


def build_messages(user_input: str, context: AgentContext) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt()},
        {"role": "user", "content": compose_user_message(user_input, context)},
    ]
