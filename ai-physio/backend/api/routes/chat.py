import json
from collections.abc import Iterator

import httpx
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, StreamingResponse
from loguru import logger

from api.deps import CurrentUserDep, DbDep, InputDep
from core.config import settings
from core.errors import AppError
from services.context_service import build_context
from services.model_client import ModelEndpoint, stream_chat
from services.policy_service import SAFETY_MESSAGE, should_gate_for_red_flags
from services.prompt_service import build_messages

router = APIRouter()


def _relay(first: str | None, rest: Iterator[str]) -> Iterator[str]:
    try:
        if first:
            yield first
        yield from rest
    except (AppError, httpx.HTTPError) as exc:
        # Headers are already sent; report the failure in-band.
        logger.error(f"Chat stream failed mid-flight: {exc}")
        yield "\n" + json.dumps({"error": "Model stream failed", "detail": str(exc)})
    finally:
        close = getattr(rest, "close", None)
        if close:
            close()


@router.post("/chat")
def chat(text: InputDep, db: DbDep, user: CurrentUserDep):
    context = build_context(db, user.id)

    if should_gate_for_red_flags(text, context.logs.logs):
        return PlainTextResponse(SAFETY_MESSAGE)

    # Fail fast on missing credentials, before any network call.
    endpoint = ModelEndpoint.from_settings(settings)
    fragments = stream_chat(endpoint, build_messages(text, context))

    # Pull the first fragment here so upstream errors become a 500 instead of a broken 200.
    first = next(fragments, None)

    return StreamingResponse(
        _relay(first, fragments),
        media_type="text/plain; charset=utf-8",
        headers={"Cache-Control": "no-cache"},
    )
