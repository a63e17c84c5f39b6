from fastapi import APIRouter

from api.routes import auth, chat, check_ins, context, injury, orchestrate, plans

api_router = APIRouter()

api_router.include_router(auth.router, tags=["auth"], prefix="/auth")
api_router.include_router(orchestrate.router, tags=["orchestrate"])
api_router.include_router(chat.router, tags=["chat"], prefix="/ai")
api_router.include_router(context.router, tags=["context"])
api_router.include_router(injury.router, tags=["injury"], prefix="/injury")
api_router.include_router(plans.router, tags=["plans"])
api_router.include_router(check_ins.router, tags=["check-ins"])
