from fastapi import APIRouter

from src.services.dispatch_api.routes.ambulance import router as ambulance_router
from src.services.dispatch_api.routes.calls import router as calls_router
from src.services.dispatch_api.routes.chat import router as chat_router
from src.services.dispatch_api.routes.comments import router as comments_router

api_router = APIRouter()
api_router.include_router(calls_router)
api_router.include_router(ambulance_router)
api_router.include_router(chat_router)
api_router.include_router(comments_router)
