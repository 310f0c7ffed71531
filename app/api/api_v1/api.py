from fastapi import APIRouter
from app.api.api_v1.endpoints import auth, cases, health, history, teams

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(cases.router, prefix="/cases", tags=["cases"])
api_router.include_router(history.router, prefix="/cases", tags=["history"])
api_router.include_router(teams.router, prefix="/teams", tags=["teams"])
