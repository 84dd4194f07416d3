from fastapi import APIRouter

from app.api.routes import fim, health, hunting

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(hunting.router, tags=["hunting"])
api_router.include_router(fim.router, tags=["fim"])
