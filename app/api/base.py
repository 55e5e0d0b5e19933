from fastapi import APIRouter
from app.api import auth, categories, health, labels, notes, public

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth.router)
api_router.include_router(notes.router)
api_router.include_router(categories.router)
api_router.include_router(labels.router)
api_router.include_router(public.router)
api_router.include_router(health.router)
