# API module exports
from app.api import auth, categories, health, labels, notes, public
from app.api.base import api_router

__all__ = ["auth", "categories", "health", "labels", "notes", "public", "api_router"]
