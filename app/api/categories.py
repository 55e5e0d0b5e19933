"""Categories API endpoints"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_repositories
from app.infra.supabase.errors import SchemaNotReadyError
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user
from app.models.category import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
    Category,
    CategoryCreate,
)
from app.models.identity import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[Category])
async def list_categories(
    user: Identity = Depends(get_current_user),
    repos: RepositoryFactory = Depends(get_repositories),
):
    """The user's categories by name, or the built-in set before the table exists"""
    try:
        return await repos.categories.find_by_owner(user.id)
    except SchemaNotReadyError:
        logger.info("Categories table not found, returning default categories")
        return DEFAULT_CATEGORIES
    except Exception as e:
        logger.error(f"Error listing categories for user {user.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=Category, status_code=201)
async def create_category(
    request: CategoryCreate,
    user: Identity = Depends(get_current_user),
    repos: RepositoryFactory = Depends(get_repositories),
):
    try:
        return await repos.categories.create({
            "name": request.name,
            "color": request.color or DEFAULT_CATEGORY_COLOR,
            "icon": request.icon or DEFAULT_CATEGORY_ICON,
            "user_id": user.id,
        })
    except Exception as e:
        logger.error(f"Error creating category for user {user.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
