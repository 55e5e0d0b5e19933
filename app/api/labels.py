"""Labels API endpoints"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.dependencies import get_repositories
from app.infra.supabase.errors import SchemaNotReadyError
from app.infra.supabase.repositories import RepositoryFactory
from app.middleware.auth import get_current_user
from app.models.identity import Identity
from app.models.label import DEFAULT_LABEL_COLOR, DEFAULT_LABELS, Label, LabelCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/labels", tags=["labels"])


@router.get("", response_model=List[Label])
async def list_labels(
    user: Identity = Depends(get_current_user),
    repos: RepositoryFactory = Depends(get_repositories),
):
    try:
        return await repos.labels.find_by_owner(user.id)
    except SchemaNotReadyError:
        logger.info("Labels table not found, returning default labels")
        return DEFAULT_LABELS
    except Exception as e:
        logger.error(f"Error listing labels for user {user.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=Label, status_code=201)
async def create_label(
    request: LabelCreate,
    user: Identity = Depends(get_current_user),
    repos: RepositoryFactory = Depends(get_repositories),
):
    try:
        return await repos.labels.create({
            "name": request.name,
            "color": request.color or DEFAULT_LABEL_COLOR,
            "user_id": user.id,
        })
    except Exception as e:
        logger.error(f"Error creating label for user {user.id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
