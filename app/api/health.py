"""Health check and schema readiness endpoints"""
import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_repositories
from app.infra.supabase.errors import StoreError
from app.infra.supabase.repositories import RepositoryFactory

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])

REQUIRED_TABLES = ["users", "categories", "labels", "posts", "post_labels"]


@router.get("/health")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": "notes-backend",
    }


@router.get("/status")
async def get_database_status(repos: RepositoryFactory = Depends(get_repositories)):
    """
    Report which tables are provisioned.

    The API keeps serving (with empty or default data) while tables are
    missing, so this is the place to check whether the schema has been run.
    """
    tables = {}
    for table in REQUIRED_TABLES:
        try:
            await repos.table_probe(table).probe()
            tables[table] = True
        except StoreError as e:
            logger.warning(f"Table check failed for {table}: {e.message}")
            tables[table] = False

    ready = all(tables.values())
    return {
        "server": "running",
        "database": "connected",
        "tables": tables,
        "ready": ready,
        "message": (
            "All database tables are ready"
            if ready
            else "Some database tables are missing. Please run the SQL schema in Supabase."
        ),
    }
