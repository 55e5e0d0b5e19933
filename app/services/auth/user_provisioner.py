"""Just-in-time provisioning of authenticated identities into the users table"""
import logging
from datetime import datetime, timezone

from app.infra.supabase.errors import UniqueViolationError
from app.infra.supabase.repositories.users import UserRepository
from app.models.identity import Identity
from app.models.user import LocalUserCreate
from app.services.auth.types import ProvisionResult, ProvisionStatus

logger = logging.getLogger(__name__)


class UserProvisioner:
    """
    Ensure a LocalUserRecord exists for every authenticated identity.

    Idempotent and safe under concurrent first logins: a conflicting insert
    means another request already created the row, which counts as success.
    Existing rows are never updated.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def build_record(identity: Identity) -> LocalUserCreate:
        return LocalUserCreate(
            id=identity.id,
            email=identity.email,
            name=identity.display_name,
            email_verified=identity.email_verified,
            created_at=identity.created_at or datetime.now(timezone.utc),
        )

    async def ensure_exists(self, identity: Identity) -> ProvisionResult:
        try:
            existing = await self._users.find_by_id(identity.id)
            if existing is not None:
                return ProvisionResult(ProvisionStatus.EXISTING)

            logger.info(f"Creating new user in database: {identity.email}")
            created = await self._users.insert_if_absent(self.build_record(identity))

            if created is None:
                logger.info(f"User {identity.id} was created by a concurrent request")
                return ProvisionResult(ProvisionStatus.RACE_LOST)

            logger.info(f"Successfully created new user in database: {identity.email}")
            return ProvisionResult(ProvisionStatus.CREATED)

        except UniqueViolationError:
            logger.info(f"User {identity.id} was created by a concurrent request")
            return ProvisionResult(ProvisionStatus.RACE_LOST)
        except Exception as e:
            logger.error(f"Error ensuring user {identity.id} exists: {e}", exc_info=True)
            return ProvisionResult(ProvisionStatus.FAILED, error=str(e))
