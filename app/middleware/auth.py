"""
Request authentication

Resolves the bearer credential of a request to an Identity:
local JWT verification first, the Supabase identity authority as fallback,
then just-in-time provisioning of the local user row before the handler runs.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from fastapi import Depends, HTTPException, Request
from supabase import AsyncClient  # type: ignore

from app import config
from app.infra.supabase.client import get_supabase_client
from app.infra.supabase.repositories.users import UserRepository
from app.models.identity import Identity
from app.services.auth import (
    LocalTokenVerifier,
    ProvisionResult,
    SupabaseIdentityAuthority,
    TokenStrategy,
    UserProvisioner,
)

logger = logging.getLogger(__name__)


class AuthState(str, Enum):
    NO_TOKEN = "no_token"
    LOCAL_VERIFY_ATTEMPT = "local_verify_attempt"
    AUTHORITY_VERIFY_ATTEMPT = "authority_verify_attempt"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass
class AuthOutcome:
    state: AuthState
    identity: Optional[Identity] = None
    reason: Optional[str] = None
    resolved_by: Optional[str] = None
    provisioning: Optional[ProvisionResult] = None
    transitions: List[AuthState] = field(default_factory=list)


def extract_bearer_token(request: Request) -> Optional[str]:
    """Access token from the sb-access-token cookie, else the Authorization header"""
    token = request.cookies.get(config.ACCESS_TOKEN_COOKIE)
    if token:
        return token

    authorization = request.headers.get("Authorization")
    if not authorization:
        return None

    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None

    return credentials.strip()


class Authenticator:
    """
    Evaluates an ordered list of token strategies to the first success.

    The first strategy is the local verification attempt, every later one an
    authority attempt. Provisioning runs on every successful resolution and
    its failure never downgrades the outcome.
    """

    def __init__(self, strategies: Sequence[TokenStrategy], provisioner: UserProvisioner):
        if not strategies:
            raise ValueError("At least one token strategy is required")
        self._strategies = list(strategies)
        self._provisioner = provisioner

    async def authenticate(self, token: Optional[str]) -> AuthOutcome:
        if not token:
            return AuthOutcome(AuthState.NO_TOKEN, transitions=[AuthState.NO_TOKEN])

        transitions: List[AuthState] = []
        reasons: List[str] = []

        for index, strategy in enumerate(self._strategies):
            transitions.append(
                AuthState.LOCAL_VERIFY_ATTEMPT if index == 0 else AuthState.AUTHORITY_VERIFY_ATTEMPT
            )
            result = await strategy.resolve(token)

            if result.ok:
                transitions.append(AuthState.AUTHENTICATED)
                provisioning = await self._provisioner.ensure_exists(result.identity)
                if not provisioning.ok:
                    logger.warning(
                        f"Proceeding without local user row for {result.identity.id}: {provisioning.error}"
                    )
                return AuthOutcome(
                    AuthState.AUTHENTICATED,
                    identity=result.identity,
                    resolved_by=strategy.name,
                    provisioning=provisioning,
                    transitions=transitions,
                )

            logger.debug(f"Token strategy '{strategy.name}' failed: {result.reason}")
            reasons.append(f"{strategy.name}: {result.reason}")

        transitions.append(AuthState.UNAUTHENTICATED)
        return AuthOutcome(
            AuthState.UNAUTHENTICATED,
            reason="; ".join(reasons),
            transitions=transitions,
        )


def get_token_verifier() -> LocalTokenVerifier:
    try:
        secret = config.get_jwt_secret()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        raise HTTPException(
            status_code=500,
            detail="Authentication is not properly configured"
        )
    return LocalTokenVerifier(secret, issuer=config.JWT_ISSUER, algorithm=config.JWT_ALGORITHM)


def get_authenticator(
    client: AsyncClient = Depends(get_supabase_client),
    verifier: LocalTokenVerifier = Depends(get_token_verifier),
) -> Authenticator:
    return Authenticator(
        strategies=[verifier, SupabaseIdentityAuthority(client)],
        provisioner=UserProvisioner(UserRepository(client)),
    )


async def get_current_user(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> Identity:
    """
    FastAPI dependency for endpoints that require authentication.
    Returns the provisioned identity or raises 401.
    """
    outcome = await authenticator.authenticate(extract_bearer_token(request))

    if outcome.state == AuthState.NO_TOKEN:
        logger.warning(f"No access token on {request.method} {request.url.path}")
        raise HTTPException(status_code=401, detail="Access token required")

    if outcome.identity is None:
        logger.warning(f"Authentication failed: {outcome.reason}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    request.state.user = outcome.identity
    return outcome.identity


async def get_optional_user(
    request: Request,
    authenticator: Authenticator = Depends(get_authenticator),
) -> Optional[Identity]:
    """
    Optional authentication - returns the identity if the token is valid, None otherwise
    """
    outcome = await authenticator.authenticate(extract_bearer_token(request))
    request.state.user = outcome.identity
    return outcome.identity
