"""Remote identity authority (Supabase Auth) client"""
import logging
from typing import Any, Optional, Tuple

import httpx
from supabase import AsyncClient, AuthError  # type: ignore

from app.models.identity import Identity, SessionTokens
from app.services.auth.types import VerificationResult

logger = logging.getLogger(__name__)


class IdentityAuthorityError(Exception):
    """The identity authority rejected a request or could not be reached"""


def _session_tokens(session: Any) -> Optional[SessionTokens]:
    if session is None:
        return None
    return SessionTokens(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
    )


class SupabaseIdentityAuthority:
    """
    Thin wrapper over the Supabase auth API.

    resolve() is the fallback verification path used by the authentication
    middleware; the remaining methods back the /api/auth routes.
    """

    name = "authority"

    def __init__(self, client: AsyncClient):
        self._client = client

    async def resolve(self, token: str) -> VerificationResult:
        """Verify a token by asking Supabase who it belongs to (single call, no retry)"""
        try:
            response = await self._client.auth.get_user(token)
        except AuthError as e:
            return VerificationResult.failure(f"Authority rejected token: {e}")
        except httpx.HTTPError as e:
            logger.warning(f"Identity authority unreachable: {e}")
            return VerificationResult.failure(f"Authority unavailable: {e}")

        if response is None or response.user is None:
            return VerificationResult.failure("Authority returned no user")

        return VerificationResult.success(Identity.from_auth_user(response.user))

    async def _call(self, operation: str, coro) -> Any:
        try:
            return await coro
        except AuthError as e:
            logger.info(f"Auth {operation} rejected: {e}")
            raise IdentityAuthorityError(str(e)) from e
        except httpx.HTTPError as e:
            logger.error(f"Auth {operation} failed to reach Supabase: {e}")
            raise IdentityAuthorityError("Identity service unavailable") from e

    async def sign_up(self, email: str, password: str) -> Optional[Identity]:
        response = await self._call(
            "sign_up",
            self._client.auth.sign_up({"email": email, "password": password}),
        )
        return Identity.from_auth_user(response.user) if response.user else None

    async def sign_in_with_password(
        self, email: str, password: str
    ) -> Tuple[Identity, SessionTokens]:
        response = await self._call(
            "sign_in",
            self._client.auth.sign_in_with_password({"email": email, "password": password}),
        )
        return Identity.from_auth_user(response.user), _session_tokens(response.session)

    async def oauth_url(self, provider: str, redirect_to: str) -> str:
        response = await self._call(
            "oauth",
            self._client.auth.sign_in_with_oauth(
                {"provider": provider, "options": {"redirect_to": redirect_to}}
            ),
        )
        return response.url

    async def exchange_code_for_session(
        self, code: str, code_verifier: Optional[str] = None
    ) -> Tuple[Identity, SessionTokens]:
        params = {"auth_code": code}
        if code_verifier:
            params["code_verifier"] = code_verifier

        response = await self._call(
            "code_exchange",
            self._client.auth.exchange_code_for_session(params),
        )
        return Identity.from_auth_user(response.user), _session_tokens(response.session)

    async def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        await self._call(
            "reset_password",
            self._client.auth.reset_password_for_email(email, {"redirect_to": redirect_to}),
        )

    async def sign_out(self) -> None:
        await self._call("sign_out", self._client.auth.sign_out())
