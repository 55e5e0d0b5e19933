"""Local (fast path) verification of Supabase JWTs with the shared secret"""
from typing import Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError
from pydantic import ValidationError

from app.models.identity import Identity
from app.services.auth.types import VerificationResult


class LocalTokenVerifier:
    """
    Verify a self-contained signed token without any network I/O.

    Failures are returned as a reason string, never raised, so the caller can
    fall back to the identity authority.
    """

    name = "local"

    def __init__(self, secret: str, issuer: str = "supabase", algorithm: str = "HS256"):
        self._secret = secret
        self._issuer = issuer
        self._algorithm = algorithm

    def verify(self, token: Optional[str]) -> VerificationResult:
        if not token:
            return VerificationResult.failure("Token missing")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_aud": False  # Supabase tokens carry aud=authenticated
                }
            )
        except ExpiredSignatureError:
            return VerificationResult.failure("Token has expired")
        except JWTClaimsError as e:
            return VerificationResult.failure(f"Invalid token claims: {e}")
        except JWTError as e:
            return VerificationResult.failure(f"Invalid token: {e}")

        if not claims.get("sub"):
            return VerificationResult.failure("Invalid token: missing user ID")

        try:
            identity = Identity.from_claims(claims)
        except ValidationError as e:
            return VerificationResult.failure(f"Invalid token payload: {e.error_count()} invalid claims")

        return VerificationResult.success(identity)

    async def resolve(self, token: str) -> VerificationResult:
        return self.verify(token)


def decode_unverified(token: str) -> Optional[dict]:
    """Decode header and claims without verification (diagnostics only)"""
    try:
        return {
            "header": jwt.get_unverified_header(token),
            "payload": jwt.get_unverified_claims(token),
        }
    except JWTError:
        return None
