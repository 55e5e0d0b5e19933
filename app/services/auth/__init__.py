"""Authentication services: token verification and user provisioning"""
from .credential_verifier import LocalTokenVerifier, decode_unverified
from .identity_authority import IdentityAuthorityError, SupabaseIdentityAuthority
from .user_provisioner import UserProvisioner
from .types import ProvisionResult, ProvisionStatus, TokenStrategy, VerificationResult

__all__ = [
    "LocalTokenVerifier",
    "decode_unverified",
    "SupabaseIdentityAuthority",
    "IdentityAuthorityError",
    "UserProvisioner",
    "ProvisionResult",
    "ProvisionStatus",
    "TokenStrategy",
    "VerificationResult",
]
