"""Type definitions for the authentication services"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from app.models.identity import Identity


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of one token verification strategy"""
    identity: Optional[Identity] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.identity is not None

    @classmethod
    def success(cls, identity: Identity) -> "VerificationResult":
        return cls(identity=identity)

    @classmethod
    def failure(cls, reason: str) -> "VerificationResult":
        return cls(reason=reason)


class TokenStrategy(Protocol):
    """A way of turning a bearer token into an identity"""
    name: str

    async def resolve(self, token: str) -> VerificationResult:
        ...


class ProvisionStatus(str, Enum):
    CREATED = "created"
    EXISTING = "existing"
    RACE_LOST = "race_lost"  # a concurrent request inserted the row first
    FAILED = "failed"


@dataclass(frozen=True)
class ProvisionResult:
    """Non-fatal result of ensuring a local user row exists"""
    status: ProvisionStatus
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status != ProvisionStatus.FAILED
