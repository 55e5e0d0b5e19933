"""Classification of PostgREST failures into store error types"""
from typing import Optional

from postgrest.exceptions import APIError  # type: ignore

# PostgREST / Postgres error codes
TABLE_NOT_FOUND_CODES = {"PGRST205", "42P01"}
RELATIONSHIP_NOT_FOUND_CODES = {"PGRST200"}
UNIQUE_VIOLATION_CODE = "23505"


class StoreError(Exception):
    """A data store failure that callers can surface as-is"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class SchemaNotReadyError(StoreError):
    """The queried table does not exist yet"""


class RelationshipUnresolvedError(StoreError):
    """Tables exist but the embedded relationship is not declared"""


class UniqueViolationError(StoreError):
    """An insert collided with an existing unique key"""


def classify_api_error(error: APIError) -> StoreError:
    """Map a raw PostgREST APIError onto the store error hierarchy"""
    message = error.message or str(error)
    code = error.code

    if code in TABLE_NOT_FOUND_CODES or "Could not find the table" in message:
        return SchemaNotReadyError(message, code)

    if code in RELATIONSHIP_NOT_FOUND_CODES or "Could not find a relationship" in message:
        return RelationshipUnresolvedError(message, code)

    if code == UNIQUE_VIOLATION_CODE:
        return UniqueViolationError(message, code)

    return StoreError(message, code)
