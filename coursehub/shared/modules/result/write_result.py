from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class WriteOutcome(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


_HTTP_STATUS = {
    WriteOutcome.CREATED: 201,
    WriteOutcome.UPDATED: 200,
    WriteOutcome.DELETED: 200,
    WriteOutcome.INVALID: 400,
    WriteOutcome.NOT_FOUND: 404,
    WriteOutcome.CONFLICT: 409,
}


class WriteResult(BaseModel):
    """
    Outcome of an admin write (validate -> mutate -> invalidate -> respond).

    Controllers turn it into an HTTP response with ``to_response()`` instead of
    branching on exceptions.
    """
    outcome: WriteOutcome
    entity: Optional[Dict[str, Any]] = None
    errors: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.outcome in (WriteOutcome.CREATED, WriteOutcome.UPDATED, WriteOutcome.DELETED)

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self.outcome]

    # --- Constructors ---
    @classmethod
    def created(cls, entity: Dict[str, Any]) -> "WriteResult":
        return cls(outcome=WriteOutcome.CREATED, entity=entity)

    @classmethod
    def updated(cls, entity: Dict[str, Any]) -> "WriteResult":
        return cls(outcome=WriteOutcome.UPDATED, entity=entity)

    @classmethod
    def deleted(cls, entity: Dict[str, Any]) -> "WriteResult":
        return cls(outcome=WriteOutcome.DELETED, entity=entity)

    @classmethod
    def invalid(cls, *errors: str) -> "WriteResult":
        return cls(outcome=WriteOutcome.INVALID, errors=list(errors))

    @classmethod
    def not_found(cls, message: str) -> "WriteResult":
        return cls(outcome=WriteOutcome.NOT_FOUND, errors=[message])

    @classmethod
    def conflict(cls, message: str) -> "WriteResult":
        return cls(outcome=WriteOutcome.CONFLICT, errors=[message])

    def to_response(self) -> Dict[str, Any]:
        """JSON body for the HTTP tier."""
        if self.ok:
            return self.entity or {}
        body: Dict[str, Any] = {"error": self.errors[0] if self.errors else self.outcome.value}
        if len(self.errors) > 1 or self.outcome == WriteOutcome.INVALID:
            body["details"] = self.errors
        return body
