"""Pydantic schemas for device records and action results."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DeviceRecord(BaseModel):
    """A device row as seen by the services."""
    user: str
    token: str
    mail: str = ""
    password: str = ""
    device_type: str = ""
    active: bool = False

    model_config = ConfigDict(from_attributes=True)


class DeliveryOutcome(BaseModel):
    """Result of one push delivery attempt."""
    token: str
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None

    def describe(self) -> str:
        if self.success:
            return f"Token '{self.token}': {self.message_id}"
        return f"Token '{self.token}': ERROR ({self.error})"


class DispatchSummary(BaseModel):
    attempted: int
    succeeded: int
    failed: int
    message: str
    details: List[DeliveryOutcome] = Field(default_factory=list)


class ResultKind(str, Enum):
    success = "success"
    invalid_input = "invalid_input"
    not_found = "not_found"
    unauthorized = "unauthorized"
    internal_error = "internal_error"


class ActionResult(BaseModel):
    """Tagged result returned at the request boundary."""
    kind: ResultKind
    message: str
    payload: Optional[dict[str, Any]] = None

    @classmethod
    def ok(cls, message: str, **payload: Any) -> "ActionResult":
        return cls(kind=ResultKind.success, message=message, payload=payload or None)

    @property
    def is_success(self) -> bool:
        return self.kind == ResultKind.success
