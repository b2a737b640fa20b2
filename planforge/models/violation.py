"""Violation — one reported rule failure."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Violation(BaseModel):
    """A single rule failure.

    ``code`` is dot-namespaced (``layout.collision``, ``json.parse_error``),
    ``object_ids`` lists the offending entities in detection order and
    ``details`` carries free-form diagnostic context.
    """

    code: str
    severity: Severity
    message: str
    object_ids: list[str] = Field(default_factory=list)
    details: dict[str, Any] | None = None

    @classmethod
    def error(cls, code: str, message: str, object_ids: list[str] | None = None) -> Violation:
        return cls(code=code, severity=Severity.ERROR, message=message, object_ids=object_ids or [])

    @classmethod
    def warning(cls, code: str, message: str, object_ids: list[str] | None = None) -> Violation:
        return cls(code=code, severity=Severity.WARNING, message=message, object_ids=object_ids or [])

    @classmethod
    def info(cls, code: str, message: str, object_ids: list[str] | None = None) -> Violation:
        return cls(code=code, severity=Severity.INFO, message=message, object_ids=object_ids or [])

    def with_details(self, details: dict[str, Any]) -> Violation:
        """Return a copy carrying *details*."""
        return self.model_copy(update={"details": dict(details)})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
