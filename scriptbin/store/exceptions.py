"""Error kinds raised by the script store."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    MISSING_FIELD = "missing_field"
    TOO_LARGE = "too_large"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single rule violation for one submitted field."""

    field: str
    kind: ErrorKind
    limit: int | None = None

    @property
    def message(self) -> str:
        if self.kind is ErrorKind.TOO_LARGE:
            return f"{self.field} exceeds {self.limit} characters."
        return f"{self.field} is required."

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "kind": self.kind.value, "message": self.message}


class ScriptStoreError(Exception):
    """Base class for every failure the store reports."""


class ValidationFailed(ScriptStoreError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = list(issues)
        super().__init__("; ".join(issue.message for issue in self.issues))


class ScriptNotFound(ScriptStoreError):
    def __init__(self, script_id: str) -> None:
        self.script_id = script_id
        super().__init__(f"Script {script_id!r} not found.")


class Forbidden(ScriptStoreError):
    def __init__(self, script_id: str) -> None:
        self.script_id = script_id
        super().__init__(f"Not allowed to modify script {script_id!r}.")


class InternalFailure(ScriptStoreError):
    """Unexpected store fault; never shown to clients in detail."""


class IdSpaceExhausted(InternalFailure):
    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Could not allocate a unique script id after {attempts} attempts.")
