"""Presence and size rules for submitted scripts."""
from __future__ import annotations

from .exceptions import ErrorKind, ValidationIssue
from .models import ScriptInput

MAX_CONTENT_LENGTH = 100_000


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate(data: ScriptInput, *, max_content_length: int = MAX_CONTENT_LENGTH) -> list[ValidationIssue]:
    """Check every rule and return all violations; an empty list means valid."""
    issues: list[ValidationIssue] = []
    if _is_blank(data.content):
        issues.append(ValidationIssue("content", ErrorKind.MISSING_FIELD))
    if _is_blank(data.owner):
        issues.append(ValidationIssue("owner", ErrorKind.MISSING_FIELD))
    if data.content is not None and len(data.content) > max_content_length:
        issues.append(ValidationIssue("content", ErrorKind.TOO_LARGE, limit=max_content_length))
    return issues
