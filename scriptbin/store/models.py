"""In-memory data model for stored scripts."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import quote


def pick(value: str | None, fallback: str) -> str:
    """Return ``value`` stripped if it holds anything but whitespace, else ``fallback``."""
    if value is None:
        return fallback
    stripped = value.strip()
    return stripped or fallback


def count_lines(content: str) -> int:
    return content.count("\n") + 1


@dataclass(slots=True)
class ScriptInput:
    """Fields submitted by a caller, before trimming or defaults."""

    content: str | None
    owner: str | None
    filename: str | None = None
    description: str | None = None


@dataclass(slots=True)
class ScriptRecord:
    id: str
    content: str
    owner: str
    filename: str
    description: str
    created_at: datetime
    last_modified_at: datetime | None = None
    view_count: int = 0
    last_viewed_at: datetime | None = None

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def lines(self) -> int:
        return count_lines(self.content)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "content": self.content,
            "owner": self.owner,
            "filename": self.filename,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
            "last_modified_at": _isoformat(self.last_modified_at),
            "view_count": self.view_count,
            "last_viewed_at": _isoformat(self.last_viewed_at),
        }

    def summary(self) -> "ScriptSummary":
        return ScriptSummary(
            id=self.id,
            filename=self.filename,
            description=self.description,
            owner=self.owner,
            created_at=self.created_at,
            last_modified_at=self.last_modified_at,
            view_count=self.view_count,
            last_viewed_at=self.last_viewed_at,
            size=self.size,
            lines=self.lines,
            raw_url=ScriptLinks.for_record(self).raw,
        )


@dataclass(frozen=True, slots=True)
class ScriptSummary:
    """Metadata-only projection used by listings and the view route."""

    id: str
    filename: str
    description: str
    owner: str
    created_at: datetime
    last_modified_at: datetime | None
    view_count: int
    last_viewed_at: datetime | None
    size: int
    lines: int
    raw_url: str

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "filename": self.filename,
            "description": self.description,
            "owner": self.owner,
            "created_at": self.created_at.isoformat(),
            "last_modified_at": _isoformat(self.last_modified_at),
            "view_count": self.view_count,
            "last_viewed_at": _isoformat(self.last_viewed_at),
            "size": self.size,
            "lines": self.lines,
            "raw_url": self.raw_url,
        }


@dataclass(frozen=True, slots=True)
class ScriptLinks:
    raw: str
    view: str
    edit: str

    @classmethod
    def for_record(cls, record: ScriptRecord) -> "ScriptLinks":
        return cls(
            raw=f"/raw/{record.id}",
            view=f"/view/{record.id}",
            edit=f"/edit/{record.id}?owner={quote(record.owner, safe='')}",
        )

    def to_dict(self) -> dict[str, str]:
        return {"raw": self.raw, "view": self.view, "edit": self.edit}


@dataclass(frozen=True, slots=True)
class CreatedScript:
    record: ScriptRecord
    links: ScriptLinks


@dataclass(frozen=True, slots=True)
class RawContent:
    content: str
    content_type: str


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
