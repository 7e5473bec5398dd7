"""Process-lifetime repository of scripts with owner checks and view tracking."""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from . import content_types
from .exceptions import Forbidden, IdSpaceExhausted, ScriptNotFound, ValidationFailed
from .ids import IdGenerator
from .models import CreatedScript, RawContent, ScriptInput, ScriptLinks, ScriptRecord, ScriptSummary, pick
from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Page, paginate
from .stats import StatsAggregator, StatsEvent, StoreStatistics
from .validation import MAX_CONTENT_LENGTH, validate

logger = logging.getLogger(__name__)

DEFAULT_ID_ATTEMPTS = 16


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScriptRepository:
    """Keyed store of :class:`ScriptRecord` objects.

    Every public operation holds ``self._lock`` for its full duration, so the
    repository may be shared by the worker threads of a WSGI server. Records
    are copied on the way out; callers never hold a live reference.
    """

    def __init__(
        self,
        *,
        id_generator: IdGenerator | None = None,
        max_content_length: int = MAX_CONTENT_LENGTH,
        max_id_attempts: int = DEFAULT_ID_ATTEMPTS,
        max_page_size: int = MAX_PAGE_SIZE,
        raw_requires_owner: bool = False,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.id_generator = id_generator or IdGenerator()
        self.max_content_length = max_content_length
        self.max_id_attempts = max_id_attempts
        self.max_page_size = max_page_size
        self.raw_requires_owner = raw_requires_owner
        self.clock = clock
        self._records: dict[str, ScriptRecord] = {}
        self._stats = StatsAggregator()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def contains(self, script_id: str) -> bool:
        with self._lock:
            return script_id in self._records

    def create(
        self,
        content: str | None,
        owner: str | None,
        filename: str | None = None,
        description: str | None = None,
    ) -> CreatedScript:
        self._validate(ScriptInput(content, owner, filename, description))

        with self._lock:
            script_id = self._allocate_id()
            record = ScriptRecord(
                id=script_id,
                content=content.strip(),
                owner=owner.strip(),
                filename=pick(filename, f"script_{script_id}"),
                description=pick(description, ""),
                created_at=self.clock(),
            )
            self._records[script_id] = record
            self._stats.record(StatsEvent.CREATED)

        logger.info("Created script %s for %s", script_id, record.owner)
        snapshot = replace(record)
        return CreatedScript(record=snapshot, links=ScriptLinks.for_record(snapshot))

    def get_raw(self, script_id: str, viewer: str | None = None) -> RawContent:
        with self._lock:
            record = self._get(script_id)
            if self.raw_requires_owner and not _is_owner(record, viewer):
                # Hide the script entirely rather than admit it exists.
                raise ScriptNotFound(script_id)
            self._mark_viewed(record)
            return RawContent(record.content, content_types.resolve(record.filename))

    def get_metadata(self, script_id: str) -> ScriptSummary:
        with self._lock:
            record = self._get(script_id)
            self._mark_viewed(record)
            return record.summary()

    def get_for_edit(self, script_id: str, requester: str | None) -> ScriptRecord:
        with self._lock:
            record = self._get_owned(script_id, requester)
            return replace(record)

    def update(
        self,
        script_id: str,
        requester: str | None,
        content: str | None,
        filename: str | None = None,
        description: str | None = None,
    ) -> ScriptRecord:
        with self._lock:
            record = self._get_owned(script_id, requester)
            self._validate(ScriptInput(content, requester, filename, description))

            record.content = content.strip()
            record.filename = pick(filename, record.filename)
            record.description = pick(description, record.description)
            record.last_modified_at = self.clock()
            logger.info("Updated script %s", script_id)
            return replace(record)

    def delete(self, script_id: str, requester: str | None) -> None:
        with self._lock:
            self._get_owned(script_id, requester)
            del self._records[script_id]
            counters = self._stats.counters
            counters.total_scripts = max(0, counters.total_scripts - 1)
        logger.info("Deleted script %s", script_id)

    def list(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Page[ScriptSummary]:
        with self._lock:
            ordered = sorted(self._records.values(), key=lambda record: record.created_at, reverse=True)
            summaries = [record.summary() for record in ordered]
        return paginate(summaries, page, limit, max_limit=self.max_page_size)

    def stats(self) -> StoreStatistics:
        with self._lock:
            return self._stats.snapshot()

    def _validate(self, data: ScriptInput) -> None:
        issues = validate(data, max_content_length=self.max_content_length)
        if issues:
            raise ValidationFailed(issues)

    def _allocate_id(self) -> str:
        for _ in range(self.max_id_attempts):
            candidate = self.id_generator.generate()
            if candidate not in self._records:
                return candidate
            logger.debug("Script id collision on %s, retrying", candidate)
        logger.error("Gave up allocating a script id after %d attempts", self.max_id_attempts)
        raise IdSpaceExhausted(self.max_id_attempts)

    def _get(self, script_id: str) -> ScriptRecord:
        record = self._records.get(script_id)
        if record is None:
            raise ScriptNotFound(script_id)
        return record

    def _get_owned(self, script_id: str, requester: str | None) -> ScriptRecord:
        record = self._get(script_id)
        if not _is_owner(record, requester):
            logger.warning("Rejected access to script %s by %r", script_id, requester)
            raise Forbidden(script_id)
        return record

    def _mark_viewed(self, record: ScriptRecord) -> None:
        record.view_count += 1
        record.last_viewed_at = self.clock()
        self._stats.record(StatsEvent.VIEWED)
        logger.debug("Script %s viewed (%d)", record.id, record.view_count)


def _is_owner(record: ScriptRecord, identity: str | None) -> bool:
    return identity is not None and identity.strip() == record.owner
