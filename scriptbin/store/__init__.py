"""In-memory script store."""
from .exceptions import (
    ErrorKind,
    Forbidden,
    IdSpaceExhausted,
    InternalFailure,
    ScriptNotFound,
    ScriptStoreError,
    ValidationFailed,
    ValidationIssue,
)
from .models import CreatedScript, RawContent, ScriptInput, ScriptLinks, ScriptRecord, ScriptSummary
from .pagination import Page
from .repository import ScriptRepository
from .stats import StatsAggregator, StatsEvent, StoreStatistics

__all__ = [
    "CreatedScript",
    "ErrorKind",
    "Forbidden",
    "IdSpaceExhausted",
    "InternalFailure",
    "Page",
    "RawContent",
    "ScriptInput",
    "ScriptLinks",
    "ScriptNotFound",
    "ScriptRecord",
    "ScriptRepository",
    "ScriptStoreError",
    "ScriptSummary",
    "StatsAggregator",
    "StatsEvent",
    "StoreStatistics",
    "ValidationFailed",
    "ValidationIssue",
]
