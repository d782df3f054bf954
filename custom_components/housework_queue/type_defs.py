"""Type definitions for Housework Queue data structures.

Records are plain dicts so the storage document, diagnostics export and
backup snapshots all share one shape. TypedDict keys therefore mirror the
camelCase field names of the snapshot file.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation of untrusted
records lives in engines/task_engine.py and helpers/backup_helpers.py.

IMPORTANT: This file must NOT import from coordinator.py or any helper that
imports the coordinator, to avoid circular dependencies.
"""

from typing import TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

TaskId = str  # uuid4 hex string
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"


# =============================================================================
# Entity Types
# =============================================================================


class HistoryEntry(TypedDict):
    """One completion record, stored newest first on the task."""

    dateISO: ISODate
    actualMin: int


class TaskData(TypedDict):
    """A recurring chore."""

    id: TaskId
    name: str
    freqDays: int
    lastDoneISO: ISODate
    estMin: int
    history: list[HistoryEntry]


class DailyPlanData(TypedDict):
    """The locked work queue for one calendar day.

    completedIds is always a subset of pickedIds.
    """

    dateISO: ISODate
    pickedIds: list[TaskId]
    completedIds: list[TaskId]


class AppStateData(TypedDict):
    """Aggregate root owned by the coordinator."""

    tasks: list[TaskData]
    dailyPlan: DailyPlanData | None


class StorageData(AppStateData):
    """Document persisted through the Home Assistant Store."""

    schema_version: int


# =============================================================================
# Snapshot (backup file) shapes
# =============================================================================


class SnapshotData(TypedDict):
    """Current (version 2) backup document."""

    version: int
    exportedAt: ISODatetime
    state: AppStateData


class BackupInfo(TypedDict):
    """Metadata for a discovered backup file."""

    filename: str
    date: ISODate
    age_hours: float
    size_bytes: int
