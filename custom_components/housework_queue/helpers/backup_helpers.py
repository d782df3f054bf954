"""Backup utilities for Housework Queue integration.

Handles the snapshot document (building, decoding, validating) and backup
files on disk (writing, reading, discovering and cleaning up).

Snapshot shapes accepted on restore:

    1. Current format (version 2):
        {
            "version": 2,
            "exportedAt": "2026-01-18T12:30:00+00:00",
            "state": {"tasks": [...], "dailyPlan": {...} | null}
        }

    2. Legacy format (version 1, or no version at all):
        {
            "version": 1,
            "exportedAt": "...",
            "tasks": [...]
        }

Legacy snapshots are upgraded to the current shape with no daily plan.
Restore is all-or-nothing: a missing or malformed task list raises
InvalidSnapshotError before the caller touches its state.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
import re
from typing import TYPE_CHECKING, Any

from homeassistant.util import dt as dt_util

from .. import const
from ..utils.dt_utils import dt_parse_date, dt_parse_flexible_date
from ..utils.math_utils import clamp_int

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from ..type_defs import (
        AppStateData,
        BackupInfo,
        DailyPlanData,
        HistoryEntry,
        SnapshotData,
        TaskData,
    )

BACKUP_FILENAME_RE = re.compile(r"^housework-backup-(\d{4}-\d{2}-\d{2})\.json$")


class InvalidSnapshotError(ValueError):
    """Raised when a backup document cannot be restored."""


# =============================================================================
# SNAPSHOT VARIANTS
# =============================================================================


@dataclass(frozen=True)
class LegacySnapshot:
    """Version 1 snapshot: a bare task list, no plan."""

    tasks: Any
    exported_at: str | None = None


@dataclass(frozen=True)
class CurrentSnapshot:
    """Version 2 snapshot: full state with an optional daily plan."""

    tasks: Any
    daily_plan: Any = None
    exported_at: str | None = None


def classify_snapshot(raw: Any) -> LegacySnapshot | CurrentSnapshot:
    """Identify which snapshot variant a decoded JSON document is.

    Raises:
        InvalidSnapshotError: if the document matches neither shape.
    """
    if not isinstance(raw, dict):
        raise InvalidSnapshotError("Backup is not a JSON object")

    exported_at = raw.get(const.SNAPSHOT_EXPORTED_AT) or raw.get(
        const.SNAPSHOT_EXPORTED_AT_LEGACY
    )

    state = raw.get(const.SNAPSHOT_STATE)
    if isinstance(state, dict) and const.DATA_TASKS in state:
        if const.DATA_DAILY_PLAN in state:
            plan = state[const.DATA_DAILY_PLAN]
        else:
            plan = state.get(const.DATA_DAILY_PLAN_LEGACY)
        return CurrentSnapshot(
            tasks=state[const.DATA_TASKS], daily_plan=plan, exported_at=exported_at
        )

    if const.DATA_TASKS in raw:
        return LegacySnapshot(tasks=raw[const.DATA_TASKS], exported_at=exported_at)

    raise InvalidSnapshotError("Invalid backup format")


def upgrade_snapshot(snapshot: LegacySnapshot | CurrentSnapshot) -> CurrentSnapshot:
    """Normalize any variant into the current shape."""
    if isinstance(snapshot, LegacySnapshot):
        const.LOGGER.debug("DEBUG: Upgrading legacy snapshot (no daily plan)")
        return CurrentSnapshot(
            tasks=snapshot.tasks, daily_plan=None, exported_at=snapshot.exported_at
        )
    return snapshot


# =============================================================================
# RECORD NORMALIZATION
# =============================================================================


def normalize_history(raw_history: Any) -> list[HistoryEntry]:
    """Keep well-formed history entries (newest first), at most 20."""
    if not isinstance(raw_history, list):
        return []

    history: list[HistoryEntry] = []
    for entry in raw_history:
        if not isinstance(entry, dict):
            continue
        entry_date = dt_parse_date(entry.get(const.DATA_HISTORY_DATE))
        if entry_date is None:
            continue
        history.append(
            {
                const.DATA_HISTORY_DATE: entry_date.isoformat(),
                const.DATA_HISTORY_ACTUAL_MIN: clamp_int(
                    entry.get(const.DATA_HISTORY_ACTUAL_MIN),
                    const.EST_MIN_MIN,
                    const.EST_MIN_MAX,
                ),
            }  # type: ignore[misc]
        )
    return history[: const.HISTORY_MAX_ENTRIES]


def normalize_task_record(raw: Any, index: int) -> TaskData:
    """Validate one task record from a snapshot and clamp its numbers.

    Raises:
        InvalidSnapshotError: if the record is not task-shaped.
    """
    if not isinstance(raw, dict):
        raise InvalidSnapshotError(f"Task #{index + 1} is not an object")

    task_id = raw.get(const.DATA_TASK_ID)
    if isinstance(task_id, int) and not isinstance(task_id, bool):
        task_id = str(task_id)
    if not isinstance(task_id, str) or not task_id:
        raise InvalidSnapshotError(f"Task #{index + 1} has no id")

    name = raw.get(const.DATA_TASK_NAME)
    if not isinstance(name, str) or not name.strip():
        raise InvalidSnapshotError(f"Task #{index + 1} has no name")

    last_done = dt_parse_flexible_date(raw.get(const.DATA_TASK_LAST_DONE))
    if last_done is None:
        raise InvalidSnapshotError(
            f"Task '{name}' has an invalid {const.DATA_TASK_LAST_DONE}"
        )

    return {
        const.DATA_TASK_ID: task_id,
        const.DATA_TASK_NAME: name.strip(),
        const.DATA_TASK_FREQ_DAYS: clamp_int(
            raw.get(const.DATA_TASK_FREQ_DAYS, const.DEFAULT_FREQ_DAYS),
            const.FREQ_DAYS_MIN,
            const.FREQ_DAYS_MAX,
        ),
        const.DATA_TASK_LAST_DONE: last_done,
        const.DATA_TASK_EST_MIN: clamp_int(
            raw.get(const.DATA_TASK_EST_MIN, const.DEFAULT_EST_MIN),
            const.EST_MIN_MIN,
            const.EST_MIN_MAX,
        ),
        const.DATA_TASK_HISTORY: normalize_history(raw.get(const.DATA_TASK_HISTORY)),
    }  # type: ignore[return-value]


def normalize_tasks(raw_tasks: Any) -> list[TaskData]:
    """Validate a snapshot task list.

    Raises:
        InvalidSnapshotError: if the list is missing, malformed, or repeats an id.
    """
    if not isinstance(raw_tasks, list):
        raise InvalidSnapshotError("Backup task list is missing or not a list")

    tasks = [normalize_task_record(raw, index) for index, raw in enumerate(raw_tasks)]

    seen: set[str] = set()
    for task in tasks:
        if task[const.DATA_TASK_ID] in seen:
            raise InvalidSnapshotError(
                f"Duplicate task id '{task[const.DATA_TASK_ID]}'"
            )
        seen.add(task[const.DATA_TASK_ID])
    return tasks


def normalize_plan_record(raw_plan: Any, task_ids: set[str]) -> DailyPlanData | None:
    """Validate an optional daily plan; anything unusable means no plan.

    Ids that do not reference a restored task are dropped, and completed ids
    are restricted to picked ids. A plan left with no picked ids is treated
    as absent so the next ensure_plan rebuilds it.
    """
    if raw_plan is None:
        return None
    if not isinstance(raw_plan, dict):
        const.LOGGER.warning("WARNING: Ignoring malformed daily plan in backup")
        return None

    plan_date = dt_parse_date(raw_plan.get(const.DATA_PLAN_DATE))
    picked_raw = raw_plan.get(const.DATA_PLAN_PICKED_IDS)
    completed_raw = raw_plan.get(const.DATA_PLAN_COMPLETED_IDS) or []
    if (
        plan_date is None
        or not isinstance(picked_raw, list)
        or not isinstance(completed_raw, list)
    ):
        const.LOGGER.warning("WARNING: Ignoring malformed daily plan in backup")
        return None

    picked: list[str] = []
    for task_id in picked_raw:
        if isinstance(task_id, str) and task_id in task_ids and task_id not in picked:
            picked.append(task_id)
    if not picked:
        const.LOGGER.warning(
            "WARNING: Ignoring daily plan in backup with no matching tasks"
        )
        return None
    completed = [task_id for task_id in picked if task_id in completed_raw]

    return {
        const.DATA_PLAN_DATE: plan_date.isoformat(),
        const.DATA_PLAN_PICKED_IDS: picked,
        const.DATA_PLAN_COMPLETED_IDS: completed,
    }  # type: ignore[return-value]


# =============================================================================
# SNAPSHOT ENCODE / DECODE
# =============================================================================


def build_snapshot(state: AppStateData, exported_at: str) -> SnapshotData:
    """Build the current-format snapshot for an app state."""
    return {
        const.SNAPSHOT_VERSION: const.SNAPSHOT_VERSION_CURRENT,
        const.SNAPSHOT_EXPORTED_AT: exported_at,
        const.SNAPSHOT_STATE: {
            const.DATA_TASKS: list(state.get(const.DATA_TASKS, [])),
            const.DATA_DAILY_PLAN: state.get(const.DATA_DAILY_PLAN),
        },
    }  # type: ignore[return-value]


def decode_snapshot(raw: Any) -> AppStateData:
    """Decode a snapshot document into a fresh app state.

    Raises:
        InvalidSnapshotError: if the task list is missing or malformed.
    """
    snapshot = upgrade_snapshot(classify_snapshot(raw))
    tasks = normalize_tasks(snapshot.tasks)
    plan = normalize_plan_record(
        snapshot.daily_plan, {task[const.DATA_TASK_ID] for task in tasks}
    )
    return {const.DATA_TASKS: tasks, const.DATA_DAILY_PLAN: plan}  # type: ignore[return-value]


def parse_snapshot_json(json_str: str) -> AppStateData:
    """Decode snapshot JSON text into a fresh app state.

    Raises:
        InvalidSnapshotError: for malformed JSON or an invalid document.
    """
    try:
        raw = json.loads(json_str)
    except (json.JSONDecodeError, TypeError) as ex:
        raise InvalidSnapshotError(f"Invalid JSON: {ex}") from ex
    return decode_snapshot(raw)


def backup_filename(today_iso: str) -> str:
    """Return the backup filename for a date: housework-backup-YYYY-MM-DD.json."""
    return f"{const.BACKUP_FILENAME_PREFIX}{today_iso}{const.BACKUP_FILENAME_SUFFIX}"


# =============================================================================
# BACKUP FILES
# =============================================================================


def _read_text_file(path: str) -> str:
    """Read a UTF-8 text file from disk.

    This helper is used with hass.async_add_executor_job in async contexts.
    """
    return Path(path).read_text(encoding="utf-8")


def _write_text_file(path: str, content: str) -> None:
    """Write UTF-8 text content to disk, creating the directory if needed.

    This helper is used with hass.async_add_executor_job in async contexts.
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    Path(path).write_text(content, encoding="utf-8")


def get_backup_dir(hass: HomeAssistant) -> str:
    """Return the directory that holds backup files."""
    return hass.config.path(const.BACKUP_DIR_NAME)


async def async_write_backup(
    hass: HomeAssistant, snapshot: SnapshotData, today_iso: str
) -> str:
    """Write a snapshot to the backup directory and return its path.

    Writing twice on one day replaces that day's file.

    Raises:
        OSError: if the file cannot be written.
    """
    filename = backup_filename(today_iso)
    path = os.path.join(get_backup_dir(hass), filename)
    await hass.async_add_executor_job(
        _write_text_file, path, json.dumps(snapshot, indent=2)
    )
    const.LOGGER.info("INFO: Created backup: %s", filename)
    return path


async def async_read_backup(hass: HomeAssistant, filename: str) -> str:
    """Read a backup file from the backup directory.

    Raises:
        InvalidSnapshotError: if the name points outside the backup directory
            or the file cannot be read.
    """
    if not filename or Path(filename).name != filename:
        raise InvalidSnapshotError(f"Invalid backup filename '{filename}'")

    path = os.path.join(get_backup_dir(hass), filename)
    try:
        return await hass.async_add_executor_job(_read_text_file, path)
    except (OSError, UnicodeDecodeError) as ex:
        raise InvalidSnapshotError(f"Cannot read backup '{filename}': {ex}") from ex


async def discover_backups(hass: HomeAssistant) -> list[BackupInfo]:
    """Scan the backup directory and return metadata, newest first.

    Files not matching housework-backup-YYYY-MM-DD.json are skipped.
    """
    backups_list: list[BackupInfo] = []
    backup_dir = get_backup_dir(hass)

    try:
        if not await hass.async_add_executor_job(os.path.exists, backup_dir):
            const.LOGGER.debug("DEBUG: Backup directory does not exist: %s", backup_dir)
            return backups_list

        filenames = await hass.async_add_executor_job(os.listdir, backup_dir)
        for filename in filenames:
            match = BACKUP_FILENAME_RE.match(filename)
            if not match:
                continue

            backup_date = dt_parse_date(match.group(1))
            if backup_date is None:
                const.LOGGER.debug("DEBUG: Skipping invalid backup filename: %s", filename)
                continue

            try:
                file_path = os.path.join(backup_dir, filename)
                size_bytes = await hass.async_add_executor_job(
                    os.path.getsize, file_path
                )
            except OSError as ex:
                const.LOGGER.debug("DEBUG: Skipping unreadable backup %s: %s", filename, ex)
                continue

            age_hours = (
                dt_util.now().date() - backup_date
            ).total_seconds() / 3600
            backups_list.append(
                {
                    "filename": filename,
                    "date": backup_date.isoformat(),
                    "age_hours": age_hours,
                    "size_bytes": size_bytes,
                }
            )

    except OSError as ex:
        const.LOGGER.error("ERROR: Failed to scan backup directory: %s", ex)

    backups_list.sort(key=lambda b: b["date"], reverse=True)
    return backups_list


async def cleanup_old_backups(hass: HomeAssistant, max_backups: int) -> None:
    """Delete backups beyond the newest `max_backups`.

    A limit of 0 deletes every backup. Deletion failures are logged and the
    remaining files are still processed.
    """
    max_backups = max(0, int(max_backups))
    backups_list = await discover_backups(hass)

    if max_backups == 0 and backups_list:
        const.LOGGER.info(
            "INFO: Backups disabled (max_backups=0), deleting all %d existing backups",
            len(backups_list),
        )

    for backup in backups_list[max_backups:]:
        try:
            path = os.path.join(get_backup_dir(hass), backup["filename"])
            await hass.async_add_executor_job(os.remove, path)
            const.LOGGER.info("INFO: Cleaned up old backup: %s", backup["filename"])
        except OSError as ex:
            const.LOGGER.warning(
                "WARNING: Failed to delete backup %s: %s", backup["filename"], ex
            )
