"""Import Engine - Turn pasted spreadsheet rows into task records.

Each non-blank line is one row. Rows containing a tab are split on tabs,
otherwise on commas. Fields, in order:

    name, frequency (days), last done (M/D/YYYY or YYYY-MM-DD), minutes

Minutes are optional (default 15). Rows without a name or a parseable date
are dropped; an empty result is for the caller to report.

Example:
    "Mop kitchen,7,1/5/2024,20" → freqDays 7, lastDoneISO 2024-01-05, estMin 20
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import re

from .. import const
from ..type_defs import TaskData
from ..utils.dt_utils import dt_parse_flexible_date
from ..utils.math_utils import clamp_int
from .task_engine import new_task_id

LINE_SPLIT_RE = re.compile(r"\r?\n")


def split_row(line: str) -> list[str]:
    """Split one row, preferring tabs over commas."""
    if "\t" in line:
        return line.split("\t")
    return [part.strip() for part in line.split(",")]


def normalize_row(
    parts: Sequence[str], id_factory: Callable[[], str] = new_task_id
) -> TaskData | None:
    """Build a task from row fields, or None if the row is unusable."""
    name = (parts[0] if parts else "").strip()
    last_done = dt_parse_flexible_date(parts[2] if len(parts) > 2 else None)
    if not name or not last_done:
        return None

    est_raw = parts[3] if len(parts) > 3 and parts[3].strip() else const.DEFAULT_EST_MIN

    return {
        const.DATA_TASK_ID: id_factory(),
        const.DATA_TASK_NAME: name,
        const.DATA_TASK_FREQ_DAYS: clamp_int(
            parts[1] if len(parts) > 1 else None,
            const.FREQ_DAYS_MIN,
            const.FREQ_DAYS_MAX,
        ),
        const.DATA_TASK_LAST_DONE: last_done,
        const.DATA_TASK_EST_MIN: clamp_int(
            est_raw, const.EST_MIN_MIN, const.EST_MIN_MAX
        ),
        const.DATA_TASK_HISTORY: [],
    }  # type: ignore[return-value]


def parse_import_text(
    text: str | None, id_factory: Callable[[], str] = new_task_id
) -> list[TaskData]:
    """Parse pasted text into tasks, silently dropping malformed rows."""
    lines = [line.strip() for line in LINE_SPLIT_RE.split(str(text or ""))]

    tasks: list[TaskData] = []
    for line_no, line in enumerate(lines, start=1):
        if not line:
            continue
        task = normalize_row(split_row(line), id_factory)
        if task is None:
            const.LOGGER.debug("DEBUG: Import - Dropped row %s: %r", line_no, line)
            continue
        tasks.append(task)

    const.LOGGER.debug(
        "DEBUG: Import - Parsed %s task(s) from %s line(s)", len(tasks), len(lines)
    )
    return tasks
