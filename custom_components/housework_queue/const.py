# File: const.py
"""Constants for the Housework Queue integration.

This file centralizes configuration keys, defaults, storage field names,
service names, translation keys and platform identifiers for consistency
across the integration.
"""

import logging

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
HOUSEWORK_QUEUE_TITLE = "Housework Queue"

# Integration Domain
DOMAIN = "housework_queue"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
STORAGE_KEY = "housework_queue_data"
STORAGE_VERSION = 1

# Schema version of the stored document and of exported snapshots
SCHEMA_VERSION_CURRENT = 2
SNAPSHOT_VERSION_CURRENT = 2

DEFAULT_ZERO = 0

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------

CONF_DAILY_BUDGET = "daily_budget_minutes"
CONF_UPDATE_INTERVAL = "update_interval"
CONF_BACKUPS_MAX_RETAINED = "backups_max_retained"

# ConfigFlow / OptionsFlow Steps
CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

# ------------------------------------------------------------------------------------------------
# Defaults and Limits
# ------------------------------------------------------------------------------------------------

DEFAULT_DAILY_BUDGET = 60
DEFAULT_UPDATE_INTERVAL = 5
DEFAULT_BACKUPS_MAX_RETAINED = 5

# Local time at which a fresh daily plan is generated
DEFAULT_DAILY_RESET_TIME = {"hour": 0, "minute": 0, "second": 0}

# Daily budget bounds (minutes)
BUDGET_MIN = 10
BUDGET_MAX = 240

# Task field bounds
FREQ_DAYS_MIN = 1
FREQ_DAYS_MAX = 3650
EST_MIN_MIN = 1
EST_MIN_MAX = 240
BACKUPS_MAX_RETAINED_LIMIT = 20

# Defaults for new tasks
DEFAULT_FREQ_DAYS = 7
DEFAULT_EST_MIN = 15

# History is newest-first and bounded
HISTORY_MAX_ENTRIES = 20

# Exponential smoothing rate applied per completion
ESTIMATE_SMOOTHING = 0.3

# Urgency heuristic constants
URGENCY_NOT_DUE_WEIGHT = 0.02
URGENCY_OVERDUE_QUADRATIC = 1.0
URGENCY_OVERDUE_LINEAR = 0.05

# ------------------------------------------------------------------------------------------------
# Data Keys (storage document, snapshot state)
# ------------------------------------------------------------------------------------------------

DATA_SCHEMA_VERSION = "schema_version"
DATA_TASKS = "tasks"
DATA_DAILY_PLAN = "dailyPlan"
# Key used by the original browser application for the daily plan
DATA_DAILY_PLAN_LEGACY = "todayPlan"

# Task
DATA_TASK_ID = "id"
DATA_TASK_NAME = "name"
DATA_TASK_FREQ_DAYS = "freqDays"
DATA_TASK_LAST_DONE = "lastDoneISO"
DATA_TASK_EST_MIN = "estMin"
DATA_TASK_HISTORY = "history"

# History entry
DATA_HISTORY_DATE = "dateISO"
DATA_HISTORY_ACTUAL_MIN = "actualMin"

# Daily plan
DATA_PLAN_DATE = "dateISO"
DATA_PLAN_PICKED_IDS = "pickedIds"
DATA_PLAN_COMPLETED_IDS = "completedIds"

# Snapshot envelope
SNAPSHOT_VERSION = "version"
SNAPSHOT_EXPORTED_AT = "exportedAt"
SNAPSHOT_EXPORTED_AT_LEGACY = "exportedAtISO"
SNAPSHOT_STATE = "state"

# Backups
BACKUP_DIR_NAME = "housework_queue_backups"
BACKUP_FILENAME_PREFIX = "housework-backup-"
BACKUP_FILENAME_SUFFIX = ".json"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------

SERVICE_ADD_TASK = "add_task"
SERVICE_COMPLETE_TASK = "complete_task"
SERVICE_CREATE_BACKUP = "create_backup"
SERVICE_DELETE_TASK = "delete_task"
SERVICE_IMPORT_TASKS = "import_tasks"
SERVICE_REGENERATE_PLAN = "regenerate_plan"
SERVICE_RESTORE_BACKUP = "restore_backup"
SERVICE_UPDATE_TASK = "update_task"

# Service fields
FIELD_ACTUAL_MINUTES = "actual_minutes"
FIELD_BACKUP_JSON = "backup_json"
FIELD_BUDGET_MINUTES = "budget_minutes"
FIELD_ESTIMATED_MINUTES = "estimated_minutes"
FIELD_FILENAME = "filename"
FIELD_FREQUENCY_DAYS = "frequency_days"
FIELD_LAST_DONE = "last_done"
FIELD_NAME = "name"
FIELD_PATH = "path"
FIELD_TASK_ID = "task_id"
FIELD_TASK_NAME = "task_name"
FIELD_TEXT = "text"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------

SENSOR_UID_SUFFIX_TODAY_PLAN = "_today_plan"
SENSOR_UID_SUFFIX_OVERDUE_TASKS = "_overdue_tasks"

DEFAULT_TODAY_PLAN_ICON = "mdi:broom"
DEFAULT_OVERDUE_TASKS_ICON = "mdi:calendar-alert"
DEFAULT_TASKS_UNIT = "tasks"

ATTR_BUDGET_MINUTES = "budget_minutes"
ATTR_COMPLETED_COUNT = "completed_count"
ATTR_DAYS_OVERDUE = "days_overdue"
ATTR_DUE_DATE = "due_date"
ATTR_DUE_LABEL = "due_label"
ATTR_ESTIMATED_MINUTES = "estimated_minutes"
ATTR_OVERDUE_TASKS = "overdue_tasks"
ATTR_PICKED_COUNT = "picked_count"
ATTR_PLAN_DATE = "plan_date"
ATTR_PLAN_STATE = "plan_state"
ATTR_REMAINING_MINUTES = "remaining_minutes"
ATTR_REMAINING_TASKS = "remaining_tasks"
ATTR_TASK_ID = "task_id"
ATTR_TASK_NAME = "task_name"

# ------------------------------------------------------------------------------------------------
# Translation Keys
# ------------------------------------------------------------------------------------------------

TRANS_KEY_SENSOR_TODAY_PLAN = "today_plan"
TRANS_KEY_SENSOR_OVERDUE_TASKS = "overdue_tasks"

TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ERROR_INVALID_NAME = "invalid_task_name"
TRANS_KEY_ERROR_INVALID_DATE = "invalid_last_done_date"

# ------------------------------------------------------------------------------------------------
# Error Messages
# ------------------------------------------------------------------------------------------------

MSG_NO_ENTRY_FOUND = "No Housework Queue entry found"

ERROR_TASK_NOT_FOUND_FMT = "Task '{}' not found"
ERROR_TASK_REFERENCE_REQUIRED = "Either task_id or task_name is required"
ERROR_INVALID_NAME = "Please enter a task name"
ERROR_INVALID_DATE = "Last done date must be YYYY-MM-DD or M/D/YYYY"
ERROR_IMPORT_NO_ROWS = (
    "No valid rows found. Each row needs 4 columns: name, frequency (days), "
    "last done (M/D/YYYY), minutes"
)
ERROR_RESTORE_FAILED_FMT = "Restore failed: {}"
ERROR_RESTORE_SOURCE_REQUIRED = "Either filename or backup_json is required"
ERROR_BACKUPS_DISABLED = "Backups are disabled (backups_max_retained is 0)"
ERROR_BACKUP_WRITE_FAILED_FMT = "Failed to write backup: {}"

# Maps validation translation keys to user-facing service error messages
VALIDATION_ERROR_MESSAGES = {
    TRANS_KEY_ERROR_INVALID_NAME: ERROR_INVALID_NAME,
    TRANS_KEY_ERROR_INVALID_DATE: ERROR_INVALID_DATE,
}
