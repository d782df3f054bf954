"""Engine modules for Housework Queue integration.

Contains pure computation engines (no Home Assistant state):
- urgency_engine: Due dates, overdue checks, urgency scores
- plan_engine: Budget-bounded greedy plan selection
- estimate_engine: Exponential smoothing of duration estimates
- daily_plan_engine: Locked daily plan lifecycle
- task_engine: Task validation and construction
- import_engine: Pasted row parsing
"""

from .daily_plan_engine import DailyPlanEngine, PlanState
from .estimate_engine import EstimateEngine
from .import_engine import parse_import_text
from .plan_engine import PlanEngine, PlanResult
from .task_engine import TaskEngine, new_task_id
from .urgency_engine import UrgencyEngine

__all__ = [
    "DailyPlanEngine",
    "EstimateEngine",
    "PlanEngine",
    "PlanResult",
    "PlanState",
    "TaskEngine",
    "UrgencyEngine",
    "new_task_id",
    "parse_import_text",
]
