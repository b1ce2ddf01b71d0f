from .outcome import Outcome, StepStatus, summarize
from .planner import plan
from .service import apply_edit, load_snapshot
from .steps import StepKind

__all__ = ["Outcome", "StepKind", "StepStatus", "apply_edit", "load_snapshot", "plan", "summarize"]
