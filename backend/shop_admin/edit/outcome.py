from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel

from .steps import StepKind


class ExecutionState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"


@dataclass
class StepResult:
    kind: StepKind
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class StepStatus(BaseModel):
    status: Literal["succeeded", "failed"]
    detail: Optional[str] = None


class Outcome(BaseModel):
    product_id: Optional[str] = None
    state: ExecutionState
    all_succeeded: bool
    per_step_status: Dict[StepKind, StepStatus]

    @property
    def failed_steps(self) -> List[StepKind]:
        return [kind for kind, status in self.per_step_status.items() if status.status == "failed"]


def summarize(results: List[StepResult], product_id: Optional[str] = None) -> Outcome:
    per_step: Dict[StepKind, StepStatus] = {}
    for result in results:
        if result.succeeded:
            per_step[result.kind] = StepStatus(status="succeeded")
        else:
            per_step[result.kind] = StepStatus(status="failed", detail=result.error)

    all_succeeded = all(result.succeeded for result in results)
    return Outcome(
        product_id=product_id,
        state=ExecutionState.COMPLETED if all_succeeded else ExecutionState.COMPLETED_WITH_ERRORS,
        all_succeeded=all_succeeded,
        per_step_status=per_step,
    )
