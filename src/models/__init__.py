from src.models.execution_request import ExecutionRequest
from src.models.job_spec import JobSpec, PullRequestRef
from src.models.status_report import StatusReport, StatusState

__all__ = [
    "ExecutionRequest",
    "JobSpec",
    "PullRequestRef",
    "StatusReport",
    "StatusState",
]
