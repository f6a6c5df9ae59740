"""StatusReport model"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class StatusState(Enum):
    """Commit status states"""

    SUCCESS = "success"
    PENDING = "pending"
    FAILURE = "failure"
    ERROR = "error"


class StatusReport(BaseModel):
    """A commit status to publish in the source control"""

    model_config = ConfigDict(frozen=True)

    context: str
    state: StatusState
    description: str
    target_commit: str
