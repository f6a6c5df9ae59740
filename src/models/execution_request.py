"""ExecutionRequest model"""

from typing import Any, Optional
from uuid import uuid4

from pydantic import Field

from src.helpers.db_helper import BaseModel

PRESUBMIT = "presubmit"


class ExecutionRequest(BaseModel):
    """A request to run a job, handed to the execution backend"""

    key_schema = ["id"]
    id: str = Field(default_factory=lambda: uuid4().hex)
    job: str
    type: str = PRESUBMIT
    context: str
    org: str
    repo: str
    base_ref: str
    base_sha: Optional[str] = None
    head_sha: str
    pull_number: Optional[int] = None
    author: Optional[str] = None
    event_id: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    labels: dict[str, str] = Field(default_factory=dict)
