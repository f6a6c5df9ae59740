"""JobSpec and PullRequestRef models"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobSpec(BaseModel):
    """A presubmit job definition, as configured for the repository"""

    model_config = ConfigDict(frozen=True)

    name: str
    context: str
    skip_report: bool = False
    always_run: bool = False
    parameters: dict[str, Any] = Field(default_factory=dict)


class PullRequestRef(BaseModel):
    """The pull request that all the statuses and execution requests target"""

    model_config = ConfigDict(frozen=True)

    org: str
    repo: str
    base_ref: str
    head_sha: str
    base_sha: Optional[str] = None
    number: Optional[int] = None
    author: Optional[str] = None

    @property
    def full_name(self) -> str:
        """Repository full name, owner/repository"""
        return f"{self.org}/{self.repo}"
