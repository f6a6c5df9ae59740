"""Methods to publish commit statuses for skipped jobs"""

import logging
from typing import Optional, Protocol, Sequence

from github.Repository import Repository

from src.helpers.exception_helper import AggregateError, ReportError
from src.models import JobSpec, PullRequestRef, StatusReport, StatusState

logger = logging.getLogger(__name__)

SKIPPED_DESCRIPTION = "Skipped."


class StatusClient(Protocol):
    """The source control status service"""

    def set_status(self, commit: str, report: StatusReport) -> None: ...


class GithubStatusClient:
    """Publish commit statuses in a Github repository"""

    def __init__(self, repository: Repository):
        self.repository = repository

    def set_status(self, commit: str, report: StatusReport) -> None:
        """Create the status in the commit"""
        self.repository.get_commit(commit).create_status(
            state=report.state.value,
            description=report.description,
            context=report.context,
        )


def skipped_status_for(context: str, commit: str) -> StatusReport:
    """The status that marks a context as skipped"""
    return StatusReport(
        context=context,
        state=StatusState.SUCCESS,
        description=SKIPPED_DESCRIPTION,
        target_commit=commit,
    )


def report_skipped(
    status_client: StatusClient,
    pr: PullRequestRef,
    to_skip: Sequence[JobSpec],
    elide_all: bool = False,
) -> None:
    """
    Publish a "Skipped." status for each job, in the given order.

    Jobs with skip_report, or all jobs when elide_all is set, get no status.
    A failure doesn't stop the remaining jobs from being reported.

    :param status_client: The client used to publish the statuses.
    :param pr: The pull request, the statuses target its head commit.
    :param to_skip: The jobs to report as skipped.
    :param elide_all: Do not publish any status.
    :raises AggregateError: With a ReportError for each status not published.
    """
    errors: list[Optional[Exception]] = []
    for job in to_skip:
        if elide_all or job.skip_report:
            continue
        logger.info("Skipping %s build.", job.name)
        try:
            status_client.set_status(pr.head_sha, skipped_status_for(job.context, pr.head_sha))
        except Exception as err:
            logger.error("Failed to report %s as skipped: %s", job.context, err)
            errors.append(ReportError(job.name, job.context, err))
    AggregateError.raise_if_any(errors)
