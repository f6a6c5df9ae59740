"""Methods to submit the jobs to the execution backend"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Optional, Protocol, Sequence

from src.helpers.exception_helper import AggregateError, SubmissionError
from src.models import ExecutionRequest, JobSpec, PullRequestRef
from src.models.execution_request import PRESUBMIT

logger = logging.getLogger(__name__)

CREATED_BY_LABEL = "created-by-trigger"
EVENT_GUID_LABEL = "event-GUID"


class JobClient(Protocol):
    """The job execution backend"""

    def create(self, request: ExecutionRequest) -> str: ...


def build_execution_request(pr: PullRequestRef, job: JobSpec, event_id: str) -> ExecutionRequest:
    """Build the execution request for a presubmit job of the pull request"""
    labels = {
        CREATED_BY_LABEL: "true",
        "job": job.name,
        "type": PRESUBMIT,
        "org": pr.org,
        "repo": pr.repo,
        EVENT_GUID_LABEL: event_id,
    }
    if pr.number is not None:
        labels["pull"] = str(pr.number)
    return ExecutionRequest(
        job=job.name,
        context=job.context,
        org=pr.org,
        repo=pr.repo,
        base_ref=pr.base_ref,
        base_sha=pr.base_sha,
        head_sha=pr.head_sha,
        pull_number=pr.number,
        author=pr.author,
        event_id=event_id,
        parameters=dict(job.parameters),
        labels=labels,
    )


def _create(job_client: JobClient, request: ExecutionRequest) -> Optional[SubmissionError]:
    """Create one job, returning the error instead of raising it"""
    logger.info("Creating a new %s job for %s.", request.job, request.event_id)
    try:
        handle = job_client.create(request)
    except Exception as err:
        logger.error("Failed to create %s job: %s", request.job, err)
        error = SubmissionError(request.job, err)
        error.__cause__ = err
        return error
    logger.info("Job %s created as %s.", request.job, handle)
    return None


def submit(
    job_client: JobClient,
    pr: PullRequestRef,
    to_run: Sequence[JobSpec],
    event_id: str,
) -> None:
    """
    Submit one execution request per job, concurrently.

    Each job has its own worker, so one slow or failing job never holds the others.

    :param job_client: The execution backend.
    :param pr: The pull request to test.
    :param to_run: The jobs to submit.
    :param event_id: The webhook delivery that triggered the jobs.
    :raises AggregateError: With a SubmissionError for each job not created.
    """
    if not to_run:
        return
    with ThreadPoolExecutor(max_workers=len(to_run)) as executor:
        futures: list[Future] = []
        for job in to_run:
            logger.info("Starting %s build.", job.name)
            request = build_execution_request(pr, job, event_id)
            futures.append(executor.submit(_create, job_client, request))
        AggregateError.raise_if_any(future.result() for future in as_completed(futures))
