"""This module contains the logic to run and skip the presubmit jobs of a Pull Request."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, Union

from githubapp import Config
from githubapp.events import CheckSuiteRequestedEvent, CheckSuiteRerequestedEvent

from src.helpers import context_helper, job_helper, request_helper, status_helper
from src.helpers.exception_helper import AggregateError, OverlapError, TriggerError
from src.helpers.job_helper import JobClient
from src.helpers.status_helper import GithubStatusClient, StatusClient
from src.models import JobSpec, PullRequestRef
from src.services import ExecutionRequestService

logger = logging.getLogger(__name__)


def run_and_skip(
    job_client: JobClient,
    status_client: StatusClient,
    pr: PullRequestRef,
    to_run: Sequence[JobSpec],
    to_skip: Sequence[JobSpec],
    event_id: str,
    elide_skipped_contexts: bool = False,
) -> None:
    """
    Submit the jobs to run and report the jobs to skip.

    Nothing is submitted or reported if a context is in both lists.
    Otherwise, the reporting and the submission run concurrently and every job is attempted,
    what succeeded is not rolled back when something else fails.

    :raises OverlapError: If a context is both triggered and skipped.
    :raises AggregateError: With every SubmissionError and ReportError.
    """
    try:
        context_helper.validate_overlap(to_run, to_skip)
    except OverlapError as err:
        logger.warning("Could not run or skip requested jobs: %s", err)
        raise

    with ThreadPoolExecutor(max_workers=2) as executor:
        skipping = executor.submit(
            status_helper.report_skipped, status_client, pr, to_skip, elide_skipped_contexts
        )
        running = executor.submit(job_helper.submit, job_client, pr, to_run, event_id)
    errors = [skipping.exception(), running.exception()]
    for error in errors:
        if error is not None and not isinstance(error, TriggerError):
            raise error
    AggregateError.raise_if_any(errors)


def run_requested(
    job_client: JobClient,
    pr: PullRequestRef,
    to_run: Sequence[JobSpec],
    event_id: str,
) -> None:
    """Submit the jobs to run, without validating or reporting anything"""
    job_helper.submit(job_client, pr, to_run, event_id)


def get_pull_request_ref(
    event: Union[CheckSuiteRequestedEvent, CheckSuiteRerequestedEvent],
) -> Optional[PullRequestRef]:
    """Build the PullRequestRef of the check suite Pull Request, None if there is none"""
    check_suite = event.check_suite
    pull_request = next(iter(check_suite.pull_requests or []), None)
    if pull_request is None:
        return None
    repository = event.repository
    return PullRequestRef(
        org=repository.owner.login,
        repo=repository.name,
        base_ref=pull_request.base.ref,
        base_sha=pull_request.base.sha,
        head_sha=check_suite.head_sha,
        number=pull_request.number,
    )


def get_presubmits() -> list[JobSpec]:
    """Get the presubmits configured for the repository"""
    return [JobSpec.model_validate(presubmit) for presubmit in Config.trigger.presubmits or []]


@Config.call_if("trigger.enabled")
def manage(event: CheckSuiteRequestedEvent) -> None:
    """Run the always_run presubmits and report the others as skipped"""
    if not (pr := get_pull_request_ref(event)):
        logger.info("No Pull Request for %s, ignoring.", event.check_suite.head_sha)
        return
    presubmits = get_presubmits()
    to_run = [job for job in presubmits if job.always_run]
    to_skip = [job for job in presubmits if not job.always_run]
    run_and_skip(
        ExecutionRequestService,
        GithubStatusClient(event.repository),
        pr,
        to_run,
        to_skip,
        request_helper.get_delivery_id(),
        elide_skipped_contexts=Config.trigger.elide_skipped_contexts,
    )


@Config.call_if("trigger.enabled")
def retrigger(event: CheckSuiteRerequestedEvent) -> None:
    """Run all the presubmits again"""
    if not (pr := get_pull_request_ref(event)):
        logger.info("No Pull Request for %s, ignoring.", event.check_suite.head_sha)
        return
    run_requested(ExecutionRequestService, pr, get_presubmits(), request_helper.get_delivery_id())
