"""Helper to check the report contexts of the jobs to run and to skip"""

from typing import Sequence

from src.helpers.exception_helper import OverlapError
from src.models import JobSpec


def validate_overlap(to_run: Sequence[JobSpec], to_skip: Sequence[JobSpec]) -> None:
    """
    Ensure that no context is both triggered and skipped.
    A job and a skipped job reporting to the same context would overwrite each other status.

    :param to_run: The jobs that will be submitted.
    :param to_skip: The jobs that will be reported as skipped.
    :raises OverlapError: With the contexts present in both lists.
    """
    run_contexts = {job.context for job in to_run}
    skip_contexts = {job.context for job in to_skip}
    if overlap := run_contexts & skip_contexts:
        raise OverlapError(list(overlap))
