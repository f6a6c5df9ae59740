"""Errors raised while triggering jobs and helpers to describe GithubExceptions"""

from typing import Iterable, Iterator, Optional, Union

from github import GithubException


def extract_message_from_error(error: Union[dict[str, str], str]) -> str:
    """Extract the message from error, the error can also be just the message"""
    if not isinstance(error, dict):
        return str(error)

    if message := error.get("message"):
        return message

    if (field := error.get("field")) and (code := error.get("code")):
        return f"{field} {code}"

    return str(error)


def extract_github_error(exception: GithubException) -> str:
    """Extract the message from GithubException"""
    data = exception.data
    if not isinstance(data, dict):
        return str(data or exception)
    if (errors := data.get("errors")) and isinstance(errors, list):
        return extract_message_from_error(errors[0])
    return extract_message_from_error(data)


def describe_error(error: Exception) -> str:
    """Return a readable message for any error raised by a client"""
    if isinstance(error, GithubException):
        return extract_github_error(error)
    return str(error)


class TriggerError(Exception):
    """Base class for the trigger errors"""


class OverlapError(TriggerError):
    """The same context is both triggered and skipped"""

    def __init__(self, contexts: list[str]):
        self.contexts = sorted(contexts)
        super().__init__(
            f"the following contexts are both triggered and skipped: {', '.join(self.contexts)}"
        )


class SubmissionError(TriggerError):
    """A job could not be submitted to the execution backend"""

    def __init__(self, job_name: str, cause: Exception):
        self.job_name = job_name
        self.cause = cause
        super().__init__(f"failed to create job {job_name}: {describe_error(cause)}")


class ReportError(TriggerError):
    """A skipped status could not be published"""

    def __init__(self, job_name: str, context: str, cause: Exception):
        self.job_name = job_name
        self.context = context
        self.cause = cause
        super().__init__(
            f"failed to report {context} as skipped for {job_name}: {describe_error(cause)}"
        )


class AggregateError(TriggerError):
    """
    Zero or more independent failures collected from a batch operation.

    Nested aggregates are flattened, so every item is a per-job error that keeps
    its own type.
    """

    def __init__(self, errors: Iterable[Exception]):
        self.errors = list(_flatten(errors))
        super().__init__(self._message())

    def _message(self) -> str:
        if len(self.errors) == 1:
            return str(self.errors[0])
        return f"{len(self.errors)} errors: " + "; ".join(str(e) for e in self.errors)

    def __iter__(self) -> Iterator[Exception]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def submission_errors(self) -> list[SubmissionError]:
        """Errors from jobs that failed to start"""
        return [e for e in self.errors if isinstance(e, SubmissionError)]

    @property
    def report_errors(self) -> list[ReportError]:
        """Errors from skipped statuses that failed to publish"""
        return [e for e in self.errors if isinstance(e, ReportError)]

    @classmethod
    def merge(cls, *errors: Optional[Exception]) -> Optional["AggregateError"]:
        """Merge the errors in one AggregateError, None if there is no error"""
        aggregate = cls(e for e in errors if e is not None)
        return aggregate if aggregate.errors else None

    @classmethod
    def raise_if_any(cls, errors: Iterable[Optional[Exception]]) -> None:
        """Raise an AggregateError with the errors, if any"""
        if aggregate := cls.merge(*errors):
            raise aggregate


def _flatten(errors: Iterable[Exception]) -> Iterator[Exception]:
    for error in errors:
        if isinstance(error, AggregateError):
            yield from error.errors
        else:
            yield error
