from unittest.mock import Mock, call

import pytest
from github import GithubException

from src.helpers.exception_helper import AggregateError, ReportError
from src.helpers.status_helper import GithubStatusClient, report_skipped, skipped_status_for
from src.models import JobSpec, StatusReport, StatusState
from tests.fakes import FakeStatusClient


def test_skipped_status_for():
    assert skipped_status_for("first-context", "foobar1") == StatusReport(
        context="first-context",
        state=StatusState.SUCCESS,
        description="Skipped.",
        target_commit="foobar1",
    )


def test_report_skipped_in_order(pr, status_client, make_jobs):
    report_skipped(status_client, pr, make_jobs("first", "second", "third"))

    assert status_client.statuses == [
        ("foobar1", skipped_status_for("first-context", "foobar1")),
        ("foobar1", skipped_status_for("second-context", "foobar1")),
        ("foobar1", skipped_status_for("third-context", "foobar1")),
    ]


def test_report_skipped_ignores_skip_report(pr, status_client):
    to_skip = [
        JobSpec(name="first", context="first-context"),
        JobSpec(name="second", context="second-context", skip_report=True),
    ]
    report_skipped(status_client, pr, to_skip)

    assert status_client.statuses == [("foobar1", skipped_status_for("first-context", "foobar1"))]


def test_report_skipped_when_elided(pr, make_jobs):
    status_client = Mock()
    report_skipped(status_client, pr, make_jobs("first", "second"), elide_all=True)
    status_client.set_status.assert_not_called()


def test_report_skipped_without_jobs(pr, status_client):
    report_skipped(status_client, pr, [])
    assert status_client.statuses == []


def test_report_skipped_continues_after_failure(pr, make_jobs):
    status_client = FakeStatusClient(fail_on={"first-context", "third-context"})

    with pytest.raises(AggregateError) as exc_info:
        report_skipped(status_client, pr, make_jobs("first", "second", "third"))

    assert status_client.statuses == [("foobar1", skipped_status_for("second-context", "foobar1"))]
    errors = exc_info.value.errors
    assert all(isinstance(error, ReportError) for error in errors)
    assert [error.job_name for error in errors] == ["first", "third"]
    assert exc_info.value.report_errors == errors
    assert exc_info.value.submission_errors == []


def test_github_status_client(repository_mock):
    GithubStatusClient(repository_mock).set_status(
        "foobar1", skipped_status_for("first-context", "foobar1")
    )

    repository_mock.get_commit.assert_called_once_with("foobar1")
    repository_mock.get_commit.return_value.create_status.assert_called_once_with(
        state="success",
        description="Skipped.",
        context="first-context",
    )


def test_report_skipped_continues_after_github_error_with_string_errors(pr, make_jobs):
    status_client = Mock()
    status_client.set_status.side_effect = [
        GithubException(422, {"message": "Validation Failed", "errors": ["No commit found"]}),
        None,
    ]

    with pytest.raises(AggregateError) as exc_info:
        report_skipped(status_client, pr, make_jobs("first", "second"))

    assert status_client.set_status.call_args_list == [
        call("foobar1", skipped_status_for("first-context", "foobar1")),
        call("foobar1", skipped_status_for("second-context", "foobar1")),
    ]
    (error,) = exc_info.value.report_errors
    assert error.context == "first-context"
    assert str(error) == "failed to report first-context as skipped for first: No commit found"
