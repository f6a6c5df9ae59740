import datetime
from typing import Any
from unittest.mock import MagicMock, Mock, patch

import pytest

from config import default_configs
from src.models import JobSpec, PullRequestRef
from tests.fakes import FakeJobClient, FakeStatusClient

default_configs()


@pytest.fixture
def make_jobs():
    def _make_jobs(*names: str, **kwargs) -> list[JobSpec]:
        return [JobSpec(name=name, context=f"{name}-context", **kwargs) for name in names]

    return _make_jobs


@pytest.fixture
def pr():
    return PullRequestRef(
        org="org",
        repo="repo",
        base_ref="branch",
        base_sha="basesha1",
        head_sha="foobar1",
        number=42,
    )


@pytest.fixture
def job_client():
    return FakeJobClient()


@pytest.fixture
def status_client():
    return FakeStatusClient()


@pytest.fixture
def check_suite_event(repository_mock):
    pull_request = Mock(number=42, base=Mock(ref="branch", sha="basesha1"))
    check_suite = Mock(head_sha="foobar1", pull_requests=[pull_request])
    return Mock(repository=repository_mock, check_suite=check_suite)


@pytest.fixture
def repository_mock():
    repository = Mock(full_name="org/repo", owner=Mock(login="org"))
    repository.name = "repo"
    return repository


@pytest.fixture(autouse=True)
def fixed_datetime_now():
    with patch("src.helpers.db_helper.datetime") as mock:
        mock.now.return_value = datetime.datetime(2022, 4, 1, 0, 0)
        yield mock.now


@pytest.fixture
def table_stub():
    class TableStub(MagicMock):
        def __init__(self, *args: Any, **kw: Any):
            super().__init__(*args, **kw)
            self.creation_date_time = 385959600.0
            self.items = []

        def put_item(self, Item):
            self.items.append(Item)

    return TableStub()
