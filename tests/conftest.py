"""Shared pytest helpers and fixtures for the hostlog test suite.

CountingComputer            — zero-arg computer that records how often it ran
host_64 / host_32           — StaticHost fixtures reporting version 16.0
host_without_version        — StaticHost that has not reported a version yet
"""

import threading

import pytest

from hostlog.errors import UnavailableError
from hostlog.host import StaticHost

HOST_PATH = "/opt/host/bin/host"


class CountingComputer:
    """Computer returning *value* and counting calls.

    With ``fail_times=n`` the first *n* calls raise ``UnavailableError``.
    """

    def __init__(self, value: object = "computed", fail_times: int = 0) -> None:
        self.value = value
        self.fail_times = fail_times
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self) -> object:
        with self._lock:
            self.calls += 1
            calls = self.calls
        if calls <= self.fail_times:
            raise UnavailableError("not ready yet")
        return self.value


@pytest.fixture
def host_64() -> StaticHost:
    return StaticHost(is_64bit=True, version_number=16.0, install_path=HOST_PATH)


@pytest.fixture
def host_32() -> StaticHost:
    return StaticHost(is_64bit=False, version_number=16.0, install_path=HOST_PATH)


@pytest.fixture
def host_without_version() -> StaticHost:
    return StaticHost(is_64bit=True, version_number=None, install_path=HOST_PATH)
