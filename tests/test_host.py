"""Tests for the host environment boundary."""

import sys
from pathlib import Path

import pytest

from hostlog.config import HostSettings
from hostlog.errors import UnavailableError
from hostlog.host import ProcessHost, StaticHost, is_64bit_process


class TestProcessHost:
    def test_bitness_matches_interpreter(self):
        assert ProcessHost().is_64bit_process() is (sys.maxsize > 2**32)
        assert is_64bit_process() is (sys.maxsize > 2**32)

    def test_forced_bitness_overrides_detection(self):
        assert ProcessHost(HostSettings(force_bitness="32-bit")).is_64bit_process() is False
        assert ProcessHost(HostSettings(force_bitness="64-bit")).is_64bit_process() is True

    def test_version_unavailable_by_default(self):
        with pytest.raises(UnavailableError, match="version"):
            ProcessHost().version()

    def test_reported_version(self):
        assert ProcessHost(HostSettings(version=16.0)).version() == 16.0

    def test_configured_path(self, tmp_path):
        assert ProcessHost(HostSettings(path=tmp_path)).path() == str(tmp_path)

    def test_path_falls_back_to_interpreter(self):
        assert ProcessHost().path() == sys.executable

    def test_path_unavailable_without_interpreter(self, monkeypatch):
        monkeypatch.setattr(sys, "executable", "")
        with pytest.raises(UnavailableError, match="path"):
            ProcessHost().path()


class TestStaticHost:
    def test_reports_given_facts(self):
        host = StaticHost(is_64bit=False, version_number=14.0, install_path="/h")
        assert host.is_64bit_process() is False
        assert host.version() == 14.0
        assert host.path() == "/h"

    def test_missing_facts_unavailable(self):
        host = StaticHost()
        with pytest.raises(UnavailableError):
            host.version()
        with pytest.raises(UnavailableError):
            host.path()

    def test_is_hashable_value_object(self):
        assert StaticHost(version_number=16.0) == StaticHost(version_number=16.0)
        assert len({StaticHost(), StaticHost()}) == 1

    def test_path_object_accepted_via_settings(self):
        assert ProcessHost(HostSettings(path=Path("/opt/host"))).path() == "/opt/host"
