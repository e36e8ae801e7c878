"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import Mock

import pytest

from src.importer_survey.config import SurveyConfig
from src.importer_survey.exceptions import DiscoveryError
from src.importer_survey.paths import repo_root


class FakeDiscovery:
    """Discovery adapter answering from a fixed package -> importers table."""

    def __init__(self, importers: dict[str, list[str]], fail_on: str | None = None):
        self.importers = importers
        self.fail_on = fail_on
        self.calls: list[str] = []

    def discover(self, package, exclude):
        self.calls.append(package)
        if package == self.fail_on:
            raise DiscoveryError(f"Error fetching importers of {package}: boom")
        found = {
            imp
            for imp in self.importers.get(package, [])
            if repo_root(imp) not in exclude
        }
        return sorted(found)


@pytest.fixture
def survey_config():
    """Small survey configuration with two tracked packages."""
    return SurveyConfig(
        host_namespace="github.com/host/lib",
        tracked_packages=["p1", "p2"],
        provider_org="providers",
        legacy_repositories=["github.com/host/lib", "github.com/host/old"],
    )


@pytest.fixture
def mock_github_client():
    """GitHub client double with two provider repos and one fork each."""
    client = Mock()
    client.list_repositories.return_value = [
        "github.com/providers/a",
        "github.com/providers/b",
    ]
    forks = {
        ("providers", "a"): ["github.com/someone/a1"],
        ("providers", "b"): ["github.com/other/b1"],
        ("host", "lib"): ["github.com/fork/lib"],
        ("host", "old"): [],
    }
    client.list_forks.side_effect = lambda owner, repo: forks[(owner, repo)]
    client.get_stars.return_value = 0
    return client


@pytest.fixture
def fake_discovery_factory():
    """Factory for FakeDiscovery instances."""
    return FakeDiscovery
