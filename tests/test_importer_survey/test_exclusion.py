"""Tests for the exclusion set builder."""

import pytest

from src.importer_survey.exceptions import ExclusionSetError, GitHubClientError
from src.importer_survey.exclusion import ExclusionSetBuilder


class TestExclusionSetBuilder:
    """Test building the exclusion set."""

    def _builder(self, client):
        return ExclusionSetBuilder(
            client,
            provider_org="providers",
            legacy_repositories=["github.com/host/lib", "github.com/host/old"],
        )

    def test_seeds_and_forks_included(self, mock_github_client):
        exclusion = self._builder(mock_github_client).build()

        assert exclusion == frozenset(
            {
                "github.com/providers/a",
                "github.com/providers/b",
                "github.com/host/lib",
                "github.com/host/old",
                "github.com/someone/a1",
                "github.com/other/b1",
                "github.com/fork/lib",
            }
        )
        mock_github_client.list_repositories.assert_called_once_with("providers")

    def test_forks_of_forks_not_expanded(self, mock_github_client):
        self._builder(mock_github_client).build()

        queried = {call.args for call in mock_github_client.list_forks.call_args_list}
        assert queried == {
            ("providers", "a"),
            ("providers", "b"),
            ("host", "lib"),
            ("host", "old"),
        }

    def test_list_repositories_failure_is_fatal(self, mock_github_client):
        mock_github_client.list_repositories.side_effect = GitHubClientError("nope")

        with pytest.raises(ExclusionSetError, match="repositories of providers"):
            self._builder(mock_github_client).build()

        mock_github_client.list_forks.assert_not_called()

    def test_fork_failure_names_seed(self, mock_github_client):
        def list_forks(owner, repo):
            if repo == "b":
                raise GitHubClientError("Failed to list forks of providers/b")
            return []

        mock_github_client.list_forks.side_effect = list_forks

        with pytest.raises(ExclusionSetError, match="github.com/providers/b"):
            self._builder(mock_github_client).build()

    def test_unparseable_seed_is_fatal(self, mock_github_client):
        builder = ExclusionSetBuilder(
            mock_github_client,
            provider_org="providers",
            legacy_repositories=["example.com/not-hosted"],
        )
        mock_github_client.list_forks.side_effect = lambda owner, repo: []

        with pytest.raises(ExclusionSetError, match="example.com/not-hosted"):
            builder.build()
