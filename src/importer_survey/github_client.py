"""
GitHub API client for the repository lookups the survey needs
"""

import requests
from github import Github, GithubException

from ..shared_utilities import get_logger
from .exceptions import GitHubClientError
from .paths import DEFAULT_HOSTING_DOMAIN, repo_identifier


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(self, token: str, domain: str = DEFAULT_HOSTING_DOMAIN):
        """Initialize an authenticated GitHub client."""
        self.token = token
        self.domain = domain
        self.github = Github(token, per_page=100)
        self.logger = get_logger(__name__)

    def list_repositories(self, org: str) -> list[str]:
        """
        List every repository owned by an organization.

        Args:
            org: Organization login

        Returns:
            Repository identifiers such as ``github.com/org/repo``
        """
        try:
            repos = self.github.get_organization(org).get_repos()
            return [repo_identifier(repo.full_name, self.domain) for repo in repos]
        except GithubException as e:
            raise GitHubClientError(
                f"Failed to list repositories of {org}: {self._message(e)}"
            ) from e
        except requests.RequestException as e:
            raise GitHubClientError(
                f"Failed to list repositories of {org}: {e}"
            ) from e

    def list_forks(self, owner: str, repo: str) -> list[str]:
        """
        List the direct forks of a repository.

        Returns:
            Fork identifiers such as ``github.com/someone/repo``
        """
        try:
            forks = self.github.get_repo(f"{owner}/{repo}").get_forks()
            return [repo_identifier(fork.full_name, self.domain) for fork in forks]
        except GithubException as e:
            raise GitHubClientError(
                f"Failed to list forks of {owner}/{repo}: {self._message(e)}"
            ) from e
        except requests.RequestException as e:
            raise GitHubClientError(
                f"Failed to list forks of {owner}/{repo}: {e}"
            ) from e

    def get_stars(self, owner: str, repo: str) -> int:
        """Get the stargazer count of a repository."""
        try:
            return self.github.get_repo(f"{owner}/{repo}").stargazers_count
        except GithubException as e:
            raise GitHubClientError(
                f"Failed to get stars of {owner}/{repo}: {self._message(e)}"
            ) from e
        except requests.RequestException as e:
            raise GitHubClientError(
                f"Failed to get stars of {owner}/{repo}: {e}"
            ) from e

    def log_rate_limit(self) -> None:
        """Log the remaining REST quota as last reported by GitHub."""
        remaining, limit = self.github.rate_limiting
        self.logger.info(f"GitHub rate limit: {remaining}/{limit} remaining")

    @staticmethod
    def _message(e: GithubException) -> str:
        data = e.data if isinstance(e.data, dict) else {}
        return data.get("message", str(e))
