"""
Builds the set of repositories whose importers must not be counted.
"""

from ..shared_utilities import get_logger, trace_function
from .exceptions import ExclusionSetError, GitHubClientError
from .github_client import GitHubClient
from .paths import owner_repo


class ExclusionSetBuilder:
    """
    Collects upstream repositories and all of their direct forks.

    Seeds are every repository of the provider organization plus the fixed
    legacy repositories. Forks of forks are not followed.
    """

    def __init__(
        self,
        client: GitHubClient,
        provider_org: str,
        legacy_repositories: list[str],
        domain: str = "github.com",
    ):
        self.client = client
        self.provider_org = provider_org
        self.legacy_repositories = list(legacy_repositories)
        self.domain = domain
        self.logger = get_logger(__name__)

    def list_seeds(self) -> list[str]:
        """Provider organization repositories followed by the legacy ones."""
        self.logger.info(f"Listing repositories under {self.provider_org!r} ...")
        try:
            seeds = self.client.list_repositories(self.provider_org)
        except GitHubClientError as e:
            raise ExclusionSetError(
                f"Error listing repositories of {self.provider_org}: {e}"
            ) from e
        self.logger.info(f"{len(seeds)} repositories found.")

        return seeds + self.legacy_repositories

    @trace_function("build_exclusion_set")
    def build(self) -> frozenset[str]:
        """
        Build the exclusion set.

        Returns:
            Seed repositories together with every fork of every seed

        Raises:
            ExclusionSetError: If any listing fails; no partial set is returned
        """
        seeds = self.list_seeds()
        forks: set[str] = set()

        for i, upstream in enumerate(seeds, start=1):
            self.logger.info(f"Listing forks of {upstream!r} ({i}/{len(seeds)}) ...")
            try:
                owner, repo = owner_repo(upstream, self.domain)
                upstream_forks = self.client.list_forks(owner, repo)
            except (GitHubClientError, ValueError) as e:
                raise ExclusionSetError(
                    f"Error listing forks of {upstream}: {e}"
                ) from e
            self.logger.debug(f"{len(upstream_forks)} forks of {upstream!r} found.")
            forks.update(upstream_forks)

        exclusion = frozenset(forks.union(seeds))
        self.logger.info(f"Exclusion set of {len(exclusion)} entries loaded.")
        return exclusion
