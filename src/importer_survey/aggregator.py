"""
Folds discovered importers into per-project records.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..shared_utilities import get_logger
from .data_models import ImporterPackages, ProjectRecord, RankedProjects
from .exceptions import GitHubClientError
from .paths import DEFAULT_HOSTING_DOMAIN, is_hosted, owner_repo, repo_root

StarsFetcher = Callable[[str, str], int]


@dataclass
class AggregatorStats:
    """Counters for one aggregation run."""

    ingested: int = 0
    star_lookups: int = 0
    star_failures: int = 0


class ProjectAggregator:
    """
    Accumulates (tracked package, importer) pairs into project records.

    A record is created the first time an importer resolves to a new project
    root. Stars are looked up only at that moment and never refreshed. Later
    importers of the same project only extend its package mapping.
    """

    def __init__(
        self,
        stars_fetcher: StarsFetcher | None = None,
        domain: str = DEFAULT_HOSTING_DOMAIN,
    ):
        """
        Args:
            stars_fetcher: Callable taking (owner, repo) and returning a star
                count; hosted projects get 0 stars when it is None
            domain: Hosting domain whose paths can be resolved to owner/repo
        """
        self.stars_fetcher = stars_fetcher
        self.domain = domain
        self.records: dict[str, ProjectRecord] = {}
        self.ranked = RankedProjects()
        self.stats = AggregatorStats()
        self.logger = get_logger(__name__)

    def ingest(self, package: str, importer: str) -> ProjectRecord:
        """
        Add one importer of a tracked package.

        Returns:
            The record the importer was merged into
        """
        self.stats.ingested += 1
        project = repo_root(importer, self.domain)

        record = self.records.get(project)
        if record is not None:
            record.packages.add(importer, package)
            return record

        packages = ImporterPackages()
        packages.add(importer, package)
        record = ProjectRecord(
            name=project, stars=self._lookup_stars(importer), packages=packages
        )
        self.records[project] = record
        self.ranked.insert(record)
        return record

    def ingest_many(self, package: str, importers: list[str]) -> None:
        for importer in importers:
            self.logger.debug(f"Processing {importer!r} ...")
            self.ingest(package, importer)

    def _lookup_stars(self, importer: str) -> int:
        """Best-effort star count; failures are logged and count as 0."""
        if self.stars_fetcher is None or not is_hosted(importer, self.domain):
            return 0

        try:
            owner, repo = owner_repo(importer, self.domain)
        except ValueError as e:
            self.logger.warning(f"Skipping star lookup: {e}")
            return 0

        self.stats.star_lookups += 1
        try:
            return self.stars_fetcher(owner, repo)
        except GitHubClientError as e:
            self.stats.star_failures += 1
            self.logger.warning(f"{e}; using 0 stars")
            return 0

    def __len__(self) -> int:
        return len(self.records)
