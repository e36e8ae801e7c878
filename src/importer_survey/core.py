"""
Survey orchestration: exclusion set, discovery, aggregation.
"""

import time
from collections.abc import Callable

from ..shared_utilities import get_logger, get_logging_manager, trace_function
from .aggregator import ProjectAggregator
from .config import SurveyConfig
from .discovery import ImporterDiscovery
from .exclusion import ExclusionSetBuilder
from .github_client import GitHubClient


class ImporterSurvey:
    """
    Runs the full survey for a configured set of tracked packages.

    The exclusion set is built completely before any discovery starts. Any
    SurveyError raised along the way aborts the run; only star lookups are
    allowed to fail quietly.
    """

    def __init__(
        self,
        config: SurveyConfig,
        client: GitHubClient,
        discovery: ImporterDiscovery | None = None,
    ):
        """Initialize the survey.

        Args:
            config: Survey settings
            client: Authenticated GitHub client
            discovery: Importer discovery adapter (built from config if None)
        """
        self.config = config
        self.client = client
        self.discovery = discovery or ImporterDiscovery(
            base_url=config.discovery_url,
            transitive=config.transitive,
            timeout=config.request_timeout,
            domain=config.hosting_domain,
        )
        self.logger = get_logger(__name__)

    def build_exclusion_set(self) -> frozenset[str]:
        builder = ExclusionSetBuilder(
            self.client,
            provider_org=self.config.provider_org,
            legacy_repositories=self.config.legacy_repositories,
            domain=self.config.hosting_domain,
        )
        return builder.build()

    @trace_function("importer_survey_run")
    def run(
        self,
        progress_callback: Callable[[int, int, str], None] | None = None,
    ) -> ProjectAggregator:
        """
        Execute the survey.

        Args:
            progress_callback: Optional (current, total, message) callback

        Returns:
            The aggregator holding every discovered project

        Raises:
            SurveyError: On any fatal failure
        """

        def update_progress(current: int, total: int, message: str):
            if progress_callback:
                progress_callback(current, total, message)

        logging_manager = get_logging_manager()
        start = time.time()
        packages = self.config.package_paths
        total = len(packages) + 1
        logging_manager.log_operation_start(
            "importer_survey",
            packages=len(packages),
            transitive=self.config.transitive,
        )

        update_progress(0, total, "Loading exclusion set")
        exclude = self.build_exclusion_set()

        aggregator = ProjectAggregator(
            stars_fetcher=self.client.get_stars, domain=self.config.hosting_domain
        )

        for i, package in enumerate(packages, start=1):
            update_progress(i, total, f"Discovering importers of {package}")
            self.logger.info(f"Discovering importers of {package!r} ...")
            importers = self.discovery.discover(package, exclude)
            self.logger.info(f"{len(importers)} found.")
            aggregator.ingest_many(package, importers)

        update_progress(total, total, "Survey complete")
        logging_manager.log_operation_complete(
            "importer_survey",
            time.time() - start,
            projects=len(aggregator),
            star_lookups=aggregator.stats.star_lookups,
            star_failures=aggregator.stats.star_failures,
        )
        return aggregator
