"""
Importer discovery against a godoc-compatible importers API.
"""

from collections import deque
from urllib.parse import quote

import requests

from ..shared_utilities import (
    RateLimitManager,
    get_logger,
    global_rate_limit_manager,
    trace_operation,
)
from .exceptions import DiscoveryError
from .paths import repo_root


class ImporterDiscovery:
    """
    Lists the packages importing a given package.

    The service is expected to answer ``GET {base_url}/importers/{path}`` with
    ``{"results": [{"path": "..."}, ...]}``.
    """

    def __init__(
        self,
        base_url: str,
        transitive: bool = True,
        timeout: float = 30.0,
        domain: str = "github.com",
        session: requests.Session | None = None,
        rate_limit_manager: RateLimitManager | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.transitive = transitive
        self.timeout = timeout
        self.domain = domain
        self.session = session or requests.Session()
        self.rate_limit_manager = rate_limit_manager or global_rate_limit_manager
        self.logger = get_logger(__name__)

    def fetch_importers(self, path: str) -> list[str]:
        """
        Query the direct importers of one package.

        Raises:
            DiscoveryError: On HTTP failure or an unexpected payload
        """
        url = f"{self.base_url}/importers/{quote(path)}"
        try:
            response = self.rate_limit_manager.make_rate_limited_request(
                self.session.get,
                "importer_discovery",
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise DiscoveryError(f"Error fetching importers of {path}: {e}") from e
        except ValueError as e:
            raise DiscoveryError(
                f"Invalid importers response for {path}: {e}"
            ) from e

        results = payload.get("results") if isinstance(payload, dict) else None
        if results is None:
            return []
        if not isinstance(results, list):
            raise DiscoveryError(f"Invalid importers response for {path}")

        try:
            importers = [item["path"] for item in results]
        except (KeyError, TypeError) as e:
            raise DiscoveryError(
                f"Invalid importer entry for {path}: {e!r}"
            ) from e

        for importer in importers:
            if not isinstance(importer, str) or not importer:
                raise DiscoveryError(
                    f"Invalid importer entry for {path}: {importer!r}"
                )
        return importers

    def discover(self, package: str, exclude: frozenset[str] | set[str]) -> list[str]:
        """
        Find every importer of a tracked package.

        Importers whose repository root is excluded are dropped and their own
        importers are not followed. In transitive mode importers of importers
        are walked breadth-first.

        Returns:
            Sorted, deduplicated importer paths

        Raises:
            DiscoveryError: If any query fails
        """
        seen = {package}
        found: set[str] = set()
        queue = deque([package])

        with trace_operation(
            "discover_importers", {"package": package, "transitive": self.transitive}
        ):
            while queue:
                current = queue.popleft()
                for importer in self.fetch_importers(current):
                    if importer in seen:
                        continue
                    seen.add(importer)

                    if repo_root(importer, self.domain) in exclude:
                        continue

                    found.add(importer)
                    if self.transitive:
                        queue.append(importer)

        self.logger.debug(
            f"{len(found)} importers of {package} kept after exclusion "
            f"({len(seen) - 1} seen)"
        )
        return sorted(found)
