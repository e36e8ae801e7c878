"""
Configuration for the importer survey.
"""

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path

from ..shared_utilities import get_logger
from .exceptions import ConfigurationError

DEFAULT_TRACKED_PACKAGES = (
    "helper/acctest",
    "helper/customdiff",
    "helper/encryption",
    "helper/hashcode",
    "helper/logging",
    "helper/mutexkv",
    "helper/pathorcontents",
    "helper/resource",
    "helper/schema",
    "helper/structure",
    "helper/validation",
    "httpclient",
    "plugin",
    "terraform",
)


@dataclass
class SurveyConfig:
    """Settings for one survey run."""

    host_namespace: str = "github.com/hashicorp/terraform"
    tracked_packages: list[str] = field(
        default_factory=lambda: list(DEFAULT_TRACKED_PACKAGES)
    )
    provider_org: str = "terraform-providers"
    legacy_repositories: list[str] = field(
        default_factory=lambda: [
            "github.com/hashicorp/terraform",
            "github.com/hashicorp/otto",
        ]
    )
    hosting_domain: str = "github.com"
    discovery_url: str = "https://api.godoc.org"
    transitive: bool = True
    token_env_var: str = "GITHUB_PERSONAL_TOKEN"
    request_timeout: float = 30.0

    @property
    def package_paths(self) -> list[str]:
        """Fully qualified tracked package paths, in configured order."""
        return [f"{self.host_namespace}/{suffix}" for suffix in self.tracked_packages]


def load_config(config_file: str | Path | None = None) -> SurveyConfig:
    """
    Build a SurveyConfig from defaults, an optional JSON file and environment.

    Keys in the JSON file override the matching defaults. IMPORTERS_API_URL
    overrides the discovery service URL.

    Raises:
        ConfigurationError: If the file is unreadable or has unknown keys
    """
    logger = get_logger(__name__)
    overrides: dict = {}

    if config_file is not None:
        path = Path(config_file)
        try:
            with open(path) as f:
                overrides = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to read config {path}: {e}") from e

        if not isinstance(overrides, dict):
            raise ConfigurationError(f"Config {path} must contain a JSON object")

        known = {f.name for f in fields(SurveyConfig)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown config keys in {path}: {', '.join(unknown)}"
            )
        logger.info(f"Loaded survey configuration from {path}")

    config = SurveyConfig(**overrides)

    env_url = os.environ.get("IMPORTERS_API_URL")
    if env_url:
        config.discovery_url = env_url

    if not config.tracked_packages:
        raise ConfigurationError("No tracked packages configured")

    return config


def resolve_token(token: str | None, env_var: str) -> str:
    """
    Return the GitHub credential, falling back to the environment.

    Raises:
        ConfigurationError: If no token is available
    """
    token = token or os.environ.get(env_var)
    if not token:
        raise ConfigurationError(f"{env_var} must be set")
    return token
