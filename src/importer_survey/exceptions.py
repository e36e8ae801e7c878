"""
Exceptions raised by the importer survey.
"""


class SurveyError(Exception):
    """Base exception for errors that abort a survey run."""

    pass


class ConfigurationError(SurveyError):
    """Invalid configuration or missing credential."""

    pass


class ExclusionSetError(SurveyError):
    """Listing upstream repositories or their forks failed."""

    pass


class DiscoveryError(SurveyError):
    """The importer discovery service could not be queried."""

    pass


class GitHubClientError(Exception):
    """A GitHub API call failed."""

    pass
