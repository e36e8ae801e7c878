"""
Importer survey toolkit.

Reports which external projects import a host project's packages,
ignoring forks of known upstream repositories.
"""

from .aggregator import ProjectAggregator
from .config import SurveyConfig
from .core import ImporterSurvey
from .data_models import ImporterPackages, ProjectRecord, RankedProjects

__all__ = [
    "ImporterSurvey",
    "ProjectAggregator",
    "SurveyConfig",
    "ImporterPackages",
    "ProjectRecord",
    "RankedProjects",
]
