"""
Main CLI entry point for the importer survey.
"""

import click
from dotenv import load_dotenv

from ..shared_utilities import configure_logging, get_logger, get_logging_manager
from ..shared_utilities.telemetry import trace_function
from .config import load_config, resolve_token
from .core import ImporterSurvey
from .exceptions import SurveyError
from .github_client import GitHubClient
from .output_formatter import REPORT_MODES, ReportFormatter

# Load environment variables from .env file
load_dotenv()


class ProgressIndicator:
    """Simple progress indicator for CLI operations."""

    def __init__(self, quiet: bool = False):
        """Initialize progress indicator.

        Args:
            quiet: If True, suppress progress output
        """
        self.quiet = quiet

    def update(self, current: int, total: int, message: str) -> None:
        """Update progress display."""
        if self.quiet:
            return

        if total > 0:
            percentage = (current / total) * 100
            click.echo(f"[{percentage:6.1f}%] {message}", err=True)
        else:
            click.echo(f"[  ---  ] {message}", err=True)


@click.command()
@click.option(
    "--mode",
    type=click.Choice(REPORT_MODES),
    default="ranked",
    help="Report shape: ranked list or map keyed by project",
    show_default=True,
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    help="Output file (default: stdout)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file overriding the default survey settings",
)
@click.option(
    "--token",
    envvar="GITHUB_PERSONAL_TOKEN",
    help="GitHub token (or set GITHUB_PERSONAL_TOKEN env var)",
)
@click.option(
    "--discovery-url",
    help="Base URL of the importers API",
)
@click.option(
    "--direct-only",
    is_flag=True,
    help="Only count direct importers, not importers of importers",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress progress indicators",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging",
)
@trace_function("importer_survey_main", include_args=True)
def main(
    mode: str,
    output_file: str | None,
    config_file: str | None,
    token: str | None,
    discovery_url: str | None,
    direct_only: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Report external projects that import the tracked packages.

    Forks of the provider repositories and of the host project are excluded.
    The JSON report is written to stdout once the whole survey succeeded.

    Examples:

        # Ranked list of importing projects
        importer-survey > importers.json

        # Map keyed by project, only direct importers
        importer-survey --mode map --direct-only

        # Custom package list
        importer-survey --config survey.json -o report.json
    """
    configure_logging(level="DEBUG" if verbose else None)
    logger = get_logger(__name__)

    try:
        config = load_config(config_file)
        if discovery_url:
            config.discovery_url = discovery_url
        if direct_only:
            config.transitive = False

        client = GitHubClient(
            resolve_token(token, config.token_env_var), domain=config.hosting_domain
        )
        survey = ImporterSurvey(config, client)

        progress = ProgressIndicator(quiet=quiet)
        aggregator = survey.run(progress_callback=progress.update)
        client.log_rate_limit()

        formatter = ReportFormatter()
        if output_file:
            formatter.save_to_file(aggregator, output_file, mode)
            click.echo(f"Output saved to {output_file}", err=True)
        else:
            click.echo(formatter.format_json_output(aggregator, mode))

    except SurveyError as e:
        get_logging_manager().log_operation_error("importer_survey", e)
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e


if __name__ == "__main__":
    main()
