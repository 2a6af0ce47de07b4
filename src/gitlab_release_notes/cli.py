"""
Command-line interface for the GitLab release notes generator.
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import ApplicationProperties, load_properties
from .exceptions import ReleaseNotesError
from .generator import ReleaseNotesGenerator
from .service import GitlabService
from .utils import PassError, get_token, setup_logging

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Generate markdown release notes for a GitLab milestone")

    # Positional arguments
    _ = parser.add_argument("milestone", help="Title of the milestone (case-insensitive)")
    _ = parser.add_argument("path", help="File to write the release notes to")

    _ = parser.add_argument("--config", "-c", help="YAML configuration file with GitLab settings and sections")
    _ = parser.add_argument("--repository", "-r", help="GitLab project path (namespace/project), overrides config")
    _ = parser.add_argument("--api-url", help="Base URL of the GitLab API, overrides config")
    _ = parser.add_argument("--token-pass-path", help="Path for the GitLab token in the pass utility")
    _ = parser.add_argument(
        "--verbose", "-v", action="count", default=0, help="Increase console verbosity (-v for info, -vv for debug)"
    )

    return parser.parse_args(argv)


def build_properties(args: argparse.Namespace) -> ApplicationProperties:
    """Merge the configuration file with command line overrides."""
    properties = load_properties(args.config) if args.config else ApplicationProperties()
    if args.repository:
        properties.gitlab.repository = args.repository
    if args.api_url:
        properties.gitlab.api_url = args.api_url
    properties.gitlab.private_token = get_token(args.token_pass_path, properties.gitlab.private_token)
    return properties


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging(verbosity=args.verbose)

    try:
        properties = build_properties(args)
        if not properties.sections:
            logger.warning("No sections configured, only contributors will be listed")

        service = GitlabService(properties.gitlab.api_url, properties.gitlab.private_token)
        generator = ReleaseNotesGenerator(service, properties)
        path = generator.generate(args.milestone, args.path)
    except (ReleaseNotesError, PassError, ValueError, OSError) as e:
        logger.error(f"Release notes generation failed: {e}")  # noqa: TRY400
        sys.exit(1)
    except Exception:
        logger.exception("Release notes generation failed")
        sys.exit(1)

    print(f"Release notes written to {path}")
    sys.exit(0)
