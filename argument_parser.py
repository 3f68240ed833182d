#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from config import GitHubConfig, GitLabConfig, MirrorConfig
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_AUTH_ERROR = 40
EXIT_MISSING_ARGUMENTS = 2


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Mirror a GitHub repository ref into a GitLab project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --gitlab-repo-owner ci --gitlab-repo-name app \\
           --gitlab-token $TOKEN --gitlab-runner-id 7 \\
           --github-repo-owner acme --github-repo-name app \\
           --ref refs/heads/main \\
           --build-events-webhook-url https://ci.example.com/hooks/build
  %(prog)s --gitlab-instance https://gitlab.company.com \\
           --gitlab-enable-shared-runners --cwd /var/lib/mirrors ...
        """,
    )
    return parser


def _add_gitlab_arguments(parser: argparse.ArgumentParser) -> None:
    """Add GitLab-related arguments to parser."""
    group = parser.add_argument_group("GitLab")
    group.add_argument(
        "--gitlab-instance",
        dest="gitlab_instance",
        default="https://gitlab.com",
        help="Base URL of the GitLab instance (default: https://gitlab.com)",
    )
    group.add_argument(
        "--gitlab-repo-owner",
        dest="gitlab_repo_owner",
        required=True,
        help="GitLab user owning the mirror project",
    )
    group.add_argument(
        "--gitlab-repo-name",
        dest="gitlab_repo_name",
        required=True,
        help="Name of the GitLab mirror project",
    )
    group.add_argument(
        "--gitlab-token",
        dest="gitlab_token",
        help="GitLab private token (or set GITLAB_TOKEN env var)",
    )
    group.add_argument(
        "--gitlab-runner-id",
        dest="gitlab_runner_id",
        type=int,
        required=True,
        help="Id of the CI runner to enable on the project",
    )
    group.add_argument(
        "--gitlab-enable-shared-runners",
        dest="gitlab_enable_shared_runners",
        action="store_true",
        help="Enable shared runners when creating the project",
    )


def _add_github_arguments(parser: argparse.ArgumentParser) -> None:
    """Add GitHub-related arguments to parser."""
    group = parser.add_argument_group("GitHub")
    group.add_argument(
        "--github-repo-owner",
        dest="github_repo_owner",
        required=True,
        help="Owner of the public GitHub repository",
    )
    group.add_argument(
        "--github-repo-name",
        dest="github_repo_name",
        required=True,
        help="Name of the public GitHub repository",
    )
    group.add_argument(
        "--ref",
        dest="ref",
        required=True,
        help="Ref to mirror, e.g. refs/heads/main; the last segment is the branch",
    )


def _add_behavior_arguments(parser: argparse.ArgumentParser) -> None:
    """Add webhook and working directory arguments to parser."""
    parser.add_argument(
        "--build-events-webhook-url",
        dest="build_events_webhook_url",
        required=True,
        help="URL GitLab calls on build events",
    )
    parser.add_argument(
        "--cwd",
        dest="cwd",
        default=os.getcwd(),
        help="Directory holding the working copies (default: current directory)",
    )


def _validate_parsed_arguments(args) -> argparse.Namespace:
    """Validate parsed arguments, exiting on the first bad value."""
    try:
        validated = argparse.Namespace(
            gitlab_instance=SecurityValidator.validate_instance_url(
                args.gitlab_instance
            ),
            gitlab_repo_owner=SecurityValidator.validate_name(
                args.gitlab_repo_owner, "GitLab owner"
            ),
            gitlab_repo_name=SecurityValidator.validate_name(
                args.gitlab_repo_name, "GitLab repository name"
            ),
            github_repo_owner=SecurityValidator.validate_name(
                args.github_repo_owner, "GitHub owner"
            ),
            github_repo_name=SecurityValidator.validate_name(
                args.github_repo_name, "GitHub repository name"
            ),
            ref=SecurityValidator.validate_ref(args.ref),
            webhook_url=SecurityValidator.validate_url(
                args.build_events_webhook_url, ["https", "http"]
            ),
            cwd=SecurityValidator.validate_directory(args.cwd),
        )

        if args.gitlab_runner_id <= 0:
            raise ValueError("runner id must be a positive integer")

        Logger.security_event(
            "CONFIG_VALIDATION", "successfully validated all configuration inputs"
        )
        return validated

    except ValueError as e:
        Logger.security_event(
            "CONFIG_VALIDATION_FAILED", f"configuration validation failed: {e}"
        )
        Logger.error(f"configuration validation error: {e}")
        sys.exit(EXIT_MISSING_ARGUMENTS)


def _get_token(args) -> str:
    token = args.gitlab_token or os.getenv("GITLAB_TOKEN")
    if not token:
        Logger.error("error: no gitlab private token given (use --gitlab-token or GITLAB_TOKEN)")
        sys.exit(EXIT_AUTH_ERROR)
    return token


def parse_arguments(argv: Optional[List[str]] = None) -> MirrorConfig:
    """Parse command line arguments and return configuration object."""
    parser = _create_argument_parser()
    _add_gitlab_arguments(parser)
    _add_github_arguments(parser)
    _add_behavior_arguments(parser)

    args = parser.parse_args(argv)

    validated = _validate_parsed_arguments(args)
    token = _get_token(args)

    return MirrorConfig(
        gitlab=GitLabConfig(
            url=validated.gitlab_instance,
            token=token,
            owner=validated.gitlab_repo_owner,
            repo=validated.gitlab_repo_name,
            runner_id=args.gitlab_runner_id,
            enable_shared_runners=args.gitlab_enable_shared_runners,
        ),
        github=GitHubConfig(
            owner=validated.github_repo_owner,
            repo=validated.github_repo_name,
            ref=validated.ref,
        ),
        webhook_url=validated.webhook_url,
        cwd=validated.cwd,
    )
