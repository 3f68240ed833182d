#!/usr/bin/env python3
"""Configuration dataclasses for mirror-to-gitlab."""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import quote, urlparse


@dataclass(frozen=True)
class GitLabConfig:
    """GitLab-specific configuration."""
    url: str
    token: str
    owner: str
    repo: str
    runner_id: int
    enable_shared_runners: bool = False

    @property
    def project_path(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def project_id(self) -> str:
        """Project path in the URL-encoded form GitLab accepts as an id."""
        return quote(self.project_path, safe="")

    @property
    def host(self) -> str:
        return urlparse(self.url).netloc

    @property
    def remote_url(self) -> str:
        """Authenticated push URL; never log it unsanitized."""
        scheme = urlparse(self.url).scheme or "https"
        return (
            f"{scheme}://{self.owner}:{self.token}@{self.host}/"
            f"{self.owner}/{self.repo}.git"
        )


@dataclass(frozen=True)
class GitHubConfig:
    """GitHub-specific configuration."""
    owner: str
    repo: str
    ref: str

    @property
    def branch(self) -> str:
        # refs/heads/main -> main
        return self.ref.split("/")[-1]

    @property
    def clone_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


@dataclass(frozen=True)
class MirrorConfig:
    """Main configuration for a single mirror run."""
    gitlab: GitLabConfig
    github: GitHubConfig
    webhook_url: str
    cwd: str

    @property
    def working_dir(self) -> str:
        return os.path.join(self.cwd, f"{self.github.repo}_{self.github.owner}")
