#!/usr/bin/env python3
"""GitLab project provisioning: project, CI runner and build-events hook."""

from __future__ import annotations

from typing import Tuple

from config import GitLabConfig
from gitlab_api import ApiResponse, GitLabClient
from logging_utils import Logger


class GitLabTarget:
    """Makes sure the GitLab side of a mirror is in place."""

    def __init__(self, client: GitLabClient, config: GitLabConfig) -> None:
        self.client = client
        self.config = config

    def project_exists(self) -> Tuple[bool, ApiResponse]:
        # "404 Project Not Found" is benign, so a missing project does not raise
        response = self.client.request(f"projects/{self.config.project_id}")
        return response.status_code != 404, response

    def create_project(self) -> ApiResponse:
        response = self.client.request(
            "projects",
            {
                "name": self.config.repo,
                "public": True,
                "shared_runners_enabled": self.config.enable_shared_runners,
                "issues_enabled": False,
            },
        )
        Logger.info(f"created project: {self.config.project_path}")
        return response

    def ensure_project_exists(self) -> ApiResponse:
        """Return the project, creating it first when it is missing."""
        Logger.info(f"checking if {self.config.project_path} project exists")
        exists, response = self.project_exists()
        if exists:
            Logger.info(f"{self.config.project_path} project exists")
            return response

        Logger.info(f"{self.config.project_path} project doesn't exist, creating it")
        return self.create_project()

    def enable_runner(self, project_id: int) -> ApiResponse:
        response = self.client.request(
            f"projects/{project_id}/runners",
            {"runner_id": self.config.runner_id},
        )
        if response.status_code >= 400:
            Logger.info(f"runner {self.config.runner_id} was already enabled")
        return response

    def add_build_events_hook(self, webhook_url: str) -> ApiResponse:
        # Registers a new hook on every call; GitLab keeps duplicates
        return self.client.request(
            f"projects/{self.config.project_id}/hooks",
            {
                "url": webhook_url,
                "build_events": True,
                "push_events": False,
            },
        )
