#!/usr/bin/env python3
"""Local working copy management: clone, gitlab remote and force-push."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from config import MirrorConfig
from logging_utils import Logger

REMOTE_NAME = "gitlab"


@dataclass
class GitResult:
    """Exit status and trimmed stdout of one git invocation."""
    args: List[str]
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class RepositoryMirror:
    """Drives the git binary over the working copy of one repository."""

    def __init__(self, config: MirrorConfig, git_binary: str = "git") -> None:
        self.config = config
        self.git_binary = git_binary

    @property
    def working_dir(self) -> str:
        return self.config.working_dir

    def run_git(self, args: List[str], cwd: Optional[str] = None) -> GitResult:
        """Run git, capturing stdout and letting stderr reach the console.

        A non-zero exit status is returned, not raised. OSError from a
        missing git binary propagates.
        """
        command = [self.git_binary] + args
        Logger.debug(f"running: {' '.join(command)}")
        completed = subprocess.run(
            command,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=None,
            text=True,
            check=False,
        )
        return GitResult(
            args=args,
            returncode=completed.returncode,
            output=(completed.stdout or "").strip(),
        )

    def ensure_working_dir_exists(self) -> Optional[GitResult]:
        # An existing directory is trusted to be a clone of the repository
        if os.path.exists(self.working_dir):
            Logger.info(f"reusing working copy: {self.working_dir}")
            return None

        Logger.info(
            f"cloning the repository: {self.config.github.owner}/"
            f"{self.config.github.repo}"
        )
        return self.run_git(["clone", self.config.github.clone_url, self.working_dir])

    def ensure_remote_exists(self) -> GitResult:
        """Recreate the gitlab remote so it carries the current token."""
        removed = self.run_git(["remote", "remove", REMOTE_NAME], cwd=self.working_dir)
        if not removed.ok:
            Logger.debug(f"no previous '{REMOTE_NAME}' remote to remove")

        return self.run_git(
            ["remote", "add", REMOTE_NAME, self.config.gitlab.remote_url],
            cwd=self.working_dir,
        )

    def push_ref(self) -> GitResult:
        branch = self.config.github.branch
        return self.run_git(
            ["push", REMOTE_NAME, f"origin/{branch}:refs/heads/{branch}", "--force"],
            cwd=self.working_dir,
        )
