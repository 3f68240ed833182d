#!/usr/bin/env python3
"""Runs the mirror pipeline as an ordered list of steps."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional

from config import MirrorConfig
from exceptions import GitLabApiError, MirrorError
from git_mirror import GitResult, RepositoryMirror
from gitlab_api import GitLabClient
from gitlab_target import GitLabTarget
from logging_utils import Logger

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1
EXIT_GITLAB_ERROR = 30
EXIT_AUTH_ERROR = 40


class ErrorPolicy(Enum):
    """What a failing step does to the rest of the pipeline."""
    FATAL = "fatal"
    BEST_EFFORT = "best_effort"


@dataclass
class Step:
    name: str
    action: Callable[[], Any]
    policy: ErrorPolicy


@dataclass
class StepResult:
    name: str
    ok: bool
    value: Any = None


class MirrorOrchestrator:
    def __init__(
        self,
        cfg: MirrorConfig,
        client: Optional[GitLabClient] = None,
        target: Optional[GitLabTarget] = None,
        mirror: Optional[RepositoryMirror] = None,
    ) -> None:
        self.cfg = cfg
        self.client = client or GitLabClient(cfg.gitlab.url, cfg.gitlab.token)
        self.gl = target or GitLabTarget(self.client, cfg.gitlab)
        self.repo = mirror or RepositoryMirror(cfg)
        self.results: List[StepResult] = []
        self._project: Any = None

    def run(self) -> int:
        try:
            for step in self._steps():
                self._run_step(step)
            Logger.info(
                f"pushed {self.cfg.github.branch} to {self.cfg.gitlab.project_path}"
            )
            return EXIT_SUCCESS
        except GitLabApiError as e:
            Logger.error(str(e))
            if e.status_code == 401:
                return EXIT_AUTH_ERROR
            return EXIT_GITLAB_ERROR
        except MirrorError as e:
            Logger.error(str(e))
            return EXIT_GITLAB_ERROR
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            return EXIT_EXECUTION_ERROR
        finally:
            self.client.close()

    def _steps(self) -> List[Step]:
        return [
            Step("ensuring the project exists", self._ensure_project, ErrorPolicy.FATAL),
            Step("enabling the CI runner", self._enable_runner, ErrorPolicy.FATAL),
            Step(
                "adding build events hook URL",
                lambda: self.gl.add_build_events_hook(self.cfg.webhook_url),
                ErrorPolicy.FATAL,
            ),
            Step(
                "making sure the repository exists on disk",
                self.repo.ensure_working_dir_exists,
                ErrorPolicy.BEST_EFFORT,
            ),
            Step(
                "making sure the gitlab remote exists",
                self.repo.ensure_remote_exists,
                ErrorPolicy.BEST_EFFORT,
            ),
            Step("pushing the ref", self.repo.push_ref, ErrorPolicy.BEST_EFFORT),
        ]

    def _run_step(self, step: Step) -> StepResult:
        """Run one step; exceptions from FATAL steps propagate to run()."""
        Logger.info(f"{step.name}...")
        value = step.action()
        ok = True
        if isinstance(value, GitResult) and not value.ok:
            if step.policy is ErrorPolicy.FATAL:
                raise MirrorError(
                    f"git {value.args[0]} exited with code {value.returncode}"
                )
            Logger.warn(
                f"the git command returned non-zero exit code {value.returncode}, "
                "continuing"
            )
            ok = False
        result = StepResult(step.name, ok, value)
        self.results.append(result)
        return result

    def _ensure_project(self) -> Any:
        self._project = self.gl.ensure_project_exists()
        return self._project

    def _enable_runner(self) -> Any:
        project_id = self._project.get("id") if self._project is not None else None
        if project_id is None:
            raise MirrorError(
                f"gitlab did not return an id for {self.cfg.gitlab.project_path}"
            )
        return self.gl.enable_runner(project_id)
