#!/usr/bin/env python3
"""
Mirror to GitLab - push a ref of a public GitHub repository into a GitLab
project.

The GitLab project is created when missing, gets the given CI runner and a
build-events webhook attached, and then receives a force-push of the ref
from a local working copy of the GitHub repository.
"""

from __future__ import annotations

import sys
from typing import NoReturn

from argument_parser import parse_arguments
from logging_utils import Logger
from mirror_orchestrator import MirrorOrchestrator


def main() -> NoReturn:
    cfg = parse_arguments()
    Logger.info(
        f"mirroring {cfg.github.owner}/{cfg.github.repo}@{cfg.github.branch} "
        f"-> {cfg.gitlab.project_path}"
    )
    orchestrator = MirrorOrchestrator(cfg)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
