#!/usr/bin/env python3
"""Exception hierarchy for mirror-to-gitlab."""

from __future__ import annotations

from typing import Any, Optional


class MirrorError(Exception):
    """Base exception for mirroring operations."""


class ConfigError(MirrorError):
    """Configuration related errors."""


class GitLabApiError(MirrorError):
    """GitLab answered with an error that is not in the benign list."""

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"gitlab API error ({status_code}): {self._describe(body)}")

    @staticmethod
    def _describe(body: Any) -> str:
        if isinstance(body, dict):
            detail: Optional[Any] = body.get("message") or body.get("error")
            if detail:
                return str(detail)
        return str(body) if body else "no details"


class GitLabTransportError(MirrorError):
    """The GitLab API could not be reached."""
