#!/usr/bin/env python3
"""Thin client for the GitLab v3 REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import requests

from exceptions import GitLabApiError, GitLabTransportError
from logging_utils import Logger

API_PREFIX = "/api/v3/"

# Error messages meaning the desired state already holds
BENIGN_ERRORS = (
    "Runner was already enabled for this project",
    "404 Project Not Found",
)


class Outcome(Enum):
    """How a single API response is treated by the caller."""
    SUCCESS = "success"
    BENIGN_FAILURE = "benign_failure"
    FATAL_FAILURE = "fatal_failure"


def classify_response(status_code: int, message: Optional[Any]) -> Outcome:
    if status_code < 400:
        return Outcome.SUCCESS
    if isinstance(message, str) and message in BENIGN_ERRORS:
        return Outcome.BENIGN_FAILURE
    return Outcome.FATAL_FAILURE


@dataclass
class ApiResponse:
    """Parsed outcome of one request/response exchange."""
    status_code: int
    body: Any = field(default_factory=dict)
    outcome: Outcome = Outcome.SUCCESS

    @property
    def message(self) -> Optional[Any]:
        if isinstance(self.body, dict):
            return self.body.get("message")
        return None

    def get(self, key: str, default: Any = None) -> Any:
        if isinstance(self.body, dict):
            return self.body.get(key, default)
        return default


def _encode_form(data: Mapping[str, Any]) -> Dict[str, str]:
    """Stringify form values; booleans go over the wire as true/false."""
    encoded = {}
    for key, value in data.items():
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        else:
            encoded[key] = str(value)
    return encoded


class GitLabClient:
    """Issues token-authenticated requests against one GitLab instance."""

    def __init__(
        self,
        url: str,
        token: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = url.rstrip("/") + API_PREFIX
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"PRIVATE-TOKEN": token})

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "GitLabClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def request(
        self, path: str, data: Optional[Mapping[str, Any]] = None
    ) -> ApiResponse:
        """POST ``data`` as a form when given, GET otherwise.

        Returns the parsed response for successes and allow-listed errors.
        Raises GitLabApiError for any other status >= 400 and
        GitLabTransportError when the server cannot be reached.
        """
        url = self.base_url + path.lstrip("/")
        method = "POST" if data is not None else "GET"
        Logger.debug(f"{method} {url}")
        try:
            if data is not None:
                response = self.session.post(
                    url, data=_encode_form(data), timeout=self.timeout
                )
            else:
                response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise GitLabTransportError(f"failed to contact gitlab API: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        result = ApiResponse(status_code=response.status_code, body=body)
        result.outcome = classify_response(response.status_code, result.message)

        if result.outcome is Outcome.FATAL_FAILURE:
            raise GitLabApiError(response.status_code, body)
        if result.outcome is Outcome.BENIGN_FAILURE:
            Logger.debug(f"ignoring benign gitlab error: {result.message}")
        return result
