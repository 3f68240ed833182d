#!/usr/bin/env python3
"""Input validation and log sanitization for mirror-to-gitlab."""

import os
import re
from typing import List, Optional


class SecurityValidator:
    """Validates user supplied values and scrubs credentials from output."""

    MAX_NAME_LENGTH = 255
    MAX_URL_LENGTH = 2048
    MAX_PATH_LENGTH = 4096

    # GitLab and GitHub both accept this set for user, group and project paths
    SAFE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")

    # Hosts a webhook or instance URL usually should not point at
    PRIVATE_HOST_MARKERS = (
        "localhost",
        "127.0.0.1",
        "0.0.0.0",
        "169.254.",
    )

    REDACTIONS = [
        (r"(https?://)[^:/@\s]+:[^@\s]+@", r"\1[REDACTED]@"),
        (r"(token['\"]?\s*[=:]\s*)[^\s,}]+", r"\1[REDACTED]"),
        (r"glpat-[A-Za-z0-9_-]+", "[GITLAB_TOKEN_REDACTED]"),
    ]

    @classmethod
    def _reject_control_chars(cls, value: str, what: str) -> None:
        if "\x00" in value or any(ord(c) < 32 for c in value):
            raise ValueError(f"{what} contains null bytes or control characters")

    @classmethod
    def validate_name(cls, name: str, what: str = "Name") -> str:
        """Validate an owner, group or repository name."""
        if not name or not isinstance(name, str):
            raise ValueError(f"{what} must be a non-empty string")

        if len(name) > cls.MAX_NAME_LENGTH:
            raise ValueError(f"{what} exceeds maximum length of {cls.MAX_NAME_LENGTH}")

        cls._reject_control_chars(name, what)

        if ".." in name:
            raise ValueError(f"{what} contains path traversal sequences")

        if not cls.SAFE_NAME_PATTERN.match(name):
            raise ValueError(f"{what} contains invalid characters")

        return name

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate an http(s) URL and return it unchanged."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        cls._reject_control_chars(url, "URL")

        if not url.startswith(("http://", "https://")):
            raise ValueError("URL must use the http or https scheme")

        scheme = url.split("://")[0].lower()
        if allowed_schemes and scheme not in allowed_schemes:
            raise ValueError(
                f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
            )

        url_lower = url.lower()
        for marker in cls.PRIVATE_HOST_MARKERS:
            if marker in url_lower:
                # print keeps this module free of a logging_utils import
                print(f"WARNING: URL points at a local address: {marker}")

        return url

    @classmethod
    def validate_instance_url(cls, url: str) -> str:
        """Validate a GitLab base URL; credentials go in headers, not here."""
        url = cls.validate_url(url, ["https", "http"])
        if "@" in url.split("://", 1)[1].split("/", 1)[0]:
            raise ValueError("GitLab instance URL must not embed credentials")
        return url.rstrip("/")

    @classmethod
    def validate_ref(cls, ref: str) -> str:
        """Validate a git ref such as ``refs/heads/main`` or ``main``."""
        if not ref or not isinstance(ref, str):
            raise ValueError("Ref must be a non-empty string")

        cls._reject_control_chars(ref, "Ref")

        if ".." in ref or ref.endswith("/") or " " in ref:
            raise ValueError("Ref is not a valid git ref")

        return ref

    @classmethod
    def validate_directory(cls, path: str) -> str:
        """Validate the directory working copies are cloned into."""
        if not path or not isinstance(path, str):
            raise ValueError("Directory must be a non-empty string")

        if len(path) > cls.MAX_PATH_LENGTH:
            raise ValueError(f"Directory exceeds maximum length of {cls.MAX_PATH_LENGTH}")

        if "\x00" in path:
            raise ValueError("Directory contains null bytes")

        normalized = os.path.abspath(path)
        if not os.path.isdir(normalized):
            raise ValueError(f"Directory does not exist: {normalized}")

        return normalized

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Remove credentials from a message before it is printed."""
        if not message:
            return message

        sanitized = str(message)
        for pattern, replacement in cls.REDACTIONS:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
