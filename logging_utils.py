#!/usr/bin/env python3
"""Logging utilities for mirror-to-gitlab."""

import os
import sys
import time

import colorama

from security import SecurityValidator

colorama.init(autoreset=True)


class Logger:
    """Colored, process-tagged console output with credentials scrubbed."""

    PROCESS_NAME = "mirror-to-gitlab"

    @classmethod
    def debug(cls, *messages: str) -> None:
        cls._write(sys.stdout, colorama.Fore.LIGHTBLACK_EX, *messages)

    @classmethod
    def info(cls, *messages: str) -> None:
        cls._write(sys.stdout, colorama.Fore.CYAN, *messages)

    @classmethod
    def warn(cls, *messages: str) -> None:
        cls._write(sys.stdout, colorama.Fore.YELLOW, *messages)

    @classmethod
    def error(cls, *messages: str) -> None:
        cls._write(sys.stderr, colorama.Fore.RED, *messages)

    @classmethod
    def security_event(cls, event_type: str, details: str) -> None:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        cls._write(
            sys.stderr,
            colorama.Fore.MAGENTA,
            f"[SECURITY:{event_type}] {timestamp}: {details}",
        )

    @classmethod
    def _write(cls, stream, color: str, *messages: str) -> None:
        sanitized = [SecurityValidator.sanitize_for_logging(str(m)) for m in messages]
        stream.write(cls._format_line(color, *sanitized) + "\n")
        stream.flush()

    @classmethod
    def _get_header(cls) -> str:
        return f"[{cls.PROCESS_NAME}:{os.getpid()}]"

    @classmethod
    def _format_line(cls, color: str, *messages: str) -> str:
        header = cls._get_header()
        message = " ".join(messages)
        return f"{color}{header}{colorama.Style.RESET_ALL} {message}"
