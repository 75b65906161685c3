"""Base text utilities shared across all CLI output parsers."""

from __future__ import annotations

import re
from collections.abc import Iterable

# CSI escape sequences some ONT shells emit for colour / cursor movement.
_ANSI_RE: re.Pattern[str] = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def normalize_newlines(s: str) -> str:
    """Convert telnet ``\\r\\n`` / lone ``\\r`` line endings to ``\\n`` and drop NULs."""
    return s.replace("\x00", "").replace("\r\n", "\n").replace("\r", "\n")


def strip_ansi(s: str) -> str:
    """Remove ANSI escape sequences from *s*."""
    return _ANSI_RE.sub("", s)


def first_match(text: str, patterns: Iterable[re.Pattern[str]]) -> str | None:
    """Return group 1 of the first pattern in *patterns* that matches *text*.

    Args:
        text: Raw command output.
        patterns: Ordered compiled patterns, each with one capture group.

    Returns:
        The captured string, or ``None`` if no pattern matched.
    """
    for pattern in patterns:
        m = pattern.search(text)
        if m:
            return m.group(1)
    return None


def clean_command_output(raw: str, command: str, prompt: re.Pattern[str]) -> str:
    """Strip the echoed command line and the trailing shell prompt from *raw*.

    Args:
        raw: Everything read from the device after sending *command*, up to
            and including the prompt.
        command: The command line that was sent.
        prompt: Compiled shell-prompt pattern.

    Returns:
        The command output with ``\\n`` line endings.
    """
    lines = strip_ansi(normalize_newlines(raw)).split("\n")
    if lines and command.strip() and command.strip() in lines[0]:
        lines = lines[1:]
    if lines and prompt.search(lines[-1]):
        lines = lines[:-1]
    return "\n".join(lines).strip("\n")


def echoes_command(raw: str, command: str) -> bool:
    """True if the first non-blank line of *raw* contains *command*."""
    for line in strip_ansi(normalize_newlines(raw)).split("\n"):
        if line.strip():
            return command.strip() in line
    return False
