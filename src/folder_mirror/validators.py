"""
Input validation functions for folder-mirror command-line arguments.

Each validator returns ``(is_valid, error_message)`` so the CLI can collect
a message and print the usage once.
"""

import os
import threading
from pathlib import PurePath


# ---------------------------------------------------------------------------
# Error message formatting helpers
# ---------------------------------------------------------------------------


def format_validation_error(field_name: str, reason: str) -> str:
    """
    Generate consistent error message for validation failures.

    Args:
        field_name: Human-readable field name (e.g., "Source path")
        reason: Description of validation failure (e.g., "cannot be empty")

    Returns:
        Formatted error message string
    """
    return f"{field_name} {reason}"


def validate_relative_path(field_name: str, value: str) -> tuple[bool, str]:
    """
    Validate a path argument exactly as it was typed.

    Args:
        field_name: Human-readable field name used in the error message
        value: The raw argv string

    Returns:
        Tuple of (is_valid, error_message).
        Returns (True, "") if valid, (False, reason) if invalid.

    Validation rules:
        - Cannot be empty or whitespace-only
        - Must be relative
        - Must be unchanged by normalization (no '.', '..', doubled or
          trailing separators)
    """
    if not value or not value.strip():
        return (
            False,
            format_validation_error(field_name, "cannot be empty"),
        )

    if PurePath(value).is_absolute() or os.path.isabs(value):
        return (
            False,
            format_validation_error(field_name, "must be relative"),
        )

    if os.path.normpath(value) != value:
        return (
            False,
            format_validation_error(
                field_name,
                f"must be given in normalized form ('{os.path.normpath(value)}')",
            ),
        )

    return (True, "")


def validate_interval(value: str) -> tuple[bool, str]:
    """
    Validate the synchronization interval argument.

    Args:
        value: The raw argv string

    Returns:
        Tuple of (is_valid, error_message).

    Validation rules:
        - Whole number of seconds written with ASCII digits only
        - Greater than zero
        - No longer than the longest wait ``threading`` supports
    """
    if not (value.isascii() and value.isdigit()):
        return (
            False,
            format_validation_error(
                "Synchronization interval", "must be a whole number of seconds"
            ),
        )

    digits = value.lstrip("0")
    if not digits:
        return (
            False,
            format_validation_error(
                "Synchronization interval", "must be greater than zero"
            ),
        )

    longest = int(threading.TIMEOUT_MAX)
    if len(digits) > len(str(longest)) or int(digits) > longest:
        return (
            False,
            format_validation_error(
                "Synchronization interval",
                f"must be at most {longest} seconds",
            ),
        )

    return (True, "")
