"""
Input validation utilities.

Provides reusable validation functions for identifiers, storage slot
names and numeric limits supplied by callers (CLI arguments, settings).
"""

import re


class InputValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def validate_record_id(record_id: str, field_name: str = "record_id") -> str:
    """
    Validate a record ID.

    Record IDs must be non-empty strings containing only alphanumeric
    characters, hyphens, underscores and dots (older snapshots used
    fractional millisecond timestamps as ids).

    Args:
        record_id: The record ID to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated record ID (stripped of whitespace)

    Raises:
        InputValidationError: If validation fails

    Examples:
        >>> validate_record_id("3f2a9c0d1e")
        '3f2a9c0d1e'
        >>> validate_record_id("1700000000000.42")
        '1700000000000.42'
    """
    if not record_id or not isinstance(record_id, str):
        raise InputValidationError(f"{field_name} must be a non-empty string")

    record_id = record_id.strip()

    if not record_id:
        raise InputValidationError(f"{field_name} cannot be empty or whitespace-only")

    if not re.match(r'^[a-zA-Z0-9_\-\.]+$', record_id):
        raise InputValidationError(
            f"{field_name} contains invalid characters. "
            "Only alphanumeric, hyphens, underscores, and dots are allowed."
        )

    if len(record_id) > 255:
        raise InputValidationError(f"{field_name} exceeds maximum length of 255 characters")

    return record_id


def validate_slot_name(slot: str, field_name: str = "slot") -> str:
    """
    Validate a persistence slot name.

    Slot names become file names, so only a conservative character set is
    allowed and path separators are rejected.

    Examples:
        >>> validate_slot_name("records")
        'records'
        >>> validate_slot_name("../etc/passwd")  # doctest: +SKIP
        InputValidationError: slot contains invalid characters
    """
    if not slot or not isinstance(slot, str):
        raise InputValidationError(f"{field_name} must be a non-empty string")

    slot = slot.strip()

    if not re.match(r'^[a-zA-Z_][a-zA-Z0-9_\-]*$', slot):
        raise InputValidationError(
            f"{field_name} contains invalid characters. "
            "Slot names must start with a letter or underscore and contain only "
            "alphanumeric characters, hyphens and underscores."
        )

    if len(slot) > 64:
        raise InputValidationError(f"{field_name} exceeds maximum length of 64 characters")

    return slot


def validate_limit(limit: int, field_name: str = "limit", max_limit: int = 10000) -> int:
    """
    Validate a positive bounded integer (fetch caps, window sizes).

    Examples:
        >>> validate_limit(30)
        30
        >>> validate_limit(0)  # doctest: +SKIP
        InputValidationError: limit must be a positive integer
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InputValidationError(f"{field_name} must be an integer, got {type(limit).__name__}")

    if limit <= 0:
        raise InputValidationError(f"{field_name} must be a positive integer, got {limit}")

    if limit > max_limit:
        raise InputValidationError(f"{field_name} exceeds maximum of {max_limit}")

    return limit
