"""Closed error taxonomy shared by every command result.

The wire values are the ``code`` strings clients see in
``{"success": false, "error": {"code": ...}}``.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Every error code a command may report."""

    # --- Path ---
    INVALID_PATH = "INVALID_PATH"
    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    NOT_A_DIRECTORY = "NOT_A_DIRECTORY"
    NOT_A_FILE = "NOT_A_FILE"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    PARENT_NOT_FOUND = "PARENT_NOT_FOUND"
    DIRECTORY_NOT_EMPTY = "DIRECTORY_NOT_EMPTY"
    ESCAPE_ATTEMPT = "ESCAPE_ATTEMPT"

    # --- Entity ---
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    DUPLICATE_ENTITY = "DUPLICATE_ENTITY"
    INVALID_ENTITY = "INVALID_ENTITY"

    # --- Argument ---
    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNKNOWN_SUBCOMMAND = "UNKNOWN_SUBCOMMAND"

    # --- Operation ---
    OPERATION_FAILED = "OPERATION_FAILED"
    NOT_SUPPORTED = "NOT_SUPPORTED"
    PERMISSION_DENIED = "PERMISSION_DENIED"


class SegmentDecodeError(ValueError):
    """A path segment carries a malformed percent-escape or invalid UTF-8."""

    def __init__(self, segment: str) -> None:
        super().__init__(f"Invalid URL encoding in segment: {segment}")
        self.segment = segment


class UnknownClassError(ValueError):
    """A short class name has no entry in the alias table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown type: {name}")
        self.name = name


class RecordValidationError(ValueError):
    """A row failed validation against its table's record model."""

    def __init__(self, table: str, row_id: str, message: str) -> None:
        super().__init__(f"Invalid {table} row {row_id!r}: {message}")
        self.table = table
        self.row_id = row_id
