#!/usr/bin/env python3
"""
Error types for xliffconv.

Every fatal condition is a ConversionError subclass carrying a short
machine-readable error_type and a suggestion, so the CLI can report it as a
structured JSON object. Per-record problems are never raised; they are
logged and the record is skipped.
"""

from typing import Any, Optional


class ConversionError(Exception):
    """Base class for all fatal conversion errors."""

    error_type = "CONVERSION_ERROR"

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict:
        data = {
            "status": "error",
            "error_type": self.error_type,
            "error": self.message,
        }
        if self.suggestion:
            data["suggestion"] = self.suggestion
        if self.details:
            data["details"] = self.details
        return data


class UsageError(ConversionError):
    """Wrong arguments on the command line."""

    error_type = "USAGE_ERROR"


class InputNotFoundError(ConversionError):
    """An input path does not exist."""

    error_type = "FILE_NOT_FOUND"


class ValidationError(ConversionError):
    """Input content has the wrong shape (not an array of objects, no identifiers)."""

    error_type = "VALIDATION_ERROR"


class ConfigError(ConversionError):
    """Configuration file is unreadable or contains unknown keys."""

    error_type = "CONFIG_ERROR"


class EngineError(ConversionError):
    """The conversion engine failed or did not produce its expected output."""

    error_type = "ENGINE_ERROR"
