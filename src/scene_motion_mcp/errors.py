"""Structured error handling: error categories, classification, and tool error model."""

from __future__ import annotations

import json
from enum import Enum

from pydantic import BaseModel, Field, ValidationError


class ErrorCategory(str, Enum):
    """Categories of errors for diagnostics."""

    COMPOSITION_INVALID = "COMPOSITION_INVALID"
    DUPLICATE_ID = "DUPLICATE_ID"
    TRANSITION_TOO_LONG = "TRANSITION_TOO_LONG"
    SCENE_NOT_FOUND = "SCENE_NOT_FOUND"
    ELEMENT_NOT_FOUND = "ELEMENT_NOT_FOUND"
    JSON_PARSE_FAILED = "JSON_PARSE_FAILED"
    FRAME_OUT_OF_RANGE = "FRAME_OUT_OF_RANGE"
    UNKNOWN = "UNKNOWN"


class CompositionError(ValueError):
    """Raised when final (non-streaming) input breaks a structural rule.

    ``issues`` lists every violation found, not just the first one.
    """

    def __init__(self, message: str, issues: list[str] | None = None) -> None:
        self.issues = list(issues or [])
        detail = f"{message}: {'; '.join(self.issues)}" if self.issues else message
        super().__init__(detail)


class ToolError(BaseModel):
    """Structured error returned from any tool."""

    error: str
    category: str
    hint: str
    retryable: bool = False
    issues: list[str] = Field(default_factory=list)


def format_validation_error(error: ValidationError) -> list[str]:
    """Flatten pydantic errors to ``path: message`` strings."""
    issues: list[str] = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item.get("loc", ()))
        issues.append(f"{loc}: {item.get('msg', 'invalid')}" if loc else item.get("msg", "invalid"))
    return issues


def categorize_error(error: Exception) -> tuple[ErrorCategory, str]:
    """Map an exception to an ErrorCategory + human-readable hint."""
    s = str(error).lower()

    if isinstance(error, ValidationError):
        return (
            ErrorCategory.COMPOSITION_INVALID,
            "Composition failed schema validation; see issues for the offending fields",
        )
    if isinstance(error, json.JSONDecodeError):
        return (
            ErrorCategory.JSON_PARSE_FAILED,
            "Input is not valid JSON. Send a complete object, or use stream_extract_scenes for partial text",
        )
    if "duplicate" in s:
        return (
            ErrorCategory.DUPLICATE_ID,
            "Scene ids must be unique per composition and element ids unique per scene",
        )
    if "transition" in s and "exceeds" in s:
        return (
            ErrorCategory.TRANSITION_TOO_LONG,
            "Shorten the transition to at most the shorter adjacent scene, "
            "or set SCENE_TRANSITION_POLICY=clamp",
        )
    if "scene index" in s or "scene not found" in s:
        return (
            ErrorCategory.SCENE_NOT_FOUND,
            "Scene index out of range (indices are 0-based)",
        )
    if "element not found" in s:
        return (
            ErrorCategory.ELEMENT_NOT_FOUND,
            "No element with that id in the scene, check element ids",
        )
    if "out of range" in s and "frame" in s:
        return (
            ErrorCategory.FRAME_OUT_OF_RANGE,
            "Frame must lie in [0, totalFrames)",
        )
    if isinstance(error, CompositionError):
        return (
            ErrorCategory.COMPOSITION_INVALID,
            "Composition is structurally invalid. Fix the listed issues and resend",
        )

    return (ErrorCategory.UNKNOWN, str(error))


def make_tool_error(error: Exception) -> dict:
    """Create a serialisable ToolError dict from an exception."""
    cat, hint = categorize_error(error)
    if isinstance(error, ValidationError):
        issues = format_validation_error(error)
    else:
        issues = list(getattr(error, "issues", []) or [])
    return ToolError(
        error=str(error),
        category=cat.value,
        hint=hint,
        issues=issues,
    ).model_dump(mode="json")
