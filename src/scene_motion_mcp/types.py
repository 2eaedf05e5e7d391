"""Shared type aliases and helpers for models and tool parameters."""

from __future__ import annotations

import json
from typing import Annotated, Literal

from pydantic import Field


def coerce_json_param(value: str | dict | list | None, expected_type: type) -> dict | list | None:
    """Parse MCP JSON-RPC string params back to dict/list.

    MCP JSON-RPC transport may serialize dict/list params as JSON strings.
    Pydantic v2 rejects these, so this helper coerces them back.

    Args:
        value: The parameter value (possibly a JSON string).
        expected_type: Expected Python type (``dict`` or ``list``).

    Returns:
        Parsed value if coercion succeeded, original value otherwise.
    """
    if not isinstance(value, str):
        return value
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return value
    return parsed if isinstance(parsed, expected_type) else value


# ── Literal enums ────────────────────────────────────────────────────────────

AnimationType = Literal["fade", "slide", "scale", "spring", "bounce", "rotate", "blur", "typewriter"]
SlideDirection = Literal["left", "right", "up", "down"]
TransitionType = Literal["fade", "slide", "wipe", "flip", "clockWipe"]
TransitionDirection = Literal["from-left", "from-right", "from-top", "from-bottom"]
ShapeKind = Literal["rectangle", "circle", "ellipse", "line"]
ObjectFit = Literal["cover", "contain", "fill"]
TextAlign = Literal["left", "center", "right"]
TransitionPolicy = Literal["reject", "clamp"]

# ── Annotated aliases ────────────────────────────────────────────────────────

Percent = Annotated[float, Field(ge=0, le=100, description="Percentage of the canvas (0-100)")]
Frames = Annotated[int, Field(ge=1, description="Duration in frames (>= 1)")]
Unit = Annotated[float, Field(ge=0, le=1, description="Fraction between 0 and 1")]

CompositionParam = Annotated[dict | str, Field(
    description="Composition object {meta, scenes} (or its JSON string)",
)]
ScenesParam = Annotated[list | str, Field(
    description="Array of scene objects (or its JSON string); may be a partial list",
)]
SceneIndex = Annotated[int, Field(ge=0, description="0-based index of the scene in composition.scenes")]
ElementId = Annotated[str, Field(min_length=1, description="Element id within the scene")]
FrameParam = Annotated[int, Field(ge=0, description="Global frame on the composition timeline")]
