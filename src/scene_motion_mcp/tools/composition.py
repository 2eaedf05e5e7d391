"""Composition tools: validate, measure and render on a FastMCP sub-server."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..config import get_config
from ..errors import make_tool_error
from ..models.composition import Composition
from ..render import render_frame
from ..timeline import duration_seconds, scene_offsets, total_frames, transition_overlaps
from ..tracing import trace
from ..types import CompositionParam, FrameParam, ScenesParam, coerce_json_param
from ..validation import load_composition, validate_composition

logger = logging.getLogger(__name__)
composition_server = FastMCP("composition")


def _parse_param(value: dict | list | str, expected_type: type, name: str) -> dict | list:
    """Coerce a JSON tool parameter, raising on text that is not the expected JSON.

    Raises:
        json.JSONDecodeError: If *value* is a string that is not valid JSON.
        ValueError: If the JSON parses to the wrong shape.
    """
    value = coerce_json_param(value, expected_type)
    if isinstance(value, str):
        value = json.loads(value)
    if not isinstance(value, expected_type):
        raise ValueError(f"{name} must be a JSON {expected_type.__name__}, got {type(value).__name__}")
    return value


def _composition_payload(composition: Composition) -> dict:
    """Wire form of *composition* plus its timeline summary."""
    return {
        "composition": composition.model_dump(mode="json", by_alias=True, exclude_none=True),
        "total_frames": total_frames(composition.scenes),
        "duration_seconds": duration_seconds(composition.scenes, composition.meta.fps),
    }


@composition_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="composition_validate", span_type="TOOL")
async def composition_validate(composition: CompositionParam) -> dict:
    """Validate a finished composition against every structural rule.

    Checks schema conformance, unique scene ids, unique element ids per
    scene, and that each transition fits inside both scenes it joins.

    Args:
        composition: The composition object ``{meta, scenes}``.

    Returns:
        Dict with ``passed``, ``issues`` and, when the schema parsed, the
        normalised composition with its total length.
    """
    try:
        data = _parse_param(composition, dict, "composition")
        result = validate_composition(data)
        if not result.passed:
            logger.info("Composition failed validation with %d issue(s)", len(result.issues))
        out: dict = {"passed": result.passed, "issues": result.issues}
        if result.composition is not None:
            out.update(_composition_payload(result.composition))
        return out
    except Exception as exc:
        return make_tool_error(exc)


@composition_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="composition_duration", span_type="TOOL")
async def composition_duration(
    scenes: ScenesParam,
    fps: Annotated[int | None, Field(ge=1, description="Frames per second (default from config)")] = None,
) -> dict:
    """Compute the timeline of a (possibly partial) scene list.

    Transitions overlap neighbouring scenes, so each one is subtracted once
    from the summed scene durations. Works on a list that is still growing.

    Args:
        scenes: Array of scene objects.
        fps: Frames per second used for the seconds figure.

    Returns:
        Dict with total_frames, duration_seconds, scene_offsets and
        transition_overlaps.
    """
    try:
        items = [s for s in _parse_param(scenes, list, "scenes") if isinstance(s, Mapping)]
        rate = fps or get_config().default_fps
        return {
            "total_frames": total_frames(items),
            "duration_seconds": duration_seconds(items, rate),
            "fps": rate,
            "scene_offsets": scene_offsets(items),
            "transition_overlaps": transition_overlaps(items),
        }
    except Exception as exc:
        return make_tool_error(exc)


@composition_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="composition_render_frame", span_type="TOOL")
async def composition_render_frame(
    composition: CompositionParam,
    frame: FrameParam = 0,
) -> dict:
    """Resolve everything visible at one global frame of the composition.

    Inside a transition overlap two layers are returned, the exiting scene
    first and the entering scene on top, each with its presentation style.

    Args:
        composition: The composition object ``{meta, scenes}``.
        frame: Global frame, 0-based.

    Returns:
        Dict with frame, total_frames and the rendered layers (CSS-ready
        element styles, text after typewriter slicing).
    """
    try:
        model = load_composition(_parse_param(composition, dict, "composition"))
        rendered = render_frame(
            model,
            frame,
            default_duration=get_config().default_animation_frames,
        )
        return rendered.model_dump(mode="json", exclude_none=True)
    except Exception as exc:
        return make_tool_error(exc)
