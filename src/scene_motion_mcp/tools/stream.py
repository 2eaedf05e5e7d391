"""Streaming tools: pull finished scenes out of partial model output."""

from __future__ import annotations

import logging
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..errors import make_tool_error
from ..streaming import coerce_scenes, extract_scenes, parse_final_scenes
from ..timeline import total_frames
from ..tracing import trace

logger = logging.getLogger(__name__)
stream_server = FastMCP("stream")


@stream_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="stream_extract_scenes", span_type="TOOL")
async def stream_extract_scenes(
    text: Annotated[str, Field(description="Text received so far, typically a truncated scenes JSON array")],
    final: Annotated[bool, Field(
        description="True once the stream has ended; parses the text wholesale first",
    )] = False,
) -> dict:
    """Extract every complete scene from streaming (possibly truncated) text.

    Incomplete trailing objects are ignored and malformed ones skipped,
    so calling this on a growing buffer yields a growing scene list.
    Invalid elements and animations inside a scene are dropped rather
    than failing the scene.

    Args:
        text: Accumulated model output.
        final: Whether the text is complete.

    Returns:
        Dict with scenes (camelCase), scene_count, dropped count and the
        total_frames of the scenes found so far.
    """
    try:
        raw = parse_final_scenes(text) if final else extract_scenes(text)
        scenes = coerce_scenes(raw)
        dropped = len(raw) - len(scenes)
        if dropped:
            logger.debug("Dropped %d unusable scene(s) from stream", dropped)
        return {
            "scenes": [s.model_dump(mode="json", by_alias=True, exclude_none=True) for s in scenes],
            "scene_count": len(scenes),
            "dropped": dropped,
            "total_frames": total_frames(scenes),
        }
    except Exception as exc:
        return make_tool_error(exc)
