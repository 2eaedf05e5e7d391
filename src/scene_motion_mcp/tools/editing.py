"""Editing tools: 4 pure scene/element edits on a FastMCP sub-server.

Each tool takes the current composition and returns the edited copy; the
server keeps no state between calls. The input only has to conform to the
schema, so a composition with structural issues can be edited into shape.
Remaining issues are reported alongside the result.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from .. import editing
from ..errors import make_tool_error
from ..models.composition import Composition
from ..tracing import trace
from ..types import CompositionParam, ElementId, SceneIndex
from ..validation import validate_composition
from .composition import _composition_payload, _parse_param

logger = logging.getLogger(__name__)
editing_server = FastMCP("editing")

PatchParam = Annotated[dict | str, Field(
    description="Fields to replace (camelCase or snake_case); null clears an optional field",
)]
ElementParam = Annotated[dict | str, Field(
    description="Element object with id, type and position (or its JSON string)",
)]

_PURE_EDIT = ToolAnnotations(readOnlyHint=True, idempotentHint=True, openWorldHint=False)


def _load(composition: dict | str) -> Composition:
    return Composition.model_validate(_parse_param(composition, dict, "composition"))


def _edited(composition: Composition, action: str) -> dict:
    result = validate_composition(composition)
    logger.info(
        "%s: %d scene(s), %d outstanding issue(s)",
        action,
        len(composition.scenes),
        len(result.issues),
    )
    out = _composition_payload(composition)
    out["issues"] = result.issues
    return out


@editing_server.tool(annotations=_PURE_EDIT)
@trace(name="scene_update", span_type="TOOL")
async def scene_update(
    composition: CompositionParam,
    scene_index: SceneIndex,
    patch: PatchParam,
) -> dict:
    """Replace fields of one scene (duration, background, transition, id...).

    Args:
        composition: Current composition.
        scene_index: 0-based scene index.
        patch: Fields to replace.

    Returns:
        Dict with the edited composition, total_frames, duration_seconds
        and any remaining structural issues.
    """
    try:
        updated = editing.update_scene(_load(composition), scene_index, _parse_param(patch, dict, "patch"))
        return _edited(updated, "scene_update")
    except Exception as exc:
        return make_tool_error(exc)


@editing_server.tool(annotations=_PURE_EDIT)
@trace(name="element_update", span_type="TOOL")
async def element_update(
    composition: CompositionParam,
    scene_index: SceneIndex,
    element_id: ElementId,
    patch: PatchParam,
) -> dict:
    """Replace fields of one element; its id and type stay fixed.

    Args:
        composition: Current composition.
        scene_index: 0-based scene index.
        element_id: Id of the element to edit.
        patch: Fields to replace.

    Returns:
        Dict with the edited composition and remaining issues.
    """
    try:
        updated = editing.update_element(
            _load(composition),
            scene_index,
            element_id,
            _parse_param(patch, dict, "patch"),
        )
        return _edited(updated, "element_update")
    except Exception as exc:
        return make_tool_error(exc)


@editing_server.tool(annotations=_PURE_EDIT)
@trace(name="element_add", span_type="TOOL")
async def element_add(
    composition: CompositionParam,
    scene_index: SceneIndex,
    element: ElementParam,
) -> dict:
    """Append an element to a scene; it is drawn above the existing ones.

    Args:
        composition: Current composition.
        scene_index: 0-based scene index.
        element: New element; its id must be unused in the scene.

    Returns:
        Dict with the edited composition and remaining issues.
    """
    try:
        updated = editing.add_element(
            _load(composition),
            scene_index,
            _parse_param(element, dict, "element"),
        )
        return _edited(updated, "element_add")
    except Exception as exc:
        return make_tool_error(exc)


@editing_server.tool(annotations=_PURE_EDIT)
@trace(name="element_remove", span_type="TOOL")
async def element_remove(
    composition: CompositionParam,
    scene_index: SceneIndex,
    element_id: ElementId,
) -> dict:
    """Remove one element from a scene.

    Args:
        composition: Current composition.
        scene_index: 0-based scene index.
        element_id: Id of the element to remove.

    Returns:
        Dict with the edited composition and remaining issues.
    """
    try:
        updated = editing.remove_element(_load(composition), scene_index, element_id)
        return _edited(updated, "element_remove")
    except Exception as exc:
        return make_tool_error(exc)
