"""Pure edit operations on a composition.

Every function returns a new ``Composition`` and leaves its input
untouched. Patches are shallow: top-level keys replace the stored value
(``null`` clears an optional field such as ``transition``). Keys may be
camelCase or snake_case.

Errors (all ``CompositionError``):
    - scene index outside the scene list
    - element id not present in the scene
    - an edit that would duplicate a scene or element id
    - an element patch that changes ``type`` or ``id``
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter
from pydantic.alias_generators import to_camel

from .errors import CompositionError
from .models.composition import Composition, Element, Scene


_element_adapter: TypeAdapter = TypeAdapter(Element)


def _camel_keys(patch: Mapping[str, Any]) -> dict[str, Any]:
    return {to_camel(key) if "_" in key else key: value for key, value in patch.items()}


def _scene_at(composition: Composition, index: int) -> Scene:
    if not 0 <= index < len(composition.scenes):
        raise CompositionError(
            f"Scene index {index} out of range (composition has {len(composition.scenes)} scene(s))"
        )
    return composition.scenes[index]


def _element_position(scene: Scene, element_id: str) -> int:
    for position, element in enumerate(scene.elements):
        if element.id == element_id:
            return position
    raise CompositionError(f"Element not found: '{element_id}' in scene '{scene.id}'")


def _with_scene(composition: Composition, index: int, scene: Scene) -> Composition:
    scenes = list(composition.scenes)
    scenes[index] = scene
    return composition.model_copy(update={"scenes": scenes})


def _with_elements(scene: Scene, elements: list) -> Scene:
    return scene.model_copy(update={"elements": elements})


def update_scene(composition: Composition, index: int, patch: Mapping[str, Any]) -> Composition:
    """Return a copy with scene *index* merged with *patch*.

    Raises:
        CompositionError: If *index* is out of range or the patch renames
            the scene to an id another scene already uses.
        pydantic.ValidationError: If the patched scene is invalid.
    """
    scene = _scene_at(composition, index)
    data = scene.model_dump(by_alias=True, exclude_none=True)
    data.update(_camel_keys(patch))
    updated = Scene.model_validate(data)

    if updated.id != scene.id and composition.scene(updated.id) is not None:
        raise CompositionError(f"Duplicate scene id '{updated.id}'")
    return _with_scene(composition, index, updated)


def update_element(
    composition: Composition,
    index: int,
    element_id: str,
    patch: Mapping[str, Any],
) -> Composition:
    """Return a copy with element *element_id* of scene *index* merged with *patch*.

    The element keeps its id and kind.

    Raises:
        CompositionError: On a bad index, unknown id, or a patch changing
            ``type`` or ``id``.
        pydantic.ValidationError: If the patched element is invalid.
    """
    scene = _scene_at(composition, index)
    position = _element_position(scene, element_id)
    element = scene.elements[position]
    changes = _camel_keys(patch)

    if changes.get("type", element.type) != element.type:
        raise CompositionError(
            f"Cannot change type of element '{element_id}' from {element.type} to {changes['type']}"
        )
    if changes.get("id", element_id) != element_id:
        raise CompositionError(f"Cannot change id of element '{element_id}'")

    data = element.model_dump(by_alias=True, exclude_none=True)
    data.update(changes)
    elements = list(scene.elements)
    elements[position] = _element_adapter.validate_python(data)
    return _with_scene(composition, index, _with_elements(scene, elements))


def add_element(
    composition: Composition,
    index: int,
    element: Element | Mapping[str, Any],
) -> Composition:
    """Return a copy with *element* appended (drawn on top) to scene *index*.

    Raises:
        CompositionError: On a bad index or an id already used in the scene.
        pydantic.ValidationError: If *element* is a dict that does not validate.
    """
    scene = _scene_at(composition, index)
    if isinstance(element, Mapping):
        element = _element_adapter.validate_python(dict(element))
    if scene.element(element.id) is not None:
        raise CompositionError(f"Duplicate element id '{element.id}' in scene '{scene.id}'")
    return _with_scene(composition, index, _with_elements(scene, [*scene.elements, element]))


def remove_element(composition: Composition, index: int, element_id: str) -> Composition:
    """Return a copy without element *element_id* in scene *index*.

    Raises:
        CompositionError: On a bad index or unknown id.
    """
    scene = _scene_at(composition, index)
    position = _element_position(scene, element_id)
    elements = [e for i, e in enumerate(scene.elements) if i != position]
    return _with_scene(composition, index, _with_elements(scene, elements))


def to_json(composition: Composition) -> str:
    """Serialise to 2-space indented camelCase JSON."""
    payload = composition.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(payload, indent=2)
