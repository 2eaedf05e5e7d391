"""Partial-text scene extractor for compositions that are still streaming in.

A language model emits the scenes array token by token. Each time more
text arrives the scanner pulls out every top-level ``{...}`` object that is
now complete, keeps the ones that parse and carry the required scene
fields, and ignores whatever is still open. A scene, once extracted, is
never retracted.

Scanner state is ``depth`` (brace nesting) and ``object_start`` (index of
the outermost open ``{``), plus a JSON-string flag so braces inside string
values do not count. One linear pass, no backtracking, never raises on
malformed input.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .models.composition import Animation, Element, Scene, Transition

logger = logging.getLogger(__name__)

REQUIRED_SCENE_FIELDS = ("id", "durationInFrames", "background")
_ANIMATION_KEYS = ("enterAnimation", "exitAnimation", "enter_animation", "exit_animation")

_element_adapter: TypeAdapter = TypeAdapter(Element)


def has_required_fields(candidate: Any) -> bool:
    """True when *candidate* is an object carrying every required scene field."""
    return isinstance(candidate, Mapping) and all(key in candidate for key in REQUIRED_SCENE_FIELDS)


def _parse_candidate(text: str) -> dict | None:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as exc:
        logger.debug("Dropping unparsable object (%s): %.60s", exc, text)
        return None
    if not has_required_fields(parsed):
        logger.debug("Dropping object without required scene fields: %.60s", text)
        return None
    return parsed


class SceneStream:
    """Incremental scanner over a growing text buffer.

    ``feed()`` scans only the newly appended characters, so the total work
    over a whole stream is linear in its length.

    Usage::

        stream = SceneStream()
        for delta in deltas:
            new_scenes = stream.feed(delta)
        stream.scenes  # everything extracted so far
    """

    def __init__(self) -> None:
        self.scenes: list[dict] = []
        self.reset()

    def reset(self) -> None:
        """Forget all text and extracted scenes."""
        self.scenes = []
        self._buffer = ""
        self._depth = 0
        self._object_start: int | None = None
        self._in_string = False
        self._escaped = False

    def feed(self, delta: str) -> list[dict]:
        """Append *delta* and return the scenes completed by it."""
        scan_from = len(self._buffer)
        self._buffer += delta
        found: list[dict] = []

        for index in range(scan_from, len(self._buffer)):
            char = self._buffer[index]
            if self._in_string:
                if self._escaped:
                    self._escaped = False
                elif char == "\\":
                    self._escaped = True
                elif char == '"':
                    self._in_string = False
                continue

            if char == '"' and self._depth > 0:
                self._in_string = True
            elif char == "{":
                if self._depth == 0:
                    self._object_start = index
                self._depth += 1
            elif char == "}" and self._depth > 0:
                self._depth -= 1
                if self._depth == 0 and self._object_start is not None:
                    scene = _parse_candidate(self._buffer[self._object_start : index + 1])
                    if scene is not None:
                        found.append(scene)
                    self._object_start = None

        self._trim()
        self.scenes.extend(found)
        return found

    def _trim(self) -> None:
        # only text of the open object can still matter
        if self._object_start is None:
            self._buffer = ""
        else:
            self._buffer = self._buffer[self._object_start :]
            self._object_start = 0


def extract_scenes(text: str) -> list[dict]:
    """Extract every complete, well-formed scene object from *text*.

    *text* is typically a truncated JSON array. Trailing incomplete
    content is ignored; malformed objects are skipped.
    """
    stream = SceneStream()
    return stream.feed(text)


def parse_final_scenes(text: str) -> list[dict]:
    """Parse the finished text in one go, falling back to the scanner.

    Accepts a scenes array or an object with a ``scenes`` array; keeps only
    entries with the required scene fields.
    """
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        logger.debug("Final text is not parsable JSON; using incremental extraction")
        return extract_scenes(text)

    if isinstance(parsed, Mapping):
        parsed = parsed.get("scenes")
    if not isinstance(parsed, list):
        return extract_scenes(text)
    return [item for item in parsed if has_required_fields(item)]


def _sanitize_element(raw: Any) -> Any:
    """Drop animations that would not validate so the element itself survives."""
    if not isinstance(raw, Mapping):
        return raw
    cleaned = dict(raw)
    for key in _ANIMATION_KEYS:
        if cleaned.get(key) is None:
            continue
        try:
            Animation.model_validate(cleaned[key])
        except ValidationError:
            logger.debug("Dropping invalid %s on element %r", key, cleaned.get("id"))
            cleaned.pop(key)
    return cleaned


def coerce_scene(raw: Mapping[str, Any]) -> Scene | None:
    """Leniently convert one raw scene dict into a ``Scene``.

    Invalid elements, animations and transitions are dropped; the scene is
    dropped (None) only when its own fields are unusable.
    """
    data = dict(raw)

    elements: list[Any] = []
    seen: set[str] = set()
    items = data.get("elements")
    for item in items if isinstance(items, list) else []:
        try:
            element = _element_adapter.validate_python(_sanitize_element(item))
        except ValidationError:
            logger.debug("Dropping invalid element in scene %r", data.get("id"))
            continue
        if element.id in seen:
            continue
        seen.add(element.id)
        elements.append(element)
    data["elements"] = []

    if data.get("transition") is not None:
        try:
            Transition.model_validate(data["transition"])
        except ValidationError:
            logger.debug("Dropping invalid transition on scene %r", data.get("id"))
            data.pop("transition")

    try:
        scene = Scene.model_validate(data)
    except ValidationError:
        logger.debug("Dropping invalid scene %r", data.get("id"))
        return None
    return scene.model_copy(update={"elements": elements})


def coerce_scenes(raw_scenes: Iterable[Mapping[str, Any]]) -> list[Scene]:
    """Leniently convert raw scene dicts, skipping unusable and duplicate-id scenes."""
    scenes: list[Scene] = []
    seen: set[str] = set()
    for raw in raw_scenes:
        scene = coerce_scene(raw)
        if scene is None or scene.id in seen:
            continue
        seen.add(scene.id)
        scenes.append(scene)
    return scenes
