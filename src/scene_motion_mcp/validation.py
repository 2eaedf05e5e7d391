"""Structural validation for final compositions.

Checks that go beyond schema conformance: id uniqueness, transitions that
fit between their neighbouring scenes, and animation types that only make
sense on certain element kinds. Streaming input never goes through this
path; it is coerced leniently by ``streaming.coerce_scenes`` instead.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from .config import get_config
from .errors import CompositionError, format_validation_error
from .models.composition import Composition, Scene
from .types import TransitionPolicy


@dataclass
class ValidationResult:
    """Aggregated result of all validation checks."""

    passed: bool
    issues: list[str] = field(default_factory=list)
    composition: Composition | None = None


def validate_scene_ids(scenes: Sequence[Scene]) -> list[str]:
    """Check that scene ids are unique within the composition.

    Returns:
        List of issue strings (empty = all unique).
    """
    issues: list[str] = []
    first_seen: dict[str, int] = {}
    for i, scene in enumerate(scenes):
        if scene.id in first_seen:
            issues.append(f"Duplicate scene id '{scene.id}' (scenes {first_seen[scene.id]} and {i})")
        else:
            first_seen[scene.id] = i
    return issues


def validate_element_ids(scenes: Sequence[Scene]) -> list[str]:
    """Check that element ids are unique within each scene."""
    issues: list[str] = []
    for scene in scenes:
        seen: set[str] = set()
        for element in scene.elements:
            if element.id in seen:
                issues.append(f"Duplicate element id '{element.id}' in scene '{scene.id}'")
            seen.add(element.id)
    return issues


def validate_transitions(scenes: Sequence[Scene], *, policy: TransitionPolicy = "reject") -> list[str]:
    """Check that every transition fits inside both scenes it joins.

    The last scene's transition has no successor and is ignored. Under the
    ``clamp`` policy oversized transitions pass; the timeline clamps them.
    """
    if policy == "clamp":
        return []
    issues: list[str] = []
    for i, (current, following) in enumerate(zip(scenes, scenes[1:])):
        if current.transition is None:
            continue
        frames = current.transition.duration_in_frames
        limit = min(current.duration_in_frames, following.duration_in_frames)
        if frames > limit:
            issues.append(
                f"Transition on scene {i} ('{current.id}') of {frames} frames "
                f"exceeds the shorter adjacent scene ({limit} frames)"
            )
    return issues


def validate_animation_targets(scenes: Sequence[Scene]) -> list[str]:
    """Check that typewriter animations sit on text elements only."""
    issues: list[str] = []
    for scene in scenes:
        for element in scene.elements:
            for animation in (element.enter_animation, element.exit_animation):
                if animation is not None and animation.type == "typewriter" and element.type != "text":
                    issues.append(
                        f"Element '{element.id}' in scene '{scene.id}': "
                        f"typewriter animation requires a text element, got {element.type}"
                    )
    return issues


def validate_composition(
    data: Composition | Mapping[str, Any],
    *,
    transition_policy: TransitionPolicy | None = None,
) -> ValidationResult:
    """Run schema and structural validation on a final composition.

    Args:
        data: A ``Composition`` or its camelCase dict form.
        transition_policy: ``reject`` or ``clamp``; defaults to the
            configured policy.

    Returns:
        ValidationResult with passed flag, collected issues and, when the
        schema check succeeded, the parsed composition.
    """
    if isinstance(data, Composition):
        composition = data
    else:
        try:
            composition = Composition.model_validate(data)
        except ValidationError as exc:
            return ValidationResult(passed=False, issues=format_validation_error(exc))

    policy = transition_policy or get_config().transition_policy
    scenes = composition.scenes
    issues: list[str] = []
    issues.extend(validate_scene_ids(scenes))
    issues.extend(validate_element_ids(scenes))
    issues.extend(validate_transitions(scenes, policy=policy))
    issues.extend(validate_animation_targets(scenes))

    return ValidationResult(passed=len(issues) == 0, issues=issues, composition=composition)


def load_composition(
    data: Composition | Mapping[str, Any],
    *,
    transition_policy: TransitionPolicy | None = None,
) -> Composition:
    """Strictly parse a final composition.

    Raises:
        CompositionError: Listing every issue found.
    """
    result = validate_composition(data, transition_policy=transition_policy)
    if not result.passed or result.composition is None:
        raise CompositionError("Invalid composition", result.issues)
    return result.composition
