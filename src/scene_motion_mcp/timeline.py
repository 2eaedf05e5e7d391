"""Timeline calculator: composition length and scene placement.

Scene *i*'s transition overlaps the tail of scene *i* with the head of
scene *i+1*, so each overlap is counted once:

    total = Σ durations − Σ transition overlaps (all scenes but the last)

Accepts validated ``Scene`` models or the raw scene dicts produced while a
composition is still streaming in; an incomplete list needs no special
handling.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from .models.composition import Scene, Transition

MIN_TOTAL_FRAMES = 1


def _as_frames(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value):
        return 0
    return max(0, int(value))


def scene_duration(scene: Scene | Mapping[str, Any]) -> int:
    """Duration in frames of a scene model or raw scene dict (0 if unusable)."""
    if isinstance(scene, Mapping):
        return _as_frames(scene.get("durationInFrames"))
    return scene.duration_in_frames


def _transition_frames(scene: Scene | Mapping[str, Any]) -> int:
    if isinstance(scene, Mapping):
        transition = scene.get("transition")
        if not isinstance(transition, Mapping):
            return 0
        return _as_frames(transition.get("durationInFrames"))
    if scene.transition is None:
        return 0
    return scene.transition.duration_in_frames


def transition_overlaps(scenes: Sequence[Scene | Mapping[str, Any]]) -> list[int]:
    """Overlap in frames between each scene and the next (``len(scenes) - 1`` items).

    A transition longer than either neighbour is clamped to the shorter one.
    """
    overlaps: list[int] = []
    for current, following in zip(scenes, scenes[1:]):
        frames = _transition_frames(current)
        overlaps.append(min(frames, scene_duration(current), scene_duration(following)))
    return overlaps


def total_frames(scenes: Sequence[Scene | Mapping[str, Any]]) -> int:
    """Total composition length in frames; never below 1."""
    naive = sum(scene_duration(scene) for scene in scenes)
    return max(MIN_TOTAL_FRAMES, naive - sum(transition_overlaps(scenes)))


def duration_seconds(scenes: Sequence[Scene | Mapping[str, Any]], fps: float) -> float:
    """Total composition length in seconds at *fps*."""
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps}")
    return total_frames(scenes) / fps


def scene_offsets(scenes: Sequence[Scene | Mapping[str, Any]]) -> list[int]:
    """Global start frame of every scene."""
    offsets: list[int] = []
    start = 0
    overlaps = transition_overlaps(scenes)
    for index, scene in enumerate(scenes):
        offsets.append(start)
        overlap = overlaps[index] if index < len(overlaps) else 0
        start += scene_duration(scene) - overlap
    return offsets


@dataclass(frozen=True)
class SceneWindow:
    """A scene visible at some global frame.

    ``role`` is ``"entering"``/``"exiting"`` inside a transition overlap,
    where ``progress`` runs 0 → 1 across the overlap; otherwise ``"single"``.
    """

    index: int
    local_frame: int
    role: Literal["single", "entering", "exiting"] = "single"
    progress: float | None = None
    transition: Transition | None = None


def locate_frame(scenes: Sequence[Scene], frame: int) -> list[SceneWindow]:
    """Return the scene window(s) visible at global *frame*, bottom to top.

    Raises:
        ValueError: If there are no scenes or *frame* is outside
            ``[0, total_frames)``.
    """
    if not scenes:
        raise ValueError("Cannot locate a frame in an empty composition")
    total = total_frames(scenes)
    if frame < 0 or frame >= total:
        raise ValueError(f"Frame {frame} out of range [0, {total})")

    overlaps = transition_overlaps(scenes)
    windows: list[SceneWindow] = []
    for index, (scene, start) in enumerate(zip(scenes, scene_offsets(scenes))):
        end = start + scene.duration_in_frames
        if not start <= frame < end:
            continue
        local = frame - start

        incoming = overlaps[index - 1] if index > 0 else 0
        outgoing = overlaps[index] if index < len(overlaps) else 0
        if incoming and local < incoming:
            windows.append(SceneWindow(
                index=index,
                local_frame=local,
                role="entering",
                progress=local / incoming,
                transition=scenes[index - 1].transition,
            ))
        elif outgoing and local >= scene.duration_in_frames - outgoing:
            windows.append(SceneWindow(
                index=index,
                local_frame=local,
                role="exiting",
                progress=(local - (scene.duration_in_frames - outgoing)) / outgoing,
                transition=scene.transition,
            ))
        else:
            windows.append(SceneWindow(index=index, local_frame=local))
    return windows
