"""Global-frame renderer: everything visible at one composition frame."""

from __future__ import annotations

from ..animation import DEFAULT_ANIMATION_FRAMES
from ..models.composition import Composition
from ..models.style import RenderedFrame
from ..timeline import locate_frame, total_frames
from .scene import render_scene
from .transitions import transition_presentation


def render_frame(
    composition: Composition,
    frame: int,
    *,
    default_duration: int = DEFAULT_ANIMATION_FRAMES,
) -> RenderedFrame:
    """Render every scene layer visible at global *frame*.

    Outside transitions exactly one layer is returned; inside an overlap the
    exiting scene comes first and the entering scene second (drawn on top),
    each carrying its transition presentation.

    Raises:
        ValueError: If the composition has no scenes or *frame* is outside
            ``[0, total_frames)``.
    """
    fps = composition.meta.fps
    layers = []
    for window in locate_frame(composition.scenes, frame):
        scene = composition.scenes[window.index]
        rendered = render_scene(scene, window.local_frame, fps, default_duration=default_duration)
        if window.role != "single":
            rendered.presentation = transition_presentation(
                window.transition,
                window.progress or 0.0,
                entering=window.role == "entering",
            )
        layers.append(rendered)
    return RenderedFrame(
        frame=frame,
        total_frames=total_frames(composition.scenes),
        layers=layers,
    )
