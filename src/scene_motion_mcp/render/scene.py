"""Scene renderer: background paint plus every element at a local frame."""

from __future__ import annotations

from ..animation import DEFAULT_ANIMATION_FRAMES
from ..models.composition import GradientBackground, Scene, SolidBackground
from ..models.style import RenderedScene, css_number
from .elements import render_element

DEFAULT_BACKGROUND = "#000000"
DEFAULT_GRADIENT_DIRECTION = 0  # top to bottom


def background_paint(background: SolidBackground | GradientBackground | None) -> dict[str, str]:
    """Resolve a scene background to a CSS paint.

    A gradient ``direction`` of 0 paints top to bottom. CSS ``0deg`` paints
    bottom to top, so the CSS angle is the direction plus a half-turn.
    Colours keep their order.
    """
    if isinstance(background, GradientBackground) and background.colors:
        direction = DEFAULT_GRADIENT_DIRECTION if background.direction is None else background.direction
        angle = (direction + 180) % 360
        return {
            "background": f"linear-gradient({css_number(angle)}deg, {', '.join(background.colors)})",
        }
    color = background.color if isinstance(background, SolidBackground) else None
    return {"backgroundColor": color or DEFAULT_BACKGROUND}


def render_scene(
    scene: Scene,
    frame: int,
    fps: float,
    *,
    default_duration: int = DEFAULT_ANIMATION_FRAMES,
) -> RenderedScene:
    """Render *scene* at scene-local *frame*; elements keep their order (painter's order)."""
    elements = []
    for element in scene.elements:
        rendered = render_element(
            element,
            frame,
            fps,
            scene.duration_in_frames,
            default_duration=default_duration,
        )
        if rendered is not None:
            elements.append(rendered)
    return RenderedScene(
        id=scene.id,
        local_frame=frame,
        background=background_paint(scene.background),
        elements=elements,
    )
