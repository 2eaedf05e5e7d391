"""Animation style resolver: ``(animation, frame, fps, exit?, scene length) → style``.

Every function here is pure: the current frame is an explicit argument,
nothing is cached, so a live preview and a batch export of the same frame
produce identical output.

Timing: an enter window starts at ``delay``; an exit window *ends*
``delay`` frames before the scene ends. Linear effects clamp to their
window, spring-driven effects (scale, spring, bounce) start at the window
and run on spring time.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from .models.composition import Animation, SpringConfig
from .models.style import IDENTITY_STYLE, AnimationStyle, TransformOp
from .spring import spring_progress

DEFAULT_ANIMATION_FRAMES = 20
SLIDE_DISTANCE = 100  # percent of the element's own size
SLIDE_FADE_FRAMES = 10
SPRING_RISE_PX = 50
ROTATE_DEGREES = 360
MAX_BLUR_PX = 20

SCALE_SPRING = SpringConfig(damping=200)
SPRING_SPRING = SpringConfig(damping=10, stiffness=100)
BOUNCE_SPRING = SpringConfig(damping=8, stiffness=200)


def interpolate(
    value: float,
    input_range: Sequence[float],
    output_range: Sequence[float],
    *,
    clamp: bool = True,
) -> float:
    """Map *value* linearly from ``input_range`` onto ``output_range``.

    With ``clamp`` the result never leaves ``output_range``; without it the
    line is extended past both ends. A zero-width input range behaves as a
    step at its single point.
    """
    in_start, in_end = input_range
    out_start, out_end = output_range
    if in_end == in_start:
        return out_end if value >= in_end else out_start
    ratio = (value - in_start) / (in_end - in_start)
    if clamp:
        ratio = min(1.0, max(0.0, ratio))
    return out_start + ratio * (out_end - out_start)


def _unit(value: float) -> float:
    return min(1.0, max(0.0, value))


def animation_window(
    animation: Animation,
    *,
    is_exit: bool,
    scene_duration: int,
    default_duration: int = DEFAULT_ANIMATION_FRAMES,
) -> tuple[int, int]:
    """Return ``(start_frame, end_frame)`` of the animation within its scene."""
    duration = animation.duration_in_frames or default_duration
    if is_exit:
        start = scene_duration - duration - animation.delay
    else:
        start = animation.delay
    return start, start + duration


# ---------------------------------------------------------------------------
# Per-type resolvers
# ---------------------------------------------------------------------------

_Resolver = Callable[[Animation, float, float, bool, int, int], AnimationStyle]


def _linear_fade(frame: float, start: int, end: int, is_exit: bool) -> float:
    return interpolate(frame, (start, end), (1, 0) if is_exit else (0, 1))


def _fade(animation, frame, fps, is_exit, start, end) -> AnimationStyle:
    return AnimationStyle(opacity=_linear_fade(frame, start, end, is_exit))


def _slide(animation, frame, fps, is_exit, start, end) -> AnimationStyle:
    direction = animation.direction or ("right" if is_exit else "left")
    axis = "translateX" if direction in ("left", "right") else "translateY"
    sign = 1 if direction in ("right", "down") else -1

    if is_exit:
        offset = interpolate(frame, (start, end), (0, sign * SLIDE_DISTANCE))
    else:
        offset = interpolate(frame, (start, end), (-sign * SLIDE_DISTANCE, 0))

    # opacity settles early so the motion keeps going once visible
    fade_end = min(start + SLIDE_FADE_FRAMES, end)
    opacity = interpolate(frame, (start, fade_end), (1, 0) if is_exit else (0, 1))
    return AnimationStyle(opacity=opacity, transforms=(TransformOp(axis, offset, "%"),))


def _spring_value(animation: Animation, frame: float, fps: float, start: int, default: SpringConfig) -> float:
    config = animation.spring_config or default
    return spring_progress(
        max(0.0, frame - start),
        fps,
        damping=config.damping,
        stiffness=config.stiffness,
        mass=config.mass,
    )


def _spring_scale(default: SpringConfig) -> _Resolver:
    def resolve(animation, frame, fps, is_exit, start, end) -> AnimationStyle:
        progress = _spring_value(animation, frame, fps, start, default)
        scale = interpolate(progress, (0, 1), (1, 0) if is_exit else (0, 1), clamp=False)
        return AnimationStyle(transforms=(TransformOp("scale", scale),))

    return resolve


def _spring(animation, frame, fps, is_exit, start, end) -> AnimationStyle:
    progress = _spring_value(animation, frame, fps, start, SPRING_SPRING)
    if is_exit:
        progress = 1 - progress
    rise = interpolate(progress, (0, 1), (SPRING_RISE_PX, 0), clamp=False)
    return AnimationStyle(
        opacity=_unit(progress),
        transforms=(TransformOp("translateY", rise, "px"),),
    )


def _rotate(animation, frame, fps, is_exit, start, end) -> AnimationStyle:
    span = (0, ROTATE_DEGREES) if is_exit else (-ROTATE_DEGREES, 0)
    rotation = interpolate(frame, (start, end), span)
    return AnimationStyle(
        opacity=_linear_fade(frame, start, end, is_exit),
        transforms=(TransformOp("rotate", rotation, "deg"),),
    )


def _blur(animation, frame, fps, is_exit, start, end) -> AnimationStyle:
    span = (0, MAX_BLUR_PX) if is_exit else (MAX_BLUR_PX, 0)
    return AnimationStyle(
        opacity=_linear_fade(frame, start, end, is_exit),
        blur=max(0.0, interpolate(frame, (start, end), span)),
    )


def _typewriter(animation, frame, fps, is_exit, start, end) -> AnimationStyle:
    # handled by the text renderer via typewriter_text()
    return IDENTITY_STYLE


_RESOLVERS: dict[str, _Resolver] = {
    "fade": _fade,
    "slide": _slide,
    "scale": _spring_scale(SCALE_SPRING),
    "spring": _spring,
    "bounce": _spring_scale(BOUNCE_SPRING),
    "rotate": _rotate,
    "blur": _blur,
    "typewriter": _typewriter,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_animation_style(
    animation: Animation | None,
    frame: float,
    fps: float,
    *,
    is_exit: bool,
    scene_duration: int,
    default_duration: int = DEFAULT_ANIMATION_FRAMES,
) -> AnimationStyle:
    """Resolve one enter or exit animation at *frame* (scene-local).

    Args:
        animation: The element's enter or exit animation, or None.
        frame: Scene-local frame.
        fps: Frames per second of the composition.
        is_exit: True for the element's exit animation.
        scene_duration: Length of the owning scene, anchors exit windows.
        default_duration: Window length when the animation omits one.

    Returns:
        AnimationStyle; the identity style for no animation or an
        unrecognised type.
    """
    if animation is None:
        return IDENTITY_STYLE
    resolver = _RESOLVERS.get(animation.type)
    if resolver is None:
        return IDENTITY_STYLE
    start, end = animation_window(
        animation,
        is_exit=is_exit,
        scene_duration=scene_duration,
        default_duration=default_duration,
    )
    return resolver(animation, frame, fps, is_exit, start, end)


def merge_styles(enter_style: AnimationStyle, exit_style: AnimationStyle) -> AnimationStyle:
    """Combine enter and exit styles active in the same frame.

    Opacities multiply (an absent axis counts as 1), transforms concatenate
    enter first, blur radii add.
    """
    enter_opacity = 1.0 if enter_style.opacity is None else enter_style.opacity
    exit_opacity = 1.0 if exit_style.opacity is None else exit_style.opacity
    blurs = [b for b in (enter_style.blur, exit_style.blur) if b is not None]
    return AnimationStyle(
        opacity=_unit(enter_opacity * exit_opacity),
        transforms=enter_style.transforms + exit_style.transforms,
        blur=sum(blurs) if blurs else None,
    )


def typewriter_count(
    text: str,
    animation: Animation | None,
    frame: float,
    *,
    default_duration: int = DEFAULT_ANIMATION_FRAMES,
) -> int:
    """Number of leading characters of *text* visible at *frame*."""
    if animation is None or animation.type != "typewriter":
        return len(text)
    start = animation.delay
    end = start + (animation.duration_in_frames or default_duration)
    progress = interpolate(frame, (start, end), (0, 1))
    return math.floor(progress * len(text))


def typewriter_text(
    text: str,
    animation: Animation | None,
    frame: float,
    *,
    default_duration: int = DEFAULT_ANIMATION_FRAMES,
) -> str:
    """Prefix of *text* shown by a typewriter enter animation at *frame*."""
    return text[: typewriter_count(text, animation, frame, default_duration=default_duration)]
