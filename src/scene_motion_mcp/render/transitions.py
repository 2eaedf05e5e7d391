"""Scene-to-scene transition presentation.

During an overlap both scenes are drawn; the exiting scene below, the
entering scene on top. ``progress`` runs linearly 0 → 1 across the overlap
and each transition type maps it to a whole-layer style.
"""

from __future__ import annotations

import math

from ..models.composition import Transition
from ..models.style import TransitionStyle, css_number

DEFAULT_DIRECTION = "from-left"
CLOCK_RADIUS = 75  # percent; reaches past the corners from the centre
CLOCK_STEP_DEGREES = 10


def _slide(direction: str, progress: float, entering: bool) -> TransitionStyle:
    axis = "translateX" if direction in ("from-left", "from-right") else "translateY"
    sign = -1 if direction in ("from-left", "from-top") else 1
    if entering:
        offset = sign * 100 * (1 - progress)
    else:
        offset = -sign * 100 * progress
    return TransitionStyle(transform=f"{axis}({css_number(offset)}%)")


def _wipe(direction: str, progress: float) -> TransitionStyle:
    hidden = css_number(100 * (1 - progress))
    insets = {
        "from-left": f"inset(0 {hidden}% 0 0)",
        "from-right": f"inset(0 0 0 {hidden}%)",
        "from-top": f"inset(0 0 {hidden}% 0)",
        "from-bottom": f"inset({hidden}% 0 0 0)",
    }
    return TransitionStyle(clip_path=insets[direction])


def _flip(progress: float, entering: bool) -> TransitionStyle:
    # exiting turns away during the first half, entering turns in during the second
    if entering:
        if progress < 0.5:
            return TransitionStyle(opacity=0.0, transform="rotateY(-90deg)")
        return TransitionStyle(transform=f"rotateY({css_number((progress - 1) * 180)}deg)")
    if progress < 0.5:
        return TransitionStyle(transform=f"rotateY({css_number(progress * 180)}deg)")
    return TransitionStyle(opacity=0.0, transform="rotateY(90deg)")


def clock_sweep_polygon(progress: float) -> str:
    """CSS polygon covering a clockwise sweep from 12 o'clock."""
    sweep = 360 * min(1.0, max(0.0, progress))
    angles = [a for a in range(0, int(sweep), CLOCK_STEP_DEGREES)] + [sweep]
    points = ["50% 50%"]
    for angle in angles:
        rad = math.radians(angle)
        x = 50 + CLOCK_RADIUS * math.sin(rad)
        y = 50 - CLOCK_RADIUS * math.cos(rad)
        points.append(f"{css_number(x)}% {css_number(y)}%")
    return f"polygon({', '.join(points)})"


def transition_presentation(
    transition: Transition | None,
    progress: float,
    *,
    entering: bool,
) -> TransitionStyle | None:
    """Whole-layer style for a scene taking part in *transition*.

    Returns None when there is no transition, which callers draw as a
    plain layer.
    """
    if transition is None:
        return None
    progress = min(1.0, max(0.0, progress))
    direction = transition.direction or DEFAULT_DIRECTION

    if transition.type == "fade":
        return TransitionStyle(opacity=progress) if entering else TransitionStyle()
    if transition.type == "slide":
        return _slide(direction, progress, entering)
    if transition.type == "wipe":
        return _wipe(direction, progress) if entering else TransitionStyle()
    if transition.type == "flip":
        return _flip(progress, entering)
    if transition.type == "clockWipe":
        if entering:
            return TransitionStyle(clip_path=clock_sweep_polygon(progress))
        return TransitionStyle()
    return None
