"""Element renderer: placement + animation state + kind-specific styling.

One shared step computes the element's ``VisualStyle`` (anchor, size,
merged enter/exit animation, element rotation and opacity); a per-kind
step adds typography, shape or image properties. Unknown kinds render as
``None``.
"""

from __future__ import annotations

from typing import Any

from ..animation import (
    DEFAULT_ANIMATION_FRAMES,
    merge_styles,
    resolve_animation_style,
    typewriter_text,
)
from ..models.composition import ImageElement, ShapeElement, TextElement
from ..models.style import (
    RenderedElement,
    RenderedImage,
    RenderedShape,
    RenderedText,
    VisualStyle,
    css_number,
)

ANCHOR_TRANSFORM = "translate(-50%, -50%)"
DEFAULT_STROKE_WIDTH = 2


def _px(value: float | str | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return f"{css_number(value)}px"


def _compact(css: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in css.items() if value is not None}


def element_style(
    element: TextElement | ShapeElement | ImageElement,
    frame: float,
    fps: float,
    scene_duration: int,
    *,
    default_duration: int = DEFAULT_ANIMATION_FRAMES,
) -> VisualStyle:
    """Compute the placement and animation state shared by all element kinds.

    The transform is always ``translate(-50%, -50%)`` (centre on x/y), then
    the enter transform, the exit transform and finally the element's own
    rotation; CSS applies them in that order.
    """
    enter_style = resolve_animation_style(
        element.enter_animation,
        frame,
        fps,
        is_exit=False,
        scene_duration=scene_duration,
        default_duration=default_duration,
    )
    exit_style = resolve_animation_style(
        element.exit_animation,
        frame,
        fps,
        is_exit=True,
        scene_duration=scene_duration,
        default_duration=default_duration,
    )
    merged = merge_styles(enter_style, exit_style)

    parts = [ANCHOR_TRANSFORM]
    if merged.transform:
        parts.append(merged.transform)
    if element.rotation:
        parts.append(f"rotate({css_number(element.rotation)}deg)")

    base_opacity = 1.0 if element.opacity is None else element.opacity
    return VisualStyle(
        left=element.x,
        top=element.y,
        width=element.width,
        height=element.height,
        opacity=min(1.0, max(0.0, base_opacity * merged.opacity)),
        transform=" ".join(parts),
        blur=merged.blur,
    )


def _render_text(element: TextElement, style: VisualStyle, frame: float, default_duration: int) -> RenderedText:
    css = {
        "fontSize": element.font_size,
        "fontFamily": element.font_family,
        "fontWeight": element.font_weight,
        "color": element.color,
        "textAlign": element.text_align,
        "lineHeight": element.line_height,
        "letterSpacing": _px(element.letter_spacing) if element.letter_spacing else None,
        "backgroundColor": element.background_color,
        "padding": element.padding,
        "borderRadius": element.border_radius,
        "maxWidth": f"{css_number(element.max_width)}%" if element.max_width else None,
        "whiteSpace": "pre-wrap",
        "wordBreak": "break-word",
    }
    return RenderedText(
        id=element.id,
        style=style,
        text=typewriter_text(
            element.text,
            element.enter_animation,
            frame,
            default_duration=default_duration,
        ),
        full_text=element.text,
        css=_compact(css),
    )


def _render_shape(element: ShapeElement, style: VisualStyle) -> RenderedShape:
    circular = element.shape in ("circle", "ellipse")
    thickness = element.stroke_width or DEFAULT_STROKE_WIDTH

    if element.shape == "line":
        # a line is a filled bar, stroke colour wins over fill
        style = style.model_copy(update={"height": None})
        css = {
            "backgroundColor": element.stroke or element.fill,
            "height": _px(thickness),
            "borderRadius": element.border_radius,
            "boxShadow": element.shadow,
        }
    else:
        css = {
            "backgroundColor": element.fill,
            "border": f"{_px(thickness)} solid {element.stroke}" if element.stroke else None,
            "borderRadius": "50%" if circular else element.border_radius,
            "boxShadow": element.shadow,
        }
    return RenderedShape(id=element.id, style=style, shape=element.shape, css=_compact(css))


def _render_image(element: ImageElement, style: VisualStyle) -> RenderedImage:
    css = {
        "objectFit": element.object_fit,
        "borderRadius": element.border_radius,
    }
    return RenderedImage(id=element.id, style=style, src=element.src, css=_compact(css))


def render_element(
    element: Any,
    frame: float,
    fps: float,
    scene_duration: int,
    *,
    default_duration: int = DEFAULT_ANIMATION_FRAMES,
) -> RenderedElement | None:
    """Render one element at a scene-local *frame*.

    Args:
        element: A text, shape or image element.
        frame: Scene-local frame.
        fps: Frames per second of the composition.
        scene_duration: Owning scene's length (anchors exit windows).
        default_duration: Animation window length when none is given.

    Returns:
        RenderedText, RenderedShape or RenderedImage; None for anything else.
    """
    if not isinstance(element, (TextElement, ShapeElement, ImageElement)):
        return None

    style = element_style(
        element,
        frame,
        fps,
        scene_duration,
        default_duration=default_duration,
    )
    if isinstance(element, TextElement):
        return _render_text(element, style, frame, default_duration)
    if isinstance(element, ShapeElement):
        return _render_shape(element, style)
    return _render_image(element, style)


def element_css(rendered: RenderedElement) -> dict[str, Any]:
    """Flatten a rendered element into one CSS mapping."""
    return {**rendered.style.to_css(), **rendered.css}
