"""Visual-state models produced by the resolver and renderers.

``AnimationStyle`` is the resolver's internal currency (numeric, frozen);
the ``Rendered*`` models are what the rendering surface consumes per
element, per frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


def css_number(value: float) -> str:
    """Format a number the way CSS authors write it (``100`` not ``100.0``)."""
    rounded = round(float(value), 4)
    if rounded == 0:
        return "0"
    return f"{rounded:g}"


@dataclass(frozen=True)
class TransformOp:
    """One CSS transform function, e.g. ``translateX(-100%)``."""

    kind: str
    value: float
    unit: str = ""

    def css(self) -> str:
        return f"{self.kind}({css_number(self.value)}{self.unit})"


@dataclass(frozen=True)
class AnimationStyle:
    """Partial visual state contributed by one enter/exit animation.

    ``None`` fields mean "this animation does not touch that axis".
    """

    opacity: float | None = None
    transforms: tuple[TransformOp, ...] = ()
    blur: float | None = None

    @property
    def transform(self) -> str | None:
        if not self.transforms:
            return None
        return " ".join(op.css() for op in self.transforms)


IDENTITY_STYLE = AnimationStyle()


class VisualStyle(BaseModel):
    """Placement plus merged animation state of one element at one frame."""

    left: float = Field(description="Anchor x as percentage of canvas width")
    top: float = Field(description="Anchor y as percentage of canvas height")
    width: float | None = None
    height: float | None = None
    opacity: float = Field(ge=0, le=1)
    transform: str
    blur: float | None = Field(default=None, ge=0)

    @property
    def filter(self) -> str | None:
        if self.blur is None:
            return None
        return f"blur({css_number(self.blur)}px)"

    def to_css(self) -> dict[str, str | float]:
        """CSS-property mapping for an absolutely positioned box."""
        css: dict[str, str | float] = {
            "position": "absolute",
            "left": f"{css_number(self.left)}%",
            "top": f"{css_number(self.top)}%",
            "transform": self.transform,
            "opacity": self.opacity,
        }
        if self.width is not None:
            css["width"] = f"{css_number(self.width)}%"
        if self.height is not None:
            css["height"] = f"{css_number(self.height)}%"
        if self.filter:
            css["filter"] = self.filter
        return css


class RenderedText(BaseModel):
    kind: Literal["text"] = "text"
    id: str
    style: VisualStyle
    text: str = Field(description="Text to display at this frame (typewriter-sliced)")
    full_text: str
    css: dict[str, Any] = Field(default_factory=dict)


class RenderedShape(BaseModel):
    kind: Literal["shape"] = "shape"
    id: str
    style: VisualStyle
    shape: str
    css: dict[str, Any] = Field(default_factory=dict)


class RenderedImage(BaseModel):
    kind: Literal["image"] = "image"
    id: str
    style: VisualStyle
    src: str
    css: dict[str, Any] = Field(default_factory=dict)


RenderedElement = Annotated[Union[RenderedText, RenderedShape, RenderedImage], Field(discriminator="kind")]


class TransitionStyle(BaseModel):
    """How a whole scene layer is presented while a transition runs."""

    opacity: float = Field(default=1.0, ge=0, le=1)
    transform: str | None = None
    clip_path: str | None = None


class RenderedScene(BaseModel):
    id: str
    local_frame: int
    background: dict[str, str]
    elements: list[RenderedElement] = Field(default_factory=list)
    presentation: TransitionStyle | None = None


class RenderedFrame(BaseModel):
    """Every scene layer visible at one global frame, bottom to top."""

    frame: int
    total_frames: int
    layers: list[RenderedScene] = Field(default_factory=list)
