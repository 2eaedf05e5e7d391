"""Composition data model: the vocabulary every engine module operates on.

Wire names are camelCase (``durationInFrames``, ``enterAnimation``...) as
produced by scene-authoring clients; Python attributes are snake_case.
Both spellings are accepted on input. Serialise with
``model_dump(by_alias=True, exclude_none=True)``.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..config import get_config
from ..types import (
    AnimationType,
    Frames,
    ObjectFit,
    Percent,
    ShapeKind,
    SlideDirection,
    TextAlign,
    TransitionDirection,
    TransitionType,
    Unit,
)


class WireModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Meta ─────────────────────────────────────────────────────────────────────


class CompositionMeta(WireModel):
    """Canvas and clock for a composition."""

    title: str = "Untitled"
    width: int = Field(default_factory=lambda: get_config().default_width, ge=1)
    height: int = Field(default_factory=lambda: get_config().default_height, ge=1)
    fps: int = Field(default_factory=lambda: get_config().default_fps, ge=1)


# ── Background ───────────────────────────────────────────────────────────────


class SolidBackground(WireModel):
    type: Literal["solid"] = "solid"
    color: str | None = None


class GradientBackground(WireModel):
    """Linear gradient across an ordered colour list."""

    type: Literal["gradient"]
    colors: list[str] = Field(min_length=2)
    direction: float | None = Field(default=None, description="Angle in degrees")


Background = Annotated[Union[SolidBackground, GradientBackground], Field(discriminator="type")]


# ── Animation / transition ───────────────────────────────────────────────────


class SpringConfig(WireModel):
    """Damped-oscillator parameters; unspecified keys take the physical defaults."""

    damping: float = Field(default=10, gt=0)
    stiffness: float = Field(default=100, gt=0)
    mass: float = Field(default=1, gt=0)


class Animation(WireModel):
    """Enter or exit effect of an element.

    ``duration_in_frames`` left unset resolves to the configured default
    window (20 frames out of the box).
    """

    type: AnimationType
    delay: int = Field(default=0, ge=0)
    duration_in_frames: int | None = Field(default=None, ge=1)
    direction: SlideDirection | None = None
    spring_config: SpringConfig | None = None


class Transition(WireModel):
    """Hand-off from a scene to the next one; overlaps both scenes."""

    type: TransitionType
    duration_in_frames: Frames
    direction: TransitionDirection | None = None


# ── Elements ─────────────────────────────────────────────────────────────────


class ElementBase(WireModel):
    """Positioning shared by every element kind; centred on (x, y)."""

    id: str = Field(min_length=1)
    x: Percent
    y: Percent
    width: Percent | None = None
    height: Percent | None = None
    rotation: float | None = None
    opacity: Unit | None = None
    enter_animation: Animation | None = None
    exit_animation: Animation | None = None


class TextElement(ElementBase):
    type: Literal["text"]
    text: str
    font_size: float = Field(default=48, gt=0)
    font_weight: int | str = 400
    color: str = "#ffffff"
    font_family: str = "sans-serif"
    text_align: TextAlign = "center"
    line_height: float = Field(default=1.2, gt=0)
    letter_spacing: float | None = None
    background_color: str | None = None
    padding: float | str | None = None
    border_radius: float | str | None = None
    max_width: Percent | None = None


class ShapeElement(ElementBase):
    type: Literal["shape"]
    shape: ShapeKind = "rectangle"
    fill: str = "#ffffff"
    stroke: str | None = None
    stroke_width: float | None = Field(default=None, gt=0)
    border_radius: float | str | None = None
    shadow: str | None = None


class ImageElement(ElementBase):
    type: Literal["image"]
    src: str = Field(min_length=1)
    object_fit: ObjectFit = "cover"
    border_radius: float | str | None = None


Element = Annotated[Union[TextElement, ShapeElement, ImageElement], Field(discriminator="type")]


# ── Scene / composition ──────────────────────────────────────────────────────


class Scene(WireModel):
    """One shot of the composition.

    ``transition`` describes the hand-off to the *next* scene and is ignored
    on the last scene.
    """

    id: str = Field(min_length=1)
    duration_in_frames: Frames
    background: Background
    elements: list[Element] = Field(default_factory=list)
    transition: Transition | None = None

    def element(self, element_id: str) -> TextElement | ShapeElement | ImageElement | None:
        """Return the element with *element_id*, or None."""
        for element in self.elements:
            if element.id == element_id:
                return element
        return None


class Composition(WireModel):
    """A full video description: canvas meta plus ordered scenes."""

    meta: CompositionMeta = Field(default_factory=CompositionMeta)
    scenes: list[Scene] = Field(default_factory=list)

    def scene(self, scene_id: str) -> Scene | None:
        """Return the scene with *scene_id*, or None."""
        for scene in self.scenes:
            if scene.id == scene_id:
                return scene
        return None
