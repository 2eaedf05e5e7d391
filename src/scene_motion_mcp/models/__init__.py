"""Data models for compositions and rendered visual state."""

from .composition import (
    Animation,
    Background,
    Composition,
    CompositionMeta,
    Element,
    GradientBackground,
    ImageElement,
    Scene,
    ShapeElement,
    SolidBackground,
    SpringConfig,
    TextElement,
    Transition,
)
from .style import (
    AnimationStyle,
    RenderedElement,
    RenderedFrame,
    RenderedImage,
    RenderedScene,
    RenderedShape,
    RenderedText,
    TransformOp,
    TransitionStyle,
    VisualStyle,
)

__all__ = [
    "Animation",
    "AnimationStyle",
    "Background",
    "Composition",
    "CompositionMeta",
    "Element",
    "GradientBackground",
    "ImageElement",
    "RenderedElement",
    "RenderedFrame",
    "RenderedImage",
    "RenderedScene",
    "RenderedShape",
    "RenderedText",
    "Scene",
    "ShapeElement",
    "SolidBackground",
    "SpringConfig",
    "TextElement",
    "TransformOp",
    "Transition",
    "TransitionStyle",
    "VisualStyle",
]
