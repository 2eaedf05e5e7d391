"""Renderers: element → scene → frame."""

from .elements import element_css, element_style, render_element
from .frame import render_frame
from .scene import background_paint, render_scene
from .transitions import transition_presentation

__all__ = [
    "background_paint",
    "element_css",
    "element_style",
    "render_element",
    "render_frame",
    "render_scene",
    "transition_presentation",
]
