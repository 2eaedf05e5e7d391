"""Deterministic motion-graphics scene engine with an MCP interface."""

from .animation import merge_styles, resolve_animation_style, typewriter_text
from .editing import add_element, remove_element, to_json, update_element, update_scene
from .errors import CompositionError
from .models import Composition, Scene
from .render import render_element, render_frame, render_scene
from .spring import spring_progress
from .streaming import SceneStream, coerce_scenes, extract_scenes, parse_final_scenes
from .timeline import locate_frame, scene_offsets, total_frames
from .validation import ValidationResult, load_composition, validate_composition

__version__ = "0.3.0"

__all__ = [
    "Composition",
    "CompositionError",
    "Scene",
    "SceneStream",
    "ValidationResult",
    "add_element",
    "coerce_scenes",
    "extract_scenes",
    "load_composition",
    "locate_frame",
    "merge_styles",
    "parse_final_scenes",
    "remove_element",
    "render_element",
    "render_frame",
    "render_scene",
    "resolve_animation_style",
    "scene_offsets",
    "spring_progress",
    "to_json",
    "total_frames",
    "typewriter_text",
    "update_element",
    "update_scene",
]
