"""Tests for the composition data model and visual-state models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from scene_motion_mcp.models import (
    Animation,
    Composition,
    Element,
    GradientBackground,
    Scene,
    SpringConfig,
    TransformOp,
    VisualStyle,
)
from scene_motion_mcp.models.composition import ImageElement, ShapeElement, TextElement
from scene_motion_mcp.models.style import AnimationStyle, css_number
from tests.conftest import make_scene, make_text

element_adapter = TypeAdapter(Element)


class TestWireNames:
    def test_camel_and_snake_accepted(self):
        a = Animation.model_validate({"type": "fade", "durationInFrames": 10})
        b = Animation.model_validate({"type": "fade", "duration_in_frames": 10})
        assert a == b

    def test_dump_by_alias(self):
        scene = Scene.model_validate(make_scene("a", 30, transition=5))
        dumped = scene.model_dump(by_alias=True, exclude_none=True)
        assert dumped["durationInFrames"] == 30
        assert dumped["transition"] == {"type": "fade", "durationInFrames": 5}


class TestElements:
    def test_discriminated_by_type(self):
        assert isinstance(element_adapter.validate_python(make_text()), TextElement)
        shape = element_adapter.validate_python({"id": "s", "type": "shape", "x": 1, "y": 1})
        assert isinstance(shape, ShapeElement)
        image = element_adapter.validate_python({"id": "i", "type": "image", "src": "a.png", "x": 1, "y": 1})
        assert isinstance(image, ImageElement)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            element_adapter.validate_python({"id": "v", "type": "video", "x": 1, "y": 1})

    @pytest.mark.parametrize("field,value", [("x", 101), ("y", -1), ("opacity", 1.5)])
    def test_range_constraints(self, field, value):
        with pytest.raises(ValidationError):
            element_adapter.validate_python(make_text(**{field: value}))

    def test_text_defaults(self):
        element = TextElement.model_validate(make_text())
        assert element.font_size == 48
        assert element.font_weight == 400
        assert element.font_family == "sans-serif"
        assert element.text_align == "center"
        assert element.line_height == 1.2
        assert element.color == "#ffffff"

    def test_shape_and_image_defaults(self):
        shape = ShapeElement.model_validate({"id": "s", "type": "shape", "x": 1, "y": 1})
        assert (shape.shape, shape.fill, shape.stroke) == ("rectangle", "#ffffff", None)
        image = ImageElement.model_validate({"id": "i", "type": "image", "src": "a.png", "x": 1, "y": 1})
        assert image.object_fit == "cover"


class TestAnimationModels:
    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            Animation.model_validate({"type": "fade", "delay": -1})

    def test_spring_config_defaults_fill_missing_keys(self):
        config = SpringConfig.model_validate({"damping": 5})
        assert (config.damping, config.stiffness, config.mass) == (5, 100, 1)

    def test_spring_config_must_be_positive(self):
        with pytest.raises(ValidationError):
            SpringConfig(mass=0)


class TestSceneAndComposition:
    def test_gradient_needs_two_colours(self):
        with pytest.raises(ValidationError):
            GradientBackground.model_validate({"type": "gradient", "colors": ["#fff"]})

    def test_zero_duration_rejected(self):
        with pytest.raises(ValidationError):
            Scene.model_validate(make_scene("a", 0))

    def test_lookups(self, sample_composition):
        composition = Composition.model_validate(sample_composition)
        assert composition.scene("middle").duration_in_frames == 90
        assert composition.scene("nope") is None
        assert composition.scenes[0].element("bar").type == "shape"
        assert composition.scenes[0].element("nope") is None

    def test_meta_defaults(self):
        composition = Composition.model_validate({"scenes": []})
        assert composition.meta.title == "Untitled"
        assert (composition.meta.width, composition.meta.height, composition.meta.fps) == (1920, 1080, 30)


class TestStyleModels:
    @pytest.mark.parametrize(("value", "text"), [(100.0, "100"), (-0.0, "0"), (0.333333, "0.3333"), (1e-7, "0")])
    def test_css_number(self, value, text):
        assert css_number(value) == text

    def test_transform_op_css(self):
        assert TransformOp("translateX", -100, "%").css() == "translateX(-100%)"
        assert TransformOp("scale", 0.5).css() == "scale(0.5)"

    def test_animation_style_transform(self):
        assert AnimationStyle().transform is None
        style = AnimationStyle(transforms=(TransformOp("scale", 1), TransformOp("rotate", 90, "deg")))
        assert style.transform == "scale(1) rotate(90deg)"

    def test_visual_style_opacity_bounds(self):
        with pytest.raises(ValidationError):
            VisualStyle(left=0, top=0, opacity=1.2, transform="none")
