"""Tests for the animation style resolver."""

from __future__ import annotations

import pytest

from scene_motion_mcp.animation import (
    animation_window,
    interpolate,
    merge_styles,
    resolve_animation_style,
    typewriter_count,
    typewriter_text,
)
from scene_motion_mcp.models import Animation, AnimationStyle, TransformOp


def anim(**kwargs) -> Animation:
    return Animation.model_validate(kwargs)


def resolve(animation, frame, *, is_exit=False, scene_duration=100, fps=30):
    return resolve_animation_style(
        animation,
        frame,
        fps,
        is_exit=is_exit,
        scene_duration=scene_duration,
    )


def transform_value(style: AnimationStyle, kind: str) -> float:
    for op in style.transforms:
        if op.kind == kind:
            return op.value
    raise AssertionError(f"no {kind} transform in {style}")


ALL_TYPES = ["fade", "slide", "scale", "spring", "bounce", "rotate", "blur", "typewriter"]


class TestInterpolate:
    def test_maps_linearly(self):
        assert interpolate(5, (0, 10), (0, 100)) == 50

    def test_clamps_by_default(self):
        assert interpolate(-5, (0, 10), (0, 1)) == 0
        assert interpolate(50, (0, 10), (0, 1)) == 1

    def test_extends_without_clamp(self):
        assert interpolate(20, (0, 10), (0, 1), clamp=False) == 2

    def test_reversed_output(self):
        assert interpolate(2.5, (0, 10), (1, 0)) == 0.75

    def test_zero_width_input_is_a_step(self):
        assert interpolate(4, (5, 5), (0, 1)) == 0
        assert interpolate(5, (5, 5), (0, 1)) == 1


class TestAnimationWindow:
    def test_enter_window_starts_at_delay(self):
        assert animation_window(anim(type="fade", delay=5, durationInFrames=20), is_exit=False, scene_duration=90) == (5, 25)

    def test_exit_window_ends_delay_before_scene_end(self):
        window = animation_window(anim(type="fade", delay=5, durationInFrames=20), is_exit=True, scene_duration=90)
        assert window == (65, 85)

    def test_default_duration(self):
        assert animation_window(anim(type="fade"), is_exit=False, scene_duration=90) == (0, 20)
        assert animation_window(anim(type="fade"), is_exit=False, scene_duration=90, default_duration=8) == (0, 8)


class TestFade:
    def test_enter_fade_with_delay(self):
        """Opacity 0 at frames 0 and 5, 1 at frames 25 and 100."""
        fade = anim(type="fade", delay=5, durationInFrames=20)
        assert resolve(fade, 0).opacity == 0
        assert resolve(fade, 5).opacity == 0
        assert resolve(fade, 15).opacity == pytest.approx(0.5)
        assert resolve(fade, 25).opacity == 1
        assert resolve(fade, 100).opacity == 1

    def test_exit_fade_reaches_zero_at_scene_end(self):
        fade = anim(type="fade")
        assert resolve(fade, 20, is_exit=True, scene_duration=40).opacity == 1
        assert resolve(fade, 40, is_exit=True, scene_duration=40).opacity == 0

    def test_fade_touches_only_opacity(self):
        style = resolve(anim(type="fade"), 10)
        assert style.transforms == ()
        assert style.blur is None


class TestSlide:
    def test_enter_from_left_by_default(self):
        slide = anim(type="slide", durationInFrames=20)
        assert transform_value(resolve(slide, 0), "translateX") == 100
        assert transform_value(resolve(slide, 20), "translateX") == 0

    def test_exit_right_in_fifty_frame_scene(self):
        slide = anim(type="slide", direction="right", durationInFrames=10)
        assert transform_value(resolve(slide, 39, is_exit=True, scene_duration=50), "translateX") == 0
        assert transform_value(resolve(slide, 50, is_exit=True, scene_duration=50), "translateX") == 100

    @pytest.mark.parametrize(
        ("direction", "axis", "start"),
        [("left", "translateX", 100), ("right", "translateX", -100), ("up", "translateY", 100), ("down", "translateY", -100)],
    )
    def test_enter_directions(self, direction, axis, start):
        style = resolve(anim(type="slide", direction=direction), 0)
        assert transform_value(style, axis) == start

    def test_opacity_settles_within_ten_frames(self):
        slide = anim(type="slide", durationInFrames=30)
        assert resolve(slide, 10).opacity == 1
        assert transform_value(resolve(slide, 10), "translateX") > 0

    def test_short_slide_fades_over_its_own_window(self):
        slide = anim(type="slide", durationInFrames=4)
        assert resolve(slide, 2).opacity == pytest.approx(0.5)


class TestSpringDriven:
    def test_scale_enter_grows_to_one(self):
        scale = anim(type="scale")
        assert transform_value(resolve(scale, 0), "scale") == 0
        assert transform_value(resolve(scale, 200), "scale") == pytest.approx(1, abs=1e-6)

    def test_spring_enter_rises_and_fades_in(self):
        spring = anim(type="spring")
        start = resolve(spring, 0)
        assert start.opacity == 0
        assert transform_value(start, "translateY") == 50
        settled = resolve(spring, 300)
        assert settled.opacity == pytest.approx(1, abs=1e-6)
        assert transform_value(settled, "translateY") == pytest.approx(0, abs=1e-4)

    def test_bounce_overshoots(self):
        bounce = anim(type="bounce")
        peak = max(transform_value(resolve(bounce, f), "scale") for f in range(0, 30))
        assert peak > 1

    def test_custom_spring_config(self):
        soft = anim(type="scale", springConfig={"damping": 5})
        stiff = anim(type="scale")
        assert transform_value(resolve(soft, 6), "scale") != transform_value(resolve(stiff, 6), "scale")

    @pytest.mark.parametrize("kind", ["scale", "bounce"])
    def test_exit_mirrors_enter(self, kind):
        """Exit scale k frames into its window equals 1 - enter scale k frames in."""
        enter = anim(type=kind, delay=3, durationInFrames=20)
        exit_ = anim(type=kind, durationInFrames=20)
        exit_start = 100 - 20
        for k in range(0, 20):
            entered = transform_value(resolve(enter, 3 + k), "scale")
            exited = transform_value(resolve(exit_, exit_start + k, is_exit=True), "scale")
            assert exited == pytest.approx(1 - entered)

    def test_spring_exit_mirrors_enter(self):
        enter = anim(type="spring")
        exit_ = anim(type="spring")
        for k in range(0, 20):
            entered = transform_value(resolve(enter, k), "translateY")
            exited = transform_value(resolve(exit_, 80 + k, is_exit=True), "translateY")
            assert exited == pytest.approx(50 - entered)

    def test_exit_holds_until_window(self):
        style = resolve(anim(type="scale"), 10, is_exit=True)
        assert transform_value(style, "scale") == 1


class TestRotateAndBlur:
    def test_rotate_enter(self):
        rotate = anim(type="rotate", durationInFrames=20)
        assert transform_value(resolve(rotate, 0), "rotate") == -360
        assert transform_value(resolve(rotate, 20), "rotate") == 0
        assert resolve(rotate, 20).opacity == 1

    def test_rotate_exit_reaches_full_turn(self):
        rotate = anim(type="rotate")
        style = resolve(rotate, 100, is_exit=True, scene_duration=100)
        assert transform_value(style, "rotate") == 360
        assert style.opacity == 0

    def test_blur_enter_clears(self):
        blur = anim(type="blur")
        assert resolve(blur, 0).blur == 20
        assert resolve(blur, 20).blur == 0
        assert resolve(blur, 20).opacity == 1

    def test_blur_exit(self):
        style = resolve(anim(type="blur"), 100, is_exit=True, scene_duration=100)
        assert style.blur == 20
        assert style.opacity == 0


class TestResolverInvariants:
    @pytest.mark.parametrize("kind", ALL_TYPES)
    @pytest.mark.parametrize("is_exit", [False, True])
    def test_opacity_in_unit_range_and_blur_non_negative(self, kind, is_exit):
        animation = anim(type=kind, delay=2, durationInFrames=12)
        for frame in range(-5, 70):
            style = resolve(animation, frame, is_exit=is_exit, scene_duration=60)
            if style.opacity is not None:
                assert 0 <= style.opacity <= 1
            if style.blur is not None:
                assert style.blur >= 0

    @pytest.mark.parametrize("kind", ["fade", "slide", "rotate", "blur"])
    def test_linear_enter_holds_terminal_value(self, kind):
        animation = anim(type=kind, delay=4, durationInFrames=16)
        terminal = resolve(animation, 20)
        for frame in range(20, 100):
            assert resolve(animation, frame) == terminal

    def test_none_is_identity(self):
        assert resolve(None, 10) == AnimationStyle()

    def test_unknown_type_is_identity(self):
        bogus = Animation.model_construct(type="wobble", delay=0, duration_in_frames=None)
        assert resolve(bogus, 10) == AnimationStyle()

    def test_typewriter_resolves_to_identity(self):
        assert resolve(anim(type="typewriter"), 5) == AnimationStyle()


class TestMergeStyles:
    def test_both_fades_in_forty_frame_scene(self):
        fade = anim(type="fade")

        def opacity(frame):
            enter = resolve(fade, frame, scene_duration=40)
            exit_ = resolve(fade, frame, is_exit=True, scene_duration=40)
            return merge_styles(enter, exit_).opacity

        assert opacity(20) == 1
        assert opacity(30) == pytest.approx(0.5)
        assert opacity(40) == 0

    def test_opacities_multiply(self):
        merged = merge_styles(AnimationStyle(opacity=0.5), AnimationStyle(opacity=0.5))
        assert merged.opacity == 0.25

    def test_missing_opacity_counts_as_one(self):
        assert merge_styles(AnimationStyle(), AnimationStyle(opacity=0.4)).opacity == 0.4
        assert merge_styles(AnimationStyle(), AnimationStyle()).opacity == 1

    def test_transforms_concatenate_enter_first(self):
        merged = merge_styles(
            AnimationStyle(transforms=(TransformOp("scale", 0.5),)),
            AnimationStyle(transforms=(TransformOp("translateX", 20, "%"),)),
        )
        assert merged.transform == "scale(0.5) translateX(20%)"

    def test_blurs_add(self):
        merged = merge_styles(AnimationStyle(blur=4), AnimationStyle(blur=6))
        assert merged.blur == 10
        assert merge_styles(AnimationStyle(), AnimationStyle()).blur is None


class TestTypewriter:
    def test_reveals_progressively(self):
        tw = anim(type="typewriter", durationInFrames=10)
        text = "Hello world"
        assert typewriter_text(text, tw, 0) == ""
        assert typewriter_text(text, tw, 5) == "Hello"
        assert typewriter_text(text, tw, 10) == text

    def test_count_non_decreasing_and_complete(self):
        tw = anim(type="typewriter", delay=3, durationInFrames=17)
        text = "The quick brown fox"
        counts = [typewriter_count(text, tw, frame) for frame in range(0, 40)]
        assert all(b >= a for a, b in zip(counts, counts[1:]))
        assert typewriter_count(text, tw, 20) == len(text)

    def test_default_window_is_twenty_frames(self):
        tw = anim(type="typewriter")
        assert typewriter_count("abcd", tw, 10) == 2
        assert typewriter_count("abcd", tw, 20) == 4

    def test_other_enter_animation_shows_all_text(self):
        assert typewriter_text("Hi", anim(type="fade"), 0) == "Hi"
        assert typewriter_text("Hi", None, 0) == "Hi"
