"""Tests for the PageCanvas base behaviour (style state and scoped transforms)."""

import pytest

from rendering.canvas import (
    PAGE_HEIGHT,
    PAGE_WIDTH,
    Alignment,
    Color,
    Font,
    stroke_nested,
)
from rendering.geometry import Point, rotation_about
from tests.fakes import RecordingCanvas

pytestmark = pytest.mark.unit

RED = Color("ff0000")
BLUE = Color("0000ff")


class TestColor:
    def test_normalises_hash_and_case(self):
        assert Color.from_hex("#563D7C").hex == "563d7c"

    def test_rgb_components(self):
        assert Color("ff8000").rgb == pytest.approx((1.0, 128 / 255, 0.0))

    @pytest.mark.parametrize("value", ["", "fff", "zzzzzz", "#1234567"])
    def test_rejects_invalid_hex(self, value):
        with pytest.raises(ValueError, match="Invalid hex color"):
            Color(value)

    def test_equal_after_normalisation(self):
        assert Color("#ABCDEF") == Color("abcdef")


class TestPageBounds:
    def test_a4_landscape_in_points(self):
        canvas = RecordingCanvas()

        assert canvas.width == pytest.approx(841.89, abs=0.01)
        assert canvas.height == pytest.approx(595.28, abs=0.01)
        assert (PAGE_WIDTH, PAGE_HEIGHT) == (canvas.width, canvas.height)


class TestStyleState:
    def test_setters_update_current_style(self, recording_canvas):
        recording_canvas.set_fill_color(RED)
        recording_canvas.set_stroke_color(BLUE)
        recording_canvas.set_line_width(3.5)

        assert recording_canvas.fill_color == RED
        assert recording_canvas.stroke_color == BLUE
        assert recording_canvas.line_width == 3.5

    def test_setters_reach_the_backend(self, recording_canvas):
        recording_canvas.set_fill_color(RED)
        recording_canvas.set_line_width(2)

        assert [c.name for c in recording_canvas.calls] == [
            "set_fill_color",
            "set_line_width",
        ]

    def test_draw_text_sets_font_only_when_it_changes(self, recording_canvas):
        recording_canvas.draw_text("a", Font.SERIF, 14, Point(0, 0))
        recording_canvas.draw_text("b", Font.SERIF, 14, Point(0, 10))
        recording_canvas.draw_text("c", Font.SANS_BOLD, 9, Point(0, 20))

        assert [c.args for c in recording_canvas.named("set_font")] == [
            (Font.SERIF, 14),
            (Font.SANS_BOLD, 9),
        ]
        assert recording_canvas.texts() == ["a", "b", "c"]
        assert recording_canvas.font == Font.SANS_BOLD

    def test_draw_text_passes_alignment(self, recording_canvas):
        recording_canvas.draw_text(
            "centered", Font.SANS, 12, Point(50, 50), Alignment.CENTER
        )

        call = recording_canvas.named("draw_text")[0]
        assert call.args == ("centered", Point(50, 50), Alignment.CENTER)


class TestScopedTransform:
    def test_pushes_rotation_about_pivot(self, recording_canvas):
        pivot = Point(100, 100)
        with recording_canvas.scoped_transform(-12, pivot):
            recording_canvas.fill_circle(pivot, 5)

        names = [c.name for c in recording_canvas.calls]
        assert names == ["push_transform", "fill_circle", "pop_transform"]
        pushed = recording_canvas.named("push_transform")[0].args[0]
        assert pushed == pytest.approx(rotation_about(-12, pivot))

    def test_restores_style_after_block(self, recording_canvas):
        recording_canvas.set_fill_color(RED)
        recording_canvas.set_line_width(2)

        with recording_canvas.scoped_transform(45, Point(0, 0)):
            recording_canvas.set_fill_color(BLUE)
            recording_canvas.set_line_width(9)
            assert recording_canvas.depth == 1

        assert recording_canvas.fill_color == RED
        assert recording_canvas.line_width == 2
        assert recording_canvas.depth == 0

    def test_restores_style_when_block_raises(self, recording_canvas):
        recording_canvas.set_fill_color(RED)
        recording_canvas.set_stroke_color(BLUE)
        recording_canvas.set_line_width(1.5)

        with pytest.raises(RuntimeError, match="boom"):
            with recording_canvas.scoped_transform(30, Point(10, 10)):
                recording_canvas.set_fill_color(BLUE)
                recording_canvas.set_stroke_color(RED)
                recording_canvas.set_line_width(8)
                raise RuntimeError("boom")

        assert recording_canvas.fill_color == RED
        assert recording_canvas.stroke_color == BLUE
        assert recording_canvas.line_width == 1.5
        assert recording_canvas.depth == 0
        assert recording_canvas.calls[-1].name == "pop_transform"

    def test_nested_scopes_unwind_in_order(self, recording_canvas):
        with recording_canvas.scoped_transform(10, Point(0, 0)):
            recording_canvas.set_line_width(4)
            with recording_canvas.scoped_transform(20, Point(0, 0)):
                recording_canvas.set_line_width(6)
                assert recording_canvas.depth == 2
            assert recording_canvas.line_width == 4

        assert recording_canvas.line_width == 1.0
        pushes = recording_canvas.named("push_transform")
        pops = recording_canvas.named("pop_transform")
        assert len(pushes) == len(pops) == 2

    def test_failed_push_leaves_no_open_scope(self):
        canvas = RecordingCanvas(fail_on="push_transform")

        with pytest.raises(MemoryError):
            with canvas.scoped_transform(15, Point(0, 0)):
                pass

        assert canvas.depth == 0
        assert canvas.named("pop_transform") == []


class TestStrokeNested:
    def test_sets_width_before_each_shape(self, recording_canvas):
        offsets: list[float] = []

        def shape(offset: float) -> None:
            offsets.append(offset)
            recording_canvas.stroke_circle(Point(0, 0), offset)

        stroke_nested(recording_canvas, [(50, 2.0), (44, 0.5)], shape)

        assert offsets == [50, 44]
        assert [c.name for c in recording_canvas.calls] == [
            "set_line_width",
            "stroke_circle",
            "set_line_width",
            "stroke_circle",
        ]
        assert recording_canvas.line_width == 0.5


class TestTextFitting:
    def test_text_width_uses_font_metrics(self, recording_canvas):
        narrow = recording_canvas.text_width("iiii", Font.SANS, 12)
        wide = recording_canvas.text_width("MMMM", Font.SANS, 12)

        assert 0 < narrow < wide
        assert recording_canvas.text_width("MMMM", Font.SANS, 24) == pytest.approx(
            2 * wide
        )

    def test_fitting_text_keeps_its_size(self, recording_canvas):
        assert recording_canvas.fitted_font_size("Short", Font.SERIF, 16, 500) == 16

    def test_wide_text_is_scaled_down_to_fit(self, recording_canvas):
        text = "W" * 120

        size = recording_canvas.fitted_font_size(text, Font.SERIF_BOLD, 24, 600)

        assert size < 24
        assert recording_canvas.text_width(
            text, Font.SERIF_BOLD, size
        ) == pytest.approx(600)

    def test_draw_text_with_max_width_sets_shrunk_font(self, recording_canvas):
        text = "x" * 300

        recording_canvas.draw_text(
            text, Font.SANS, 12, Point(0, 0), Alignment.CENTER, max_width=400
        )

        (set_font,) = recording_canvas.named("set_font")
        font, size = set_font.args
        assert size < 12
        assert recording_canvas.text_width(text, font, size) <= 400 + 1e-6
