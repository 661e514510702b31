"""Tests for color stacking order."""

import pytest

from metro_lines.layout.ordering import color_luminance, is_reversed, order_colors

OUTWARD = [(1.0, 1.0), (2.0, 2.0)]
INWARD = [(2.0, 2.0), (1.0, 1.0)]


def test_luminance_extremes():
    assert color_luminance("#000000") == 0
    assert color_luminance("#FFFFFF") == pytest.approx(1.0)


def test_green_brighter_than_red_brighter_than_blue():
    assert color_luminance("#00FF00") > color_luminance("#FF0000") > color_luminance("#0000FF")


def test_luminance_case_insensitive():
    assert color_luminance("#e4002b") == color_luminance("#E4002B")


def test_outward_segment_not_reversed():
    assert not is_reversed(OUTWARD)
    assert order_colors(["#FFFFFF", "#000000"], OUTWARD) == ["#000000", "#FFFFFF"]


def test_inward_segment_reversed():
    assert is_reversed(INWARD)
    assert order_colors(["#000000", "#FFFFFF"], INWARD) == ["#FFFFFF", "#000000"]


def test_order_independent_of_input_order():
    colors = ["#E4002B", "#0033A0", "#00A651", "#FFD100"]
    assert order_colors(colors, OUTWARD) == order_colors(list(reversed(colors)), OUTWARD)


def test_order_does_not_mutate_input():
    colors = ("#FFFFFF", "#000000")
    order_colors(colors, OUTWARD)
    assert colors == ("#FFFFFF", "#000000")
