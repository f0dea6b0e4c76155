import numpy as np
import pytest

from palette_opt.colour_convert import (
    colour_distance,
    contrast_ratio,
    make_colour,
    oklab_distance,
    relative_luminance,
    rgb_to_hsl,
    rgb_to_lab,
    rgb_to_oklab,
)
from palette_opt.colour_names import name_of_hex, parse_colour
from palette_opt.core_types import Colour, ensure_palette, hex_to_rgb, rgb_to_hex

BLACK = make_colour((0, 0, 0))
WHITE = make_colour((255, 255, 255))


def test_contrast_black_white_is_21():
    assert contrast_ratio(BLACK, WHITE) == pytest.approx(21.0, rel=1e-3)
    assert contrast_ratio(WHITE, BLACK) == pytest.approx(21.0, rel=1e-3)


def test_contrast_of_identical_colours_is_1():
    grey = make_colour((128, 128, 128))
    assert contrast_ratio(grey, grey) == pytest.approx(1.0)


def test_delta_e_identical_is_zero_and_symmetric():
    red = make_colour((255, 0, 0))
    blue = make_colour((0, 0, 255))
    assert colour_distance(red, red) == pytest.approx(0.0, abs=1e-6)
    assert colour_distance(red, blue) == pytest.approx(colour_distance(blue, red))
    assert colour_distance(red, blue) > 10.0
    assert oklab_distance(red, red) == pytest.approx(0.0, abs=1e-9)


def test_make_colour_clamps_and_rounds():
    c = make_colour((300, -20, 127.6))
    assert c.rgb == (255, 0, 128)


def test_make_colour_rejects_bad_input():
    with pytest.raises(ValueError):
        make_colour((1, 2))
    with pytest.raises(ValueError):
        make_colour((float("nan"), 0, 0))


def test_equality_uses_rgb_and_alpha_only():
    assert make_colour((10, 20, 30)) == make_colour((10, 20, 30))
    assert make_colour((10, 20, 30)) != make_colour((10, 20, 30), alpha=0.5)
    assert len({make_colour((1, 2, 3)), make_colour((1, 2, 3))}) == 1


def test_derived_fields_are_populated():
    assert WHITE.luminance == pytest.approx(1.0, abs=1e-4)
    assert BLACK.luminance == pytest.approx(0.0, abs=1e-6)
    assert WHITE.lab[0] == pytest.approx(100.0, abs=0.1)
    assert WHITE.is_finite()


def test_hex_round_trip_and_short_form():
    assert hex_to_rgb("#FFF") == (255, 255, 255)
    assert hex_to_rgb("#0a0B0c") == (10, 11, 12)
    assert rgb_to_hex((10, 11, 12)) == "#0a0b0c"
    with pytest.raises(ValueError):
        hex_to_rgb("123456")
    with pytest.raises(ValueError):
        hex_to_rgb("#12345")


@pytest.mark.parametrize(
    "text, rgb",
    [
        ("#fff", (255, 255, 255)),
        ("#336699", (51, 102, 153)),
        ("rgb(1, 2, 3)", (1, 2, 3)),
        ("RebeccaPurple", (102, 51, 153)),
        ("  navy ", (0, 0, 128)),
    ],
)
def test_parse_colour_accepts_common_forms(text, rgb):
    assert parse_colour(text).rgb == rgb


def test_parse_colour_keeps_rgba_alpha():
    assert parse_colour("rgba(10, 20, 30, 0.25)").alpha == pytest.approx(0.25)


@pytest.mark.parametrize("text", ["", "notacolour", "#ggg", "rgb(1, 2, 300)"])
def test_parse_colour_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_colour(text)


def test_name_of_hex():
    assert name_of_hex("#FF0000") == "red"
    assert name_of_hex("#123457") is None


def test_ensure_palette_validates_length_and_type(palette):
    assert ensure_palette(list(palette)) == palette
    with pytest.raises(ValueError):
        ensure_palette(palette[:4])
    with pytest.raises(ValueError):
        ensure_palette(palette + (WHITE,))
    with pytest.raises(ValueError):
        ensure_palette(palette[:4] + ("#ffffff",))
    assert isinstance(ensure_palette(palette)[0], Colour)


def test_integer_input_is_always_0_to_255():
    near_black = np.array([1, 1, 1], dtype=np.uint8)
    assert rgb_to_lab(near_black)[0] == pytest.approx(make_colour((1, 1, 1)).lab[0], abs=1e-3)
    assert rgb_to_lab(near_black)[0] < 1.0
    assert float(relative_luminance(near_black)) < 0.001
    assert rgb_to_oklab(np.array([1, 0, 1]))[0] < 0.1
    assert rgb_to_hsl(np.array([1, 1, 1], dtype=np.int64))[2] < 1.0


def test_float_input_is_unit_range():
    assert rgb_to_lab(np.array([1.0, 1.0, 1.0]))[0] == pytest.approx(100.0, abs=0.01)
