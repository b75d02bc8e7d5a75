import pytest

from pixel_print.mode import ColorMode, channel_mask, parse_color_mode
from pixel_print.settings import PrintSettings, coerce_positive


def test_defaults():
    s = PrintSettings()
    assert s.pixels_per_frame == 10
    assert s.frame_delay == 50
    assert s.color_mode is ColorMode.FULL
    assert s.palette_count == 20
    assert s.random_order is False
    assert s.clear_between is False


@pytest.mark.parametrize(
    "raw, expected",
    [(0, 1), (-4, 1), ("abc", 1), ("", 10), (None, 10), ("25", 25), ("12px", 12), (3.9, 3)],
)
def test_pixels_per_frame_coercion(raw, expected):
    assert PrintSettings(pixels_per_frame=raw).pixels_per_frame == expected


def test_palette_count_and_delay_fall_back():
    s = PrintSettings(palette_count=-3, frame_delay=0)
    assert s.palette_count == 20
    assert s.frame_delay == 50


def test_assignment_is_coerced(capsys):
    s = PrintSettings()
    s.pixels_per_frame = "7"
    assert s.pixels_per_frame == 7
    s.palette_count = "nope"
    assert s.palette_count == 20
    assert "[warn] invalid palette count" in capsys.readouterr().out


def test_colour_mode_parsing():
    assert PrintSettings(color_mode="PALETTE").color_mode is ColorMode.PALETTE
    assert PrintSettings(color_mode="bogus").color_mode is ColorMode.FULL
    s = PrintSettings()
    s.color_mode = ColorMode.DOMINANT
    assert s.color_mode is ColorMode.DOMINANT
    assert parse_color_mode(3) is None


def test_flags_are_bools():
    s = PrintSettings(random_order=1, clear_between="")
    assert s.random_order is True
    assert s.clear_between is False


def test_coerce_positive_keeps_valid_values():
    assert coerce_positive(42, 10, 1) == 42


def test_channel_masks():
    assert channel_mask(ColorMode.GREEN) == (0, 1, 0)
    assert ColorMode.RED.is_linear
    assert not ColorMode.PALETTE.is_linear
    with pytest.raises(ValueError):
        channel_mask(ColorMode.DOMINANT)
