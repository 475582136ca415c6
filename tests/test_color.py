import pytest

from pixelkit.color import Color


def test_from_hex():
    assert Color.from_hex_rgb(0xFF5511) == Color.from_int_rgb(0xFF, 0x55, 0x11)
    assert Color.from_hex_argb(0xAAFF5511) == Color.from_int_rgba(0xFF, 0x55, 0x11, 0xAA)


def test_from_hex_rgb_ignores_alpha_bits():
    assert Color.from_hex_rgb(0xAAFF5511) == Color.from_int_rgb(0xFF, 0x55, 0x11)
    assert Color.from_hex_rgb(0xAAFF5511).a == 1.0


def test_from_hex_argb_without_alpha_is_transparent():
    assert Color.from_hex_argb(0xFF5511).a == 0.0


def test_from_int_components():
    color = Color.from_int_rgba(255, 0, 51, 255)
    assert color.r == 1.0
    assert color.g == 0.0
    assert color.b == pytest.approx(0.2)
    assert color.a == 1.0


def test_from_rgb_is_opaque():
    assert Color.from_rgb(0.1, 0.2, 0.3) == Color.from_rgba(0.1, 0.2, 0.3, 1.0)


def test_from_gray():
    assert Color.from_gray(0.5) == Color.GRAY
    assert Color.from_gray(0.25) == Color.DARK_GRAY


def test_constants():
    assert Color.WHITE == Color(1.0, 1.0, 1.0, 1.0)
    assert Color.TRANSPARENT.a == 0.0
    assert Color.YELLOW == Color.from_hex_rgb(0xFFFF00)
    assert Color.MAGENTA == Color.from_hex_argb(0xFFFF00FF)


def test_subjective_brightness():
    assert Color.WHITE.subjective_brightness() == pytest.approx(1.0)
    assert Color.BLACK.subjective_brightness() == 0.0
    assert Color.RED.subjective_brightness() == pytest.approx(0.299)
    assert Color.GREEN.subjective_brightness() == pytest.approx(0.587)
    assert Color.BLUE.subjective_brightness() == pytest.approx(0.114)


@pytest.mark.parametrize("bad", [-1, 256])
def test_int_out_of_range(bad):
    with pytest.raises(ValueError):
        Color.from_int_rgb(bad, 0, 0)


def test_hex_out_of_range():
    with pytest.raises(ValueError):
        Color.from_hex_argb(0x1_0000_0000)
    with pytest.raises(ValueError):
        Color.from_hex_rgb(-1)


def test_color_is_immutable():
    color = Color.from_rgb(0.1, 0.2, 0.3)
    with pytest.raises(AttributeError):
        setattr(color, "r", 0.0)
    assert color == Color.from_rgba(0.1, 0.2, 0.3, 1.0)