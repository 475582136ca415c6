import math

import pytest

from pixelkit.vector import Vector2


def test_arithmetic():
    assert Vector2(15, 20) == Vector2(10, 4) + Vector2(5, 16)
    assert Vector2(5, -12) == Vector2(10, 4) - Vector2(5, 16)
    assert Vector2(-5, 10) == Vector2(3, 10) - Vector2.new_x(8)
    assert Vector2(-5, 17) == Vector2(-5, 10) + Vector2.new_y(7)


def test_arithmetic_shared_operands_unchanged():
    left = Vector2(10, 4)
    right = Vector2(5, 16)
    assert left + right == Vector2(15, 20)
    assert left - right == Vector2(5, -12)
    assert left == Vector2(10, 4)
    assert right == Vector2(5, 16)


def test_arithmetic_tuples():
    assert Vector2(15, 20) == Vector2(10, 4) + (5, 16)
    assert Vector2(5, -12) == Vector2(10, 4) - (5, 16)


def test_add_assign():
    left = Vector2(1, 2)
    right = Vector2(3, 4)
    left += right
    assert left == Vector2(4, 6)
    left += right
    assert left == Vector2(7, 10)
    left += right
    assert left == Vector2(10, 14)
    left += (3, 4)
    assert left == Vector2(13, 18)


def test_sub_assign():
    left = Vector2(9, 8)
    right = Vector2(1, 2)
    left -= right
    assert left == Vector2(8, 6)
    left -= right
    assert left == Vector2(7, 4)
    left -= right
    assert left == Vector2(6, 2)
    left -= (1, 2)
    assert left == Vector2(5, 0)


def test_mul_assign():
    left = Vector2(2, 3)
    left *= 5
    assert left == Vector2(10, 15)
    left *= 2
    assert left == Vector2(20, 30)


def test_div_assign():
    left = Vector2(12, 8)
    left /= 2
    assert left == Vector2(6, 4)
    left /= 2
    assert left == Vector2(3, 2)


def test_bad_operand_raises():
    with pytest.raises(TypeError):
        Vector2(1, 2) + (1, 2, 3)
    with pytest.raises(TypeError):
        Vector2(1, 2) * Vector2(1, 2)


def test_zero_and_axes():
    assert Vector2.ZERO == Vector2(0, 0)
    assert Vector2.new_x(3.5) == Vector2(3.5, 0.0)
    assert Vector2.new_y(-2) == Vector2(0, -2)


def test_magnitude():
    assert Vector2(3, 4).magnitude_squared() == 25
    assert Vector2(3, 4).magnitude() == 5.0


def test_normalize():
    normal = Vector2(3.0, 4.0).normalize()
    assert normal == Vector2(0.6, 0.8)
    assert normal.magnitude() == pytest.approx(1.0)
    assert Vector2.ZERO.normalize() is None


def test_rotations():
    v = Vector2(1, 2)
    assert v.rotate_90_degrees_clockwise() == Vector2(-2, 1)
    assert v.rotate_90_degrees_anticlockwise() == Vector2(2, -1)
    assert v.rotate_90_degrees_clockwise().rotate_90_degrees_anticlockwise() == v


def test_conversions():
    assert Vector2(1, 2).into_f32() == Vector2(1.0, 2.0)
    assert isinstance(Vector2(1, 2).into_f32().x, float)
    assert Vector2(2.9, -2.9).into_i32() == Vector2(2, -2)
    assert Vector2(1e12, float("nan")).into_i32() == Vector2(2**31 - 1, 0)
    assert Vector2(-1.5, 7.8).into_u32() == Vector2(0, 7)
    assert Vector2(-1, 5).into_u32() == Vector2(2**32 - 1, 5)


def test_try_into_i32():
    assert Vector2(5, -7).try_into_i32() == Vector2(5, -7)
    with pytest.raises(OverflowError):
        Vector2(2**31, 0).try_into_i32()
    with pytest.raises(TypeError):
        Vector2(1.5, 0).try_into_i32()


def test_round_half_away_from_zero():
    assert Vector2(0.5, -0.5).round() == Vector2(1.0, -1.0)
    assert Vector2(2.5, 1.4).round() == Vector2(3.0, 1.0)
    assert Vector2(0.49999999999999994, -2.6).round() == Vector2(0.0, -3.0)
    assert math.isinf(Vector2(math.inf, 0.0).round().x)


def test_iteration_and_hash():
    x, y = Vector2(4, 9)
    assert (x, y) == (4, 9)
    assert len({Vector2(1, 2), Vector2(1, 2), Vector2(2, 1)}) == 2