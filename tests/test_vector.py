import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from geditor.vector import Vector2, distance_to_line

coords = st.floats(min_value=-1000, max_value=1000, allow_nan=False, allow_infinity=False)
angles = st.floats(min_value=-10, max_value=10, allow_nan=False, allow_infinity=False)


def test_distance_pythagorean():
    assert Vector2(0, 0).distance(Vector2(3, 4)) == 5.0


def test_splat_sets_both_components():
    assert Vector2.splat(2.5) == Vector2(2.5, 2.5)


def test_normalized_zero_vector_stays_zero():
    assert Vector2(0, 0).normalized() == Vector2(0.0, 0.0)


def test_angle_between_perpendicular_vectors():
    assert Vector2(1, 0).angle_to(Vector2(0, 2)) == pytest.approx(math.pi / 2)


def test_angle_with_zero_vector_is_nan():
    result = Vector2(0, 0).angle_to(Vector2(1, 1))
    assert str(result) == "nan"


@given(angles)
def test_from_angle_is_unit_length(angle):
    assert Vector2.from_angle(angle).length() == pytest.approx(1.0)


@given(coords, coords, coords, coords)
def test_add_then_subtract_round_trip(ax, ay, bx, by):
    a = Vector2(ax, ay)
    b = Vector2(bx, by)
    result = (a + b) - b
    assert result.x == pytest.approx(ax, abs=1e-9)
    assert result.y == pytest.approx(ay, abs=1e-9)


@given(coords, coords, st.floats(min_value=0.5, max_value=100))
def test_scale_then_divide_round_trip(x, y, scale):
    v = Vector2(x, y)
    result = (v * scale) / scale
    assert result.x == pytest.approx(x, abs=1e-9)
    assert result.y == pytest.approx(y, abs=1e-9)


@given(coords, coords, coords, coords)
def test_distance_is_symmetric(ax, ay, bx, by):
    a = Vector2(ax, ay)
    b = Vector2(bx, by)
    assert a.distance(b) == b.distance(a)


@given(coords, coords)
def test_dot_with_self_is_length_squared(x, y):
    v = Vector2(x, y)
    assert v.dot(v) == pytest.approx(v.length() ** 2)


@given(coords, coords, angles)
def test_rotation_preserves_length(x, y, angle):
    v = Vector2(x, y)
    assert v.rotated(angle).length() == pytest.approx(v.length(), abs=1e-6)


@given(coords, coords, angles)
def test_rotation_round_trip(x, y, angle):
    back = Vector2(x, y).rotated(angle).rotated(-angle)
    assert back.x == pytest.approx(x, abs=1e-6)
    assert back.y == pytest.approx(y, abs=1e-6)


@given(coords, coords)
def test_normalized_has_unit_length(x, y):
    v = Vector2(x, y)
    length = v.normalized().length()
    if v.length() > 1e-6:
        assert length == pytest.approx(1.0)
    else:
        assert length <= 1.0 + 1e-9


@given(coords, coords, coords, coords)
def test_degenerate_segment_measures_to_start(sx, sy, px, py):
    start = Vector2(sx, sy)
    point = Vector2(px, py)
    assert distance_to_line(start, start, point) == start.distance(point)


@given(st.floats(min_value=0, max_value=10), st.floats(min_value=-50, max_value=50))
def test_perpendicular_distance_inside_segment(x, height):
    result = distance_to_line(Vector2(0, 0), Vector2(10, 0), Vector2(x, height))
    assert result == pytest.approx(abs(height), abs=1e-9)


@given(coords, coords)
def test_beyond_end_measures_to_endpoint(px, py):
    start = Vector2(0, 0)
    end = Vector2(10, 0)
    point = Vector2(px, py)
    result = distance_to_line(start, end, point)
    if px > 10:
        assert result == pytest.approx(point.distance(end))
    elif px < 0:
        assert result == pytest.approx(point.distance(start))
    else:
        assert result == pytest.approx(abs(py), abs=1e-9)