from hypothesis import given
from hypothesis import strategies as st

from geditor.drawing import RGBA, Canvas, DrawKind
from geditor.vector import Vector2


def test_from_uint_red():
    assert RGBA.from_uint(0xFF0000FF) == RGBA(1.0, 0.0, 0.0, 1.0)


def test_from_uint_minus_one_is_opaque_white():
    assert RGBA.from_uint(-1) == RGBA(1.0, 1.0, 1.0, 1.0)


@given(st.integers(min_value=0, max_value=0xFFFFFFFF))
def test_uint_round_trip(value):
    assert RGBA.from_uint(value).to_uint() == value


@given(st.integers(min_value=0, max_value=0xFFFFFFFF))
def test_components_in_unit_range(value):
    color = RGBA.from_uint(value)
    for channel in (color.red, color.green, color.blue, color.alpha):
        assert 0.0 <= channel <= 1.0


def test_to_uint_clamps():
    assert RGBA(2.0, -1.0, 0.0, 1.0).to_uint() == 0xFF0000FF


def test_canvas_size():
    canvas = Canvas(640, 480)
    assert canvas.size == Vector2(640, 480)


def test_line_recorded():
    canvas = Canvas(100, 100)
    color = RGBA.from_uint(0x808080FF)
    canvas.line(Vector2(1, 2), Vector2(3, 4), color, 0.5)
    (command,) = canvas.commands
    assert command.kind is DrawKind.LINE
    assert command.start == Vector2(1, 2)
    assert command.end == Vector2(3, 4)
    assert command.thickness == 0.5
    assert command.color == color


def test_shapes_recorded_in_order():
    canvas = Canvas(100, 100)
    color = RGBA.from_uint(0xFFFF00FF)
    canvas.rect(Vector2(0, 0), Vector2(12, 12), color)
    canvas.area(Vector2(5, 5), Vector2(10, 20), 1.5, color)
    canvas.rect_outline(Vector2(0, 0), Vector2(12, 12), color, 2.0)
    canvas.text("hello", Vector2(1, 1), 14.0, color)
    assert [c.kind for c in canvas.commands] == [
        DrawKind.RECT,
        DrawKind.AREA,
        DrawKind.RECT_OUTLINE,
        DrawKind.TEXT,
    ]
    area = canvas.commands[1]
    assert area.start == Vector2(5, 5)
    assert area.size == Vector2(10, 20)
    assert area.rotation == 1.5
    text = canvas.commands[3]
    assert text.text == "hello"
    assert text.font_size == 14.0


def test_clear_discards_previous_commands():
    canvas = Canvas(100, 100)
    color = RGBA.from_uint(0x123456FF)
    canvas.rect(Vector2(0, 0), Vector2(1, 1), color)
    canvas.clear(color)
    assert len(canvas.commands) == 1
    assert canvas.commands[0].kind is DrawKind.CLEAR
    assert canvas.commands[0].color == color