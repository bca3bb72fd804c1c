import json

import pytest

from geditor.drawing import RGBA, Canvas, DrawKind
from geditor.editor import AddRequest, Editor, SelectionType
from geditor.gamedefs import GameDefinitions
from geditor.input import MouseButton
from geditor.model import Actor, Wall
from geditor.options import Options
from geditor.vector import Vector2


def _ready_editor(**kwargs):
    editor = Editor(**kwargs)
    editor.render(Canvas(800, 600))
    editor.input.mouse_enter()
    return editor


def _click(editor, x, y):
    editor.input.motion(x, y)
    editor.input.button_pressed(MouseButton.LMB)
    editor.update()
    editor.input.tick()


def _write_defs(directory, actors):
    defs = directory / "assets" / "defs"
    defs.mkdir(parents=True, exist_ok=True)
    (defs / "main.def").write_text(json.dumps({"version": 2, "actors": actors}))


TRIGGER_DEF = {
    "id": 1,
    "name": "trigger",
    "params": [],
    "inputs": [],
    "outputs": [],
    "render_type": "trigger",
}


def test_defaults():
    editor = Editor()
    assert editor.zoom == 30.0
    assert editor.snap_size() == 1.0
    assert editor.level.name == "Unnamed Level"
    assert editor.selection_type is SelectionType.NONE


def test_new_level_replaces_level():
    editor = Editor()
    editor.level.walls.append(Wall())
    editor.new_level()
    assert editor.level.walls == []


def test_origin_maps_to_view_center():
    editor = _ready_editor()
    assert editor.world_to_screen(Vector2(0, 0)) == Vector2(400, 300)


@pytest.mark.parametrize("point", [Vector2(1, 2), Vector2(-3, 5), Vector2(0, -7)])
def test_world_screen_round_trip(point):
    editor = _ready_editor()
    assert editor.screen_to_world(editor.world_to_screen(point)) == point


def test_world_to_screen_size_scales_by_zoom():
    editor = Editor()
    size = editor.world_to_screen_size(Vector2(2, 3))
    assert size == Vector2(2 * editor.zoom, 3 * editor.zoom)


def test_round_to_grid_rounds_half_away_from_zero():
    editor = Editor()
    assert editor.round_to_grid(0.5) == 1.0
    assert editor.round_to_grid(-0.5) == -1.0


@pytest.mark.parametrize("index", range(8))
@pytest.mark.parametrize("value", [-3.3, -0.01, 0.0, 0.7, 5.55])
def test_floor_and_ceil_bracket_value(index, value):
    editor = Editor()
    editor.snap_index = index
    step = editor.snap_size()
    low, high = editor.floor_to_grid(value), editor.ceil_to_grid(value)
    assert low <= value <= high
    assert high - low <= step
    assert (low / step).is_integer() and (high / step).is_integer()


def test_snapped_point_lies_on_grid():
    editor = _ready_editor()
    editor.snap_index = 0
    point = editor.screen_to_world_snapped(Vector2(413, 287))
    assert (point.x * 16).is_integer() and (point.y * 16).is_integer()


def test_zoom_clamps_and_keeps_scroll():
    editor = _ready_editor()
    editor.scroll_pos = Vector2(5, 5)
    editor.zoom_by(100)
    assert editor.zoom == 40.0
    assert editor.scroll_pos == Vector2(5, 5)
    editor.zoom_by(-100)
    assert editor.zoom == 4.0
    assert editor.scroll_pos == Vector2(5, 5)


def test_zoom_keeps_view_center_fixed():
    editor = Editor()
    editor.scroll_pos = Vector2(37, -12)
    canvas = Canvas(800, 600)
    editor.render(canvas)
    before = editor.screen_to_world(Vector2(400, 300))
    editor.zoom_by(3)
    editor.render(canvas)
    after = editor.screen_to_world(Vector2(400, 300))
    assert after.x == pytest.approx(before.x)
    assert after.y == pytest.approx(before.y)


def test_add_wall_then_drag_endpoint():
    calls = []
    editor = _ready_editor(on_selection_changed=lambda: calls.append(1))
    editor.add_request = AddRequest.WALL
    _click(editor, 430, 330)
    assert len(editor.level.walls) == 1
    wall = editor.level.walls[0]
    assert wall.a == Vector2(1, 1)
    assert wall.tex == "level_wall_test"
    assert editor.selection_type is SelectionType.WALL_B
    assert editor.selection_index == 0
    assert editor.is_dragging
    assert calls == [1]

    editor.input.motion(490, 300)
    editor.update()
    assert wall.b == Vector2(3, 0)
    assert wall.a == Vector2(1, 1)


def test_add_actor():
    editor = _ready_editor()
    editor.add_request = AddRequest.ACTOR
    _click(editor, 460, 240)
    assert editor.level.actors[0].position == Vector2(2, -2)
    assert editor.level.actors[0].actor_type == 1
    assert editor.selection_type is SelectionType.ACTOR


def test_release_stops_drag():
    editor = _ready_editor()
    editor.add_request = AddRequest.ACTOR
    _click(editor, 460, 240)
    editor.input.button_released(MouseButton.LMB)
    editor.update()
    assert not editor.is_dragging


def test_hover_wall_endpoint_and_line():
    editor = _ready_editor()
    editor.level.walls.append(Wall(a=Vector2(2, 2), b=Vector2(6, 2)))
    editor.input.motion(462, 362)
    editor.update()
    assert editor.hover_type is SelectionType.WALL_A
    assert editor.hover_index == 0
    editor.input.motion(520, 361)
    editor.update()
    assert editor.hover_type is SelectionType.WALL_LINE


def test_player_hover_overrides_actor():
    editor = _ready_editor()
    editor.level.actors.append(Actor(position=Vector2(0, 0)))
    editor.input.motion(401, 301)
    editor.update()
    assert editor.hover_type is SelectionType.PLAYER


def test_click_selects_and_drags_player():
    editor = _ready_editor()
    _click(editor, 402, 299)
    assert editor.selection_type is SelectionType.PLAYER
    editor.input.motion(340, 330)
    editor.update()
    assert editor.level.player.pos == Vector2(-2, 1)


def test_drag_wall_line_moves_both_ends():
    editor = _ready_editor()
    editor.level.walls.append(Wall(a=Vector2(2, 2), b=Vector2(6, 2)))
    _click(editor, 520, 360)
    assert editor.selection_type is SelectionType.WALL_LINE
    editor.input.motion(520, 420)
    editor.update()
    wall = editor.level.walls[0]
    assert wall.a == Vector2(2, 4)
    assert wall.b == Vector2(6, 4)


def test_right_drag_pans():
    editor = _ready_editor()
    editor.input.motion(100, 100)
    editor.input.button_pressed(MouseButton.RMB)
    editor.input.tick()
    editor.input.motion(110, 95)
    editor.update()
    assert editor.scroll_pos == Vector2(10, -5)


def test_scroll_wheel_zooms_out():
    editor = _ready_editor()
    editor.input.motion(400, 300)
    editor.input.scroll(0, 2)
    editor.update()
    assert editor.zoom == 28.0


def test_render_draws_background_and_player():
    editor = Editor()
    canvas = Canvas(800, 600)
    editor.render(canvas)
    assert canvas.commands[0].kind is DrawKind.CLEAR
    assert canvas.commands[0].color == RGBA.from_uint(0x123456FF)
    rects = [c for c in canvas.commands if c.kind is DrawKind.RECT]
    assert rects[-1].start == Vector2(394, 294)
    assert rects[-1].color == RGBA.from_uint(0x00FF00FF)


def test_render_wall_nodes():
    editor = Editor()
    editor.level.walls.append(Wall(a=Vector2(1, 0), b=Vector2(2, 0)))
    canvas = Canvas(800, 600)
    editor.render(canvas)
    lines = [c for c in canvas.commands if c.kind is DrawKind.LINE and c.thickness == 4.0]
    assert lines[0].start == editor.world_to_screen(Vector2(1, 0))
    assert lines[0].end == editor.world_to_screen(Vector2(2, 0))


def test_render_trigger_actor_as_area(tmp_path):
    _write_defs(tmp_path, [TRIGGER_DEF])
    definitions = GameDefinitions()
    definitions.load_directory(tmp_path)
    editor = Editor(definitions=definitions)
    editor.level.actors.append(Actor(position=Vector2(1, 1), actor_type=1, param_a=2, param_b=4))
    canvas = Canvas(800, 600)
    editor.render(canvas)
    areas = [c for c in canvas.commands if c.kind is DrawKind.AREA]
    assert len(areas) == 1
    assert areas[0].size == editor.world_to_screen_size(Vector2(2, 4))
    assert areas[0].start == editor.world_to_screen(Vector2(1, 1))


def test_rescan_assets(tmp_path):
    _write_defs(tmp_path, [TRIGGER_DEF])
    (tmp_path / "assets" / "texture").mkdir()
    (tmp_path / "assets" / "texture" / "brick.gtex").write_bytes(b"")
    (tmp_path / "assets" / "audio").mkdir()
    (tmp_path / "assets" / "audio" / "song.gmus").write_bytes(b"")
    editor = Editor(options=Options(game_directory=str(tmp_path)))
    assert editor.rescan_assets() is True
    assert editor.texture_list == ["brick"]
    assert editor.music_list == ["song"]
    assert len(editor.definitions) == 1


def test_rescan_assets_fails_on_bad_definitions(tmp_path):
    defs = tmp_path / "assets" / "defs"
    defs.mkdir(parents=True)
    (defs / "bad.def").write_text("{not json")
    editor = Editor(options=Options(game_directory=str(tmp_path)))
    assert editor.rescan_assets() is False