"""Editor state: view transform, selection, hovering, dragging and rendering."""

from __future__ import annotations

import logging
import math
from enum import IntEnum
from typing import Callable, Optional

from geditor.drawing import RGBA, Canvas
from geditor.gamedefs import DefinitionError, GameDefinitions, RenderType, scan_asset_folder
from geditor.input import InputTracker, MouseButton
from geditor.model import Actor, Level, Player, Wall
from geditor.options import Options
from geditor.vector import Vector2, distance_to_line

logger = logging.getLogger(__name__)

BACKGROUND = RGBA.from_uint(0x123456FF)
GRID = RGBA.from_uint(0x808080FF)
X_AXIS = RGBA.from_uint(0xFF0000FF)
Z_AXIS = RGBA.from_uint(0x0000FFFF)
SELECTION_OUTLINE = RGBA.from_uint(0xFF0000FF)
WALL_LINE = RGBA.from_uint(0xFFFFFF80)
WALL_LINE_HOVER = RGBA.from_uint(0xFFFFFFFF)
WALL_NODE = RGBA.from_uint(0x0000FFFF)
WALL_NODE_HOVER = RGBA.from_uint(0xFFFFFF40)
ACTOR_ROTATION_LINE = RGBA.from_uint(0x808000FF)
ACTOR_NODE = RGBA.from_uint(0xFFFF00FF)
ACTOR_NODE_HOVER = RGBA.from_uint(0x00000040)
PLAYER_ROTATION_LINE = RGBA.from_uint(0x008000FF)
PLAYER_NODE = RGBA.from_uint(0x00FF00FF)
PLAYER_NODE_HOVER = RGBA.from_uint(0x00000040)
TRIGGER_NODE = RGBA.from_uint(0xFF00FFFF)
TRIGGER_NODE_HOVER = RGBA.from_uint(0x00000040)
TRIGGER_AREA = RGBA.from_uint(0xFF00FF40)

SNAPS = (0.0625, 0.125, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0)
DEFAULT_SNAP_INDEX = 4
DEFAULT_ZOOM = 30.0
MIN_ZOOM = 4.0
MAX_ZOOM = 40.0
PICK_RADIUS = 10
NODE_HALF = 6
NODE_SIZE = Vector2(12, 12)
DIRECTION_LENGTH = 20


def _round(value: float) -> float:
    """Round half away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


class SelectionType(IntEnum):
    """What is selected or hovered."""

    NONE = 0
    WALL_A = 1
    WALL_B = 2
    WALL_LINE = 3
    ACTOR = 4
    PLAYER = 5


class AddRequest(IntEnum):
    """What a left click places, if anything."""

    NONE = 0
    WALL = 1
    ACTOR = 2


class Editor:
    """The level being edited together with the view and interaction state."""

    def __init__(
        self,
        options: Optional[Options] = None,
        definitions: Optional[GameDefinitions] = None,
        input_tracker: Optional[InputTracker] = None,
        on_selection_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self.options = options if options is not None else Options()
        self.definitions = definitions if definitions is not None else GameDefinitions()
        self.input = input_tracker if input_tracker is not None else InputTracker()
        self.on_selection_changed = on_selection_changed

        self.level = Level.new()
        self.add_request = AddRequest.NONE
        self.scroll_pos = Vector2()
        self.scroll_pos_centered = Vector2()
        self.view_size = Vector2()
        self.zoom = DEFAULT_ZOOM
        self.snap_index = DEFAULT_SNAP_INDEX

        self.selection_type = SelectionType.NONE
        self.selection_index = -1
        self.hover_type = SelectionType.NONE
        self.hover_index = -1

        self.is_dragging = False
        self._wall_drag_a_offset = Vector2()
        self._wall_drag_b_offset = Vector2()

        self.texture_list: list[str] = []
        self.music_list: list[str] = []

    # Level and assets

    def new_level(self) -> None:
        """Replace the current level with a fresh one."""
        self.level = Level.new()

    def rescan_assets(self) -> bool:
        """Reload actor definitions and the texture and music lists.

        Returns False if the definitions could not be loaded.
        """
        directory = self.options.game_directory
        try:
            self.definitions.load_directory(directory)
        except DefinitionError as exc:
            logger.error("Failed to load game definitions: %s", exc)
            return False
        self.texture_list = scan_asset_folder(directory, "texture", ".gtex")
        self.music_list = scan_asset_folder(directory, "audio", ".gmus")
        return True

    # Coordinate transforms

    def world_to_screen(self, point: Vector2) -> Vector2:
        """Screen pixel of a world point."""
        return Vector2(
            _round(point.x * self.zoom + self.scroll_pos_centered.x),
            _round(point.y * self.zoom + self.scroll_pos_centered.y),
        )

    def world_to_screen_size(self, size: Vector2) -> Vector2:
        """Screen extent of a world-space size."""
        return Vector2(size.x * self.zoom, size.y * self.zoom)

    def screen_to_world(self, point: Vector2) -> Vector2:
        """World point under a screen pixel."""
        return Vector2(
            (point.x - self.scroll_pos_centered.x) / self.zoom,
            (point.y - self.scroll_pos_centered.y) / self.zoom,
        )

    def screen_to_world_snapped(self, point: Vector2) -> Vector2:
        """World point under a screen pixel, snapped to the grid."""
        world = self.screen_to_world(point)
        return Vector2(self.round_to_grid(world.x), self.round_to_grid(world.y))

    def snap_size(self) -> float:
        """Current grid snap step in world units."""
        return SNAPS[self.snap_index]

    def _snap_inverse(self) -> float:
        return 1.0 / SNAPS[self.snap_index]

    def round_to_grid(self, value: float) -> float:
        """Nearest grid line to ``value``."""
        inv = self._snap_inverse()
        return _round(value * inv) / inv

    def floor_to_grid(self, value: float) -> float:
        """Nearest grid line at or below ``value``."""
        inv = self._snap_inverse()
        return math.floor(value * inv) / inv

    def ceil_to_grid(self, value: float) -> float:
        """Nearest grid line at or above ``value``."""
        inv = self._snap_inverse()
        return math.ceil(value * inv) / inv

    # Zooming

    def _zoom_around(self, anchor: Vector2, amount: float) -> None:
        old_scroll = self.scroll_pos
        world_anchor = self.screen_to_world(anchor)
        old_zoom = self.zoom
        self.zoom += amount
        diff = self.zoom - old_zoom
        self.scroll_pos = self.scroll_pos - world_anchor * diff
        if self.zoom < MIN_ZOOM:
            self.zoom = MIN_ZOOM
            self.scroll_pos = old_scroll
        if self.zoom > MAX_ZOOM:
            self.zoom = MAX_ZOOM
            self.scroll_pos = old_scroll

    def zoom_by(self, amount: float) -> None:
        """Zoom by ``amount`` keeping the centre of the view fixed."""
        center = Vector2(self.view_size.x / 2, self.view_size.y / 2)
        self._zoom_around(center, amount)

    # Interaction

    def _selection_changed(self) -> None:
        if self.on_selection_changed is not None:
            self.on_selection_changed()

    def _process_hover(self) -> None:
        self.hover_type = SelectionType.NONE
        mouse = self.input.mouse_position()

        for index, wall in enumerate(self.level.walls):
            a = self.world_to_screen(wall.a)
            b = self.world_to_screen(wall.b)
            if a.distance(mouse) < PICK_RADIUS:
                self.hover_type, self.hover_index = SelectionType.WALL_A, index
                break
            if b.distance(mouse) < PICK_RADIUS:
                self.hover_type, self.hover_index = SelectionType.WALL_B, index
                break
            if distance_to_line(a, b, mouse) < PICK_RADIUS:
                self.hover_type, self.hover_index = SelectionType.WALL_LINE, index
                break

        for index, actor in enumerate(self.level.actors):
            if self.world_to_screen(actor.position).distance(mouse) < PICK_RADIUS:
                self.hover_type, self.hover_index = SelectionType.ACTOR, index
                break

        if self.world_to_screen(self.level.player.pos).distance(mouse) < PICK_RADIUS:
            self.hover_type, self.hover_index = SelectionType.PLAYER, 0

    def _process_drag(self) -> None:
        if self.selection_type is SelectionType.NONE:
            return
        if self.input.is_just_pressed(MouseButton.LMB):
            self.is_dragging = True
        elif self.input.is_just_released(MouseButton.LMB):
            self.is_dragging = False
        if not self.is_dragging:
            return

        target = self.screen_to_world_snapped(self.input.mouse_position())
        kind = self.selection_type
        if kind is SelectionType.WALL_A:
            self.level.walls[self.selection_index].a = target
        elif kind is SelectionType.WALL_B:
            self.level.walls[self.selection_index].b = target
        elif kind is SelectionType.ACTOR:
            self.level.actors[self.selection_index].position = target
        elif kind is SelectionType.PLAYER:
            self.level.player.pos = target
        elif kind is SelectionType.WALL_LINE:
            wall = self.level.walls[self.selection_index]
            off_a, off_b = self._wall_drag_a_offset, self._wall_drag_b_offset
            wall.a = Vector2(_round(target.x - off_a.x), _round(target.y - off_a.y))
            wall.b = Vector2(_round(target.x - off_b.x), _round(target.y - off_b.y))

    def _select_hovered(self) -> None:
        self.selection_type = self.hover_type
        self.selection_index = self.hover_index
        if self.selection_type is SelectionType.WALL_LINE:
            world = self.screen_to_world(self.input.mouse_position())
            wall = self.level.walls[self.selection_index]
            self._wall_drag_a_offset = world - wall.a
            self._wall_drag_b_offset = world - wall.b
        self._selection_changed()

    def _place_new(self) -> None:
        position = self.screen_to_world_snapped(self.input.mouse_position())
        if self.add_request is AddRequest.WALL:
            self.level.walls.append(Wall(a=position, b=position, tex="level_wall_test", uv_scale=1.0))
            self.selection_type = SelectionType.WALL_B
            self.selection_index = len(self.level.walls) - 1
            self._selection_changed()
        elif self.add_request is AddRequest.ACTOR:
            self.level.actors.append(Actor(position=position, rotation=0.0, actor_type=1, name=""))
            self.selection_type = SelectionType.ACTOR
            self.selection_index = len(self.level.actors) - 1
            self._selection_changed()
        self.is_dragging = True

    def update(self) -> None:
        """Apply the current frame's input: panning, zooming, selecting, dragging and adding."""
        if self.input.is_pressed(MouseButton.RMB):
            self.scroll_pos = self.scroll_pos + self.input.relative_motion()

        scroll = self.input.scroll_delta()
        if scroll.y != 0:
            self._zoom_around(self.input.mouse_position(), -scroll.y)

        if self.add_request is AddRequest.NONE or self.is_dragging:
            self._process_hover()
            if self.input.is_just_pressed(MouseButton.LMB):
                self._select_hovered()
            self._process_drag()
        elif self.input.is_just_pressed(MouseButton.LMB):
            self._place_new()

    # Rendering

    def _node(self, canvas: Canvas, center: Vector2, color: RGBA) -> None:
        canvas.rect(Vector2(center.x - NODE_HALF, center.y - NODE_HALF), NODE_SIZE, color)

    def _node_outline(self, canvas: Canvas, center: Vector2, color: RGBA) -> None:
        canvas.rect_outline(
            Vector2(center.x - NODE_HALF, center.y - NODE_HALF), NODE_SIZE, color, 2.0
        )

    def _render_grid(self, canvas: Canvas) -> None:
        width, height = canvas.width, canvas.height
        spacing = int(self.zoom)
        centered = self.scroll_pos_centered
        offset_x = int(math.fmod(int(centered.x), spacing))
        offset_y = int(math.fmod(int(centered.y), spacing))
        for x in range(offset_x, math.ceil(width), spacing):
            if x < width:
                canvas.line(Vector2(x, 0), Vector2(x, height), GRID, 0.5)
        for y in range(offset_y, math.ceil(height), spacing):
            if y < height:
                canvas.line(Vector2(0, y), Vector2(width, y), GRID, 0.5)
        canvas.line(Vector2(centered.x, 0), Vector2(centered.x, height), Z_AXIS, 2.0)
        canvas.line(Vector2(0, centered.y), Vector2(width, centered.y), X_AXIS, 2.0)

    def _render_wall(self, canvas: Canvas, wall: Wall, index: int) -> None:
        a = self.world_to_screen(wall.a)
        b = self.world_to_screen(wall.b)
        hovered = self.hover_index == index
        selected = self.selection_index == index
        line_color = (
            WALL_LINE_HOVER if self.hover_type is SelectionType.WALL_LINE and hovered else WALL_LINE
        )
        canvas.line(a, b, line_color, 4.0)
        self._node(canvas, a, WALL_NODE)
        self._node(canvas, b, WALL_NODE)
        if self.hover_type is SelectionType.WALL_A and hovered:
            self._node(canvas, a, WALL_NODE_HOVER)
        elif self.hover_type is SelectionType.WALL_B and hovered:
            self._node(canvas, b, WALL_NODE_HOVER)
        if self.selection_type is SelectionType.WALL_A and selected:
            self._node_outline(canvas, a, SELECTION_OUTLINE)
        elif self.selection_type is SelectionType.WALL_B and selected:
            self._node_outline(canvas, b, SELECTION_OUTLINE)

    def _render_actor(self, canvas: Canvas, actor: Actor, index: int) -> None:
        definition = self.definitions.get(actor.actor_type)
        pos = self.world_to_screen(actor.position)
        if definition is not None and definition.render_type is RenderType.TRIGGER:
            size = self.world_to_screen_size(Vector2(actor.param_a, actor.param_b))
            canvas.area(pos, size, actor.rotation, TRIGGER_AREA)
            node, hover = TRIGGER_NODE, TRIGGER_NODE_HOVER
        else:
            end = pos + Vector2.from_angle(actor.rotation) * DIRECTION_LENGTH
            canvas.line(pos, end, ACTOR_ROTATION_LINE, 2.0)
            node, hover = ACTOR_NODE, ACTOR_NODE_HOVER
        self._node(canvas, pos, node)
        if self.hover_type is SelectionType.ACTOR and self.hover_index == index:
            self._node(canvas, pos, hover)
        if self.selection_type is SelectionType.ACTOR and self.selection_index == index:
            self._node_outline(canvas, pos, SELECTION_OUTLINE)

    def _render_player(self, canvas: Canvas, player: Player) -> None:
        pos = self.world_to_screen(player.pos)
        end = pos + Vector2.from_angle(player.rotation) * DIRECTION_LENGTH
        canvas.line(pos, end, PLAYER_ROTATION_LINE, 2.0)
        self._node(canvas, pos, PLAYER_NODE)
        if self.hover_type is SelectionType.PLAYER:
            self._node(canvas, pos, PLAYER_NODE_HOVER)
        if self.selection_type is SelectionType.PLAYER:
            self._node_outline(canvas, pos, PLAYER_ROTATION_LINE)

    def render(self, canvas: Canvas) -> None:
        """Draw the grid, walls, actors and player onto ``canvas``."""
        canvas.clear(BACKGROUND)
        self.view_size = canvas.size
        self.scroll_pos_centered = Vector2(
            self.scroll_pos.x + canvas.width / 2, self.scroll_pos.y + canvas.height / 2
        )
        self._render_grid(canvas)
        for index, wall in enumerate(self.level.walls):
            self._render_wall(canvas, wall, index)
        for index, actor in enumerate(self.level.actors):
            self._render_actor(canvas, actor, index)
        self._render_player(canvas, self.level.player)