"""Level data model: walls, actors, connections and the player."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

from geditor.vector import Vector2

PI = 3.14159265358979323846

ParamValue = Union[int, float, bool, str, None]


def deg_to_rad(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * PI / 180


def rad_to_deg(radians: float) -> float:
    """Convert radians to degrees."""
    return radians * 180 / PI


class ParamType(IntEnum):
    """Type of a signal parameter override."""

    BYTE = 0
    INTEGER = 1
    FLOAT = 2
    BOOL = 3
    STRING = 4
    NONE = 5


_ZERO_VALUES: dict[ParamType, ParamValue] = {
    ParamType.BYTE: 0,
    ParamType.INTEGER: 0,
    ParamType.FLOAT: 0.0,
    ParamType.BOOL: False,
    ParamType.STRING: "",
    ParamType.NONE: None,
}


@dataclass
class Param:
    """A typed parameter value; a missing value becomes the type's zero value."""

    type: ParamType = ParamType.NONE
    value: ParamValue = None

    def __post_init__(self) -> None:
        self.type = ParamType(self.type)
        if self.value is None:
            self.value = _ZERO_VALUES[self.type]


@dataclass
class Player:
    """Player spawn point and facing."""

    pos: Vector2 = field(default_factory=Vector2)
    rotation: float = 0.0


@dataclass
class Wall:
    """A textured wall segment from ``a`` to ``b``."""

    a: Vector2 = field(default_factory=Vector2)
    b: Vector2 = field(default_factory=Vector2)
    tex: str = "level_wall_test"
    uv_scale: float = 1.0
    uv_offset: float = 0.0


@dataclass
class ActorConnection:
    """An I/O link from one of an actor's outputs to a named actor's input."""

    target_input: int = 0
    my_output: int = 0
    out_actor_name: str = ""
    out_param_override: Param = field(default_factory=Param)


@dataclass
class Actor:
    """An interactable object placed in the level."""

    position: Vector2 = field(default_factory=Vector2)
    rotation: float = 0.0
    actor_type: int = 1
    param_a: int = 0
    param_b: int = 0
    param_c: int = 0
    param_d: int = 0
    name: str = ""
    io_connections: list[ActorConnection] = field(default_factory=list)


def _default_player() -> Player:
    return Player(rotation=deg_to_rad(-90.0))


@dataclass
class Level:
    """A whole level as edited and saved."""

    name: str = "Unnamed Level"
    course_num: int = -1
    actors: list[Actor] = field(default_factory=list)
    walls: list[Wall] = field(default_factory=list)
    has_ceiling: bool = False
    ceil_or_sky_tex: str = "level_sky_test"
    floor_tex: str = "level_floor_test"
    music: str = "none"
    fog_color: int = 0x99C0F1FF
    fog_start: float = 50.0
    fog_end: float = 100.0
    player: Player = field(default_factory=_default_player)

    @classmethod
    def new(cls) -> Level:
        """A fresh, empty level with the editor's defaults."""
        return cls()