"""Reading and writing the uncompressed binary level format."""

from __future__ import annotations

import os
import struct
from typing import Union

from geditor.model import Actor, ActorConnection, Level, Param, ParamType, Player, Wall
from geditor.vector import Vector2

NAME_SIZE = 32
TEXTURE_SIZE = 32
ACTOR_NAME_SIZE = 64
PARAM_VALUE_SIZE = 64

PathLike = Union[str, "os.PathLike[str]"]


class LevelFormatError(ValueError):
    """Raised when level data is truncated or malformed."""


def _pack(fmt: str, *values) -> bytes:
    try:
        return struct.pack(fmt, *values)
    except struct.error as exc:
        raise ValueError(f"value out of range for level field: {values!r}") from exc


def _fixed_text(text: str, size: int, field: str) -> bytes:
    raw = text.encode("utf-8")
    if len(raw) > size:
        raise ValueError(f"{field} is longer than {size} bytes: {text!r}")
    return raw.ljust(size, b"\0")


def _encode_param(param: Param) -> bytes:
    kind = ParamType(param.type)
    if kind is ParamType.BYTE:
        value = _pack("<B", param.value)
    elif kind is ParamType.INTEGER:
        value = _pack("<i", param.value)
    elif kind is ParamType.FLOAT:
        value = _pack("<f", param.value)
    elif kind is ParamType.BOOL:
        value = _pack("<B", int(bool(param.value)))
    elif kind is ParamType.STRING:
        value = _fixed_text(param.value, PARAM_VALUE_SIZE, "parameter string")
    else:
        value = b""
    return _pack("<i", kind) + value.ljust(PARAM_VALUE_SIZE, b"\0")


def _encode_connection(conn: ActorConnection) -> bytes:
    return b"".join(
        (
            _pack("<B", conn.my_output),
            _fixed_text(conn.out_actor_name, ACTOR_NAME_SIZE, "connection target name"),
            _pack("<B", conn.target_input),
            _encode_param(conn.out_param_override),
        )
    )


def _encode_actor(actor: Actor) -> bytes:
    parts = [
        _pack(
            "<fffiBBBB",
            actor.position.x,
            actor.position.y,
            actor.rotation,
            actor.actor_type,
            actor.param_a,
            actor.param_b,
            actor.param_c,
            actor.param_d,
        ),
        _fixed_text(actor.name, ACTOR_NAME_SIZE, "actor name"),
        _pack("<I", len(actor.io_connections)),
    ]
    parts.extend(_encode_connection(conn) for conn in actor.io_connections)
    return b"".join(parts)


def _encode_wall(wall: Wall) -> bytes:
    return b"".join(
        (
            _pack("<ffff", wall.a.x, wall.a.y, wall.b.x, wall.b.y),
            _fixed_text(wall.tex, TEXTURE_SIZE, "wall texture"),
            _pack("<ff", wall.uv_scale, wall.uv_offset),
        )
    )


def encode_level(level: Level) -> bytes:
    """Serialise a level to its binary form."""
    parts = [
        _fixed_text(level.name, NAME_SIZE, "level name"),
        _pack("<hB", level.course_num, int(bool(level.has_ceiling))),
        _fixed_text(level.ceil_or_sky_tex, TEXTURE_SIZE, "ceiling/sky texture"),
        _fixed_text(level.floor_tex, TEXTURE_SIZE, "floor texture"),
        _fixed_text(level.music, TEXTURE_SIZE, "music"),
        _pack("<Iff", level.fog_color, level.fog_start, level.fog_end),
        _pack("<fff", level.player.pos.x, level.player.pos.y, level.player.rotation),
        _pack("<I", len(level.actors)),
    ]
    parts.extend(_encode_actor(actor) for actor in level.actors)
    parts.append(_pack("<I", len(level.walls)))
    parts.extend(_encode_wall(wall) for wall in level.walls)
    return b"".join(parts)


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._pos = 0

    def take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise LevelFormatError(
                f"level data truncated at offset {self._pos} (needed {size} more bytes)"
            )
        chunk = bytes(self._data[self._pos:end])
        self._pos = end
        return chunk

    def unpack(self, fmt: str) -> tuple:
        layout = struct.Struct(fmt)
        return layout.unpack(self.take(layout.size))

    def text(self, size: int) -> str:
        return _decode_text(self.take(size))


def _decode_text(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _decode_param(reader: _Reader) -> Param:
    (raw_type,) = reader.unpack("<i")
    try:
        kind = ParamType(raw_type)
    except ValueError as exc:
        raise LevelFormatError(f"unknown parameter type {raw_type}") from exc
    raw = reader.take(PARAM_VALUE_SIZE)
    if kind is ParamType.BYTE:
        value = raw[0]
    elif kind is ParamType.INTEGER:
        (value,) = struct.unpack_from("<i", raw)
    elif kind is ParamType.FLOAT:
        (value,) = struct.unpack_from("<f", raw)
    elif kind is ParamType.BOOL:
        value = raw[0] != 0
    elif kind is ParamType.STRING:
        value = _decode_text(raw)
    else:
        value = None
    return Param(kind, value)


def _decode_connection(reader: _Reader) -> ActorConnection:
    (my_output,) = reader.unpack("<B")
    target_name = reader.text(ACTOR_NAME_SIZE)
    (target_input,) = reader.unpack("<B")
    override = _decode_param(reader)
    return ActorConnection(
        target_input=target_input,
        my_output=my_output,
        out_actor_name=target_name,
        out_param_override=override,
    )


def _decode_actor(reader: _Reader) -> Actor:
    x, y, rotation, actor_type, pa, pb, pc, pd = reader.unpack("<fffiBBBB")
    name = reader.text(ACTOR_NAME_SIZE)
    (count,) = reader.unpack("<I")
    connections = [_decode_connection(reader) for _ in range(count)]
    return Actor(
        position=Vector2(x, y),
        rotation=rotation,
        actor_type=actor_type,
        param_a=pa,
        param_b=pb,
        param_c=pc,
        param_d=pd,
        name=name,
        io_connections=connections,
    )


def _decode_wall(reader: _Reader) -> Wall:
    ax, ay, bx, by = reader.unpack("<ffff")
    tex = reader.text(TEXTURE_SIZE)
    uv_scale, uv_offset = reader.unpack("<ff")
    return Wall(Vector2(ax, ay), Vector2(bx, by), tex, uv_scale, uv_offset)


def decode_level(data: bytes) -> Level:
    """Parse a level from its binary form."""
    reader = _Reader(data)
    name = reader.text(NAME_SIZE)
    course_num, has_ceiling = reader.unpack("<hB")
    ceil_or_sky_tex = reader.text(TEXTURE_SIZE)
    floor_tex = reader.text(TEXTURE_SIZE)
    music = reader.text(TEXTURE_SIZE)
    fog_color, fog_start, fog_end = reader.unpack("<Iff")
    px, py, prot = reader.unpack("<fff")
    (actor_count,) = reader.unpack("<I")
    actors = [_decode_actor(reader) for _ in range(actor_count)]
    (wall_count,) = reader.unpack("<I")
    walls = [_decode_wall(reader) for _ in range(wall_count)]
    return Level(
        name=name,
        course_num=course_num,
        actors=actors,
        walls=walls,
        has_ceiling=bool(has_ceiling),
        ceil_or_sky_tex=ceil_or_sky_tex,
        floor_tex=floor_tex,
        music=music,
        fog_color=fog_color,
        fog_start=fog_start,
        fog_end=fog_end,
        player=Player(Vector2(px, py), prot),
    )


def write_level(level: Level, path: PathLike) -> None:
    """Write a level to ``path``."""
    data = encode_level(level)
    with open(path, "wb") as handle:
        handle.write(data)


def read_level(path: PathLike) -> Level:
    """Read a level from ``path``."""
    with open(path, "rb") as handle:
        return decode_level(handle.read())