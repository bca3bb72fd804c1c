"""Colours and a recording canvas for the editor's 2D view."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from geditor.vector import Vector2


@dataclass(frozen=True)
class RGBA:
    """A colour with components in the range 0 to 1."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_uint(cls, value: int) -> RGBA:
        """Colour from a packed 0xRRGGBBAA integer."""
        return cls(
            ((value >> 24) & 0xFF) / 255.0,
            ((value >> 16) & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            (value & 0xFF) / 255.0,
        )

    def to_uint(self) -> int:
        """Packed 0xRRGGBBAA integer for this colour."""
        channels = (self.red, self.green, self.blue, self.alpha)
        result = 0
        for channel in channels:
            result = (result << 8) | max(0, min(255, round(channel * 255)))
        return result


class DrawKind(Enum):
    """Kind of a recorded drawing operation."""

    CLEAR = "clear"
    RECT = "rect"
    AREA = "area"
    RECT_OUTLINE = "rect_outline"
    LINE = "line"
    TEXT = "text"


@dataclass(frozen=True)
class DrawCommand:
    """One drawing operation with its geometry and colour."""

    kind: DrawKind
    color: RGBA
    start: Optional[Vector2] = None
    end: Optional[Vector2] = None
    size: Optional[Vector2] = None
    rotation: float = 0.0
    thickness: float = 0.0
    text: str = ""
    font_size: float = 0.0


@dataclass
class Canvas:
    """A drawing surface of a given pixel size that records what is drawn on it."""

    width: float
    height: float
    commands: list[DrawCommand] = field(default_factory=list)

    @property
    def size(self) -> Vector2:
        """Size of the surface in pixels."""
        return Vector2(self.width, self.height)

    def clear(self, color: RGBA) -> None:
        """Fill the whole surface, discarding everything drawn so far."""
        self.commands.clear()
        self.commands.append(DrawCommand(DrawKind.CLEAR, color))

    def rect(self, start: Vector2, size: Vector2, color: RGBA) -> None:
        """Filled axis-aligned rectangle from ``start`` extending by ``size``."""
        self.commands.append(DrawCommand(DrawKind.RECT, color, start=start, size=size))

    def area(self, center: Vector2, size: Vector2, rotation: float, color: RGBA) -> None:
        """Filled rectangle of ``size`` centred on ``center``, rotated by ``rotation`` radians."""
        self.commands.append(
            DrawCommand(DrawKind.AREA, color, start=center, size=size, rotation=rotation)
        )

    def rect_outline(self, start: Vector2, size: Vector2, color: RGBA, thickness: float) -> None:
        """Outline of a rectangle."""
        self.commands.append(
            DrawCommand(DrawKind.RECT_OUTLINE, color, start=start, size=size, thickness=thickness)
        )

    def line(self, start: Vector2, end: Vector2, color: RGBA, thickness: float) -> None:
        """Straight line from ``start`` to ``end``."""
        self.commands.append(
            DrawCommand(DrawKind.LINE, color, start=start, end=end, thickness=thickness)
        )

    def text(self, text: str, position: Vector2, size: float, color: RGBA) -> None:
        """Monospace text with its baseline starting at ``position``."""
        self.commands.append(
            DrawCommand(DrawKind.TEXT, color, start=position, text=text, font_size=size)
        )