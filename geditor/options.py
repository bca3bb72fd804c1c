"""Persistent editor options stored in a small checksummed binary file."""

from __future__ import annotations

import logging
import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

DIRECTORY_SIZE = 260
CHECKSUM_SIZE = 2
OPTIONS_SIZE = CHECKSUM_SIZE + DIRECTORY_SIZE
DEFAULT_OPTIONS_PATH = Path("editor_options.bin")

PathLike = Union[str, "os.PathLike[str]"]


def options_checksum(data: bytes) -> int:
    """16-bit sum of the serialised options, skipping the checksum field.

    The last two bytes of the record are not part of the sum.
    """
    return sum(data[CHECKSUM_SIZE:OPTIONS_SIZE - CHECKSUM_SIZE]) & 0xFFFF


@dataclass
class Options:
    """Editor settings."""

    game_directory: str = ""

    def to_bytes(self) -> bytes:
        """Serialise with a freshly computed checksum."""
        raw = self.game_directory.encode("utf-8")
        if len(raw) > DIRECTORY_SIZE:
            raise ValueError(f"game directory is longer than {DIRECTORY_SIZE} bytes")
        body = raw.ljust(DIRECTORY_SIZE, b"\0")
        checksum = options_checksum(bytes(CHECKSUM_SIZE) + body)
        return struct.pack("<H", checksum) + body

    @classmethod
    def from_bytes(cls, data: bytes) -> Options:
        """Parse a serialised record, checking its size and checksum."""
        if len(data) != OPTIONS_SIZE:
            raise ValueError(f"options record must be {OPTIONS_SIZE} bytes, got {len(data)}")
        (stored,) = struct.unpack_from("<H", data)
        if stored != options_checksum(data):
            raise ValueError("options checksum mismatch")
        directory = data[CHECKSUM_SIZE:].split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(game_directory=directory)


def load_options(path: PathLike = DEFAULT_OPTIONS_PATH) -> Options:
    """Load options from ``path``, falling back to defaults if missing or invalid."""
    try:
        data = Path(path).read_bytes()
    except OSError:
        logger.info("Options file not found, using default options")
        return Options()
    if len(data) != OPTIONS_SIZE:
        logger.warning("Options file is invalid, using defaults")
        return Options()
    try:
        options = Options.from_bytes(data)
    except ValueError:
        logger.warning("Options file checksum invalid, using defaults")
        return Options()
    logger.info("Valid options file found, loading options")
    return options


def save_options(options: Options, path: PathLike = DEFAULT_OPTIONS_PATH) -> None:
    """Write options to ``path``."""
    Path(path).write_bytes(options.to_bytes())


def is_valid_game_directory(directory: str) -> bool:
    """True if ``directory`` holds a ``game`` or ``game.exe`` and an ``assets`` folder."""
    directory = os.fspath(directory)
    has_game = os.path.exists(f"{directory}/game") or os.path.exists(f"{directory}/game.exe")
    if not has_game or not os.path.exists(f"{directory}/assets"):
        logger.warning("Invalid game directory: %s", directory)
        return False
    return True