"""Actor definitions loaded from the game's JSON ``.def`` files."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any, Iterator, Optional, Union

logger = logging.getLogger(__name__)

DEF_FILE_VERSION = 2
NAME_LIMIT = 63

PathLike = Union[str, "os.PathLike[str]"]


class DefinitionError(ValueError):
    """Raised when a definition file cannot be read or is malformed."""


class SignalParamType(IntEnum):
    """Type of the parameter carried by an actor signal."""

    NONE = 0
    INT = 1
    FLOAT = 2
    STRING = 3
    ACTOR = 4


class RenderType(IntEnum):
    """How an actor is drawn in the editor."""

    NORMAL = 0
    TRIGGER = 1


_SIGNAL_TYPES = {
    "int": SignalParamType.INT,
    "float": SignalParamType.FLOAT,
    "string": SignalParamType.STRING,
    "actor": SignalParamType.ACTOR,
}


@dataclass(frozen=True)
class ActorDefParam:
    """A named byte parameter with its allowed range."""

    name: str
    min: int
    max: int


@dataclass(frozen=True)
class ActorDefSignal:
    """A named input or output signal."""

    name: str
    param_type: SignalParamType = SignalParamType.NONE


@dataclass(frozen=True)
class ActorDefinition:
    """Everything the editor knows about one actor type."""

    actor_type: int
    actor_name: str
    render_type: RenderType = RenderType.NORMAL
    params: tuple[ActorDefParam, ...] = field(default_factory=tuple)
    inputs: tuple[ActorDefSignal, ...] = field(default_factory=tuple)
    outputs: tuple[ActorDefSignal, ...] = field(default_factory=tuple)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _truncate(text: str) -> str:
    return text.encode("utf-8")[:NAME_LIMIT].decode("utf-8", errors="ignore")


def _parse_signal(raw: Any, path: PathLike, kind: str) -> ActorDefSignal:
    if not isinstance(raw, dict):
        raise DefinitionError(f"Invalid def file format: {path}")
    name = raw.get("name")
    param_type = raw.get("paramType")
    if not isinstance(name, str) or not isinstance(param_type, str):
        raise DefinitionError(
            f"Invalid def file format: {path} (invalid actor {kind} - missing or incorrect keys)"
        )
    return ActorDefSignal(_truncate(name), _SIGNAL_TYPES.get(param_type, SignalParamType.NONE))


def _parse_param(raw: Any, path: PathLike) -> ActorDefParam:
    if not isinstance(raw, dict):
        raise DefinitionError(f"Invalid def file format: {path}")
    name = raw.get("name")
    low = raw.get("min")
    high = raw.get("max")
    if not isinstance(name, str) or not _is_int(low) or not _is_int(high):
        raise DefinitionError(
            f"Invalid def file format: {path} (invalid actor parameter - missing or incorrect keys)"
        )
    return ActorDefParam(_truncate(name), low & 0xFF, high & 0xFF)


def _parse_actor(raw: Any, path: PathLike) -> ActorDefinition:
    if not isinstance(raw, dict):
        raise DefinitionError(
            f"Invalid def file format: {path} (invalid actor definition - not object)"
        )
    if (
        not _is_int(raw.get("id"))
        or not isinstance(raw.get("name"), str)
        or not isinstance(raw.get("params"), list)
        or not isinstance(raw.get("inputs"), list)
        or not isinstance(raw.get("outputs"), list)
        or not isinstance(raw.get("render_type"), str)
    ):
        raise DefinitionError(
            f"Invalid def file format: {path} "
            "(invalid actor definition - missing or incorrect keys)"
        )
    render_type = RenderType.TRIGGER if raw["render_type"] == "trigger" else RenderType.NORMAL
    return ActorDefinition(
        actor_type=raw["id"],
        actor_name=_truncate(raw["name"]),
        render_type=render_type,
        params=tuple(_parse_param(p, path) for p in raw["params"]),
        inputs=tuple(_parse_signal(s, path, "input") for s in raw["inputs"]),
        outputs=tuple(_parse_signal(s, path, "output") for s in raw["outputs"]),
    )


def scan_asset_folder(game_directory: PathLike, folder_name: str, extension: str) -> list[str]:
    """Names (extension stripped) of entries in ``assets/<folder_name>`` containing ``extension``.

    A missing folder yields an empty list.
    """
    folder = f"{os.fspath(game_directory)}/assets/{folder_name}"
    try:
        entries = os.listdir(folder)
    except OSError:
        logger.warning("Failed to open level directory: %s", folder)
        return []
    return sorted(entry[: len(entry) - len(extension)] for entry in entries if extension in entry)


class GameDefinitions:
    """The set of actor definitions, in the order they were loaded."""

    def __init__(self) -> None:
        self._defs: list[ActorDefinition] = []

    def load_file(self, path: PathLike) -> None:
        """Load one definition file, adding its actors.

        Raises DefinitionError if the file is unreadable, malformed or
        redefines an actor name that is already known.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DefinitionError(f"Failed to open def file: {path}") from exc
        try:
            root = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DefinitionError(f"Failed to parse def file: {path}") from exc

        version = root.get("version") if isinstance(root, dict) else None
        if not _is_int(version):
            raise DefinitionError(
                f"Invalid def file version: {path} (expected {DEF_FILE_VERSION})"
            )
        if version != DEF_FILE_VERSION:
            raise DefinitionError(
                f"Invalid def file version: {version} (expected {DEF_FILE_VERSION})"
            )
        actors = root.get("actors")
        if not isinstance(actors, list):
            raise DefinitionError(f"Invalid def file format: {path} (invalid actors key)")

        known = {d.actor_name for d in self._defs}
        parsed: list[ActorDefinition] = []
        for raw in actors:
            definition = _parse_actor(raw, path)
            if definition.actor_name in known:
                raise DefinitionError(
                    f"Duplicate actor definition {definition.actor_name!r} in {path}"
                )
            known.add(definition.actor_name)
            parsed.append(definition)
        self._defs.extend(parsed)

    def load_directory(self, game_directory: PathLike) -> int:
        """Replace the definitions with those in ``assets/defs``; return how many were loaded."""
        self.clear()
        base = os.fspath(game_directory)
        for name in scan_asset_folder(base, "defs", ".def"):
            self.load_file(f"{base}/assets/defs/{name}.def")
        logger.info("Loaded %d actor definitions", len(self._defs))
        return len(self._defs)

    def clear(self) -> None:
        """Forget every definition."""
        self._defs.clear()

    def get(self, actor_type: int) -> Optional[ActorDefinition]:
        """Definition for ``actor_type``, or None if it is unknown."""
        return next((d for d in self._defs if d.actor_type == actor_type), None)

    def by_load_index(self, index: int) -> ActorDefinition:
        """Definition at position ``index`` in load order."""
        return self._defs[index]

    def _require(self, actor_type: int) -> ActorDefinition:
        definition = self.get(actor_type)
        if definition is None:
            raise KeyError(actor_type)
        return definition

    def output(self, actor_type: int, index: int) -> Optional[ActorDefSignal]:
        """Output signal ``index`` of ``actor_type``, or None if out of range."""
        outputs = self._require(actor_type).outputs
        return outputs[index] if 0 <= index < len(outputs) else None

    def input(self, actor_type: int, index: int) -> Optional[ActorDefSignal]:
        """Input signal ``index`` of ``actor_type``, or None if out of range."""
        inputs = self._require(actor_type).inputs
        return inputs[index] if 0 <= index < len(inputs) else None

    def __len__(self) -> int:
        return len(self._defs)

    def __iter__(self) -> Iterator[ActorDefinition]:
        return iter(self._defs)