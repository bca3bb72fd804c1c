"""Editing an actor's I/O connections to other named actors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from geditor.gamedefs import ActorDefSignal, GameDefinitions
from geditor.model import Actor, ActorConnection, Level, Param, ParamType, ParamValue

NAME_LIMIT = 64
UNKNOWN = "unknown"

_INT_MIN = -2147483648
_INT_MAX = 2147483647


def find_target_actor(level: Level, name: str) -> Optional[Actor]:
    """First actor in ``level`` with the non-empty name ``name``, or None."""
    return next((actor for actor in level.actors if actor.name and actor.name == name), None)


def named_actors(level: Level) -> list[str]:
    """Names of the actors that have one, in level order."""
    return [actor.name for actor in level.actors if actor.name]


def param_display_text(param: Param) -> str:
    """Short human-readable form of a parameter override."""
    kind = ParamType(param.type)
    if kind is ParamType.BYTE:
        return f"{int(param.value)} (byte)"
    if kind is ParamType.INTEGER:
        return f"{int(param.value)} (int)"
    if kind is ParamType.FLOAT:
        return f"{float(param.value):.2f}"
    if kind is ParamType.BOOL:
        return f"{int(bool(param.value))} (bool)"
    if kind is ParamType.STRING:
        return f'"{param.value}"'
    return "None"


def _truncate(text: str, limit: int = NAME_LIMIT) -> str:
    return text.encode("utf-8")[:limit].decode("utf-8", errors="ignore")


def _check_byte(value: int, what: str) -> int:
    value = int(value)
    if not 0 <= value <= 255:
        raise ValueError(f"{what} must be between 0 and 255, got {value}")
    return value


@dataclass(frozen=True)
class ConnectionRow:
    """How one connection is shown: output, target actor, target input and override."""

    output: str
    target: str
    target_input: str
    param: str


class ConnectionEditor:
    """Adds, removes and changes the I/O connections of one actor."""

    def __init__(self, level: Level, definitions: GameDefinitions, actor: Actor) -> None:
        self.level = level
        self.definitions = definitions
        self.actor = actor

    @property
    def connections(self) -> list[ActorConnection]:
        """The actor's connections, in order."""
        return self.actor.io_connections

    def add(self) -> ActorConnection:
        """Append a blank connection and return it."""
        connection = ActorConnection(
            target_input=0,
            my_output=0,
            out_actor_name="",
            out_param_override=Param(ParamType.NONE),
        )
        self.actor.io_connections.append(connection)
        return connection

    def delete(self, connection: ActorConnection) -> None:
        """Remove ``connection``; raises ValueError if the actor does not own it."""
        for index, existing in enumerate(self.actor.io_connections):
            if existing is connection:
                del self.actor.io_connections[index]
                return
        raise ValueError("connection does not belong to this actor")

    def set_output(self, connection: ActorConnection, output: int) -> None:
        """Choose which of the actor's outputs fires the connection."""
        connection.my_output = _check_byte(output, "output index")

    def set_target_actor(self, connection: ActorConnection, name: str) -> None:
        """Point the connection at the actor called ``name``."""
        connection.out_actor_name = _truncate(name)

    def set_target_input(self, connection: ActorConnection, target_input: int) -> None:
        """Choose which input of the target actor receives the signal."""
        connection.target_input = _check_byte(target_input, "target input index")

    def set_param_type(self, connection: ActorConnection, param_type: ParamType) -> None:
        """Change the override's type, resetting its value to that type's zero."""
        connection.out_param_override = Param(ParamType(param_type))

    def set_param_value(self, connection: ActorConnection, value: ParamValue) -> None:
        """Set the override's value, checked against its current type."""
        override = connection.out_param_override
        kind = ParamType(override.type)
        if kind is ParamType.BYTE:
            override.value = _check_byte(value, "byte parameter")
        elif kind is ParamType.INTEGER:
            number = int(value)
            if not _INT_MIN <= number <= _INT_MAX:
                raise ValueError(f"integer parameter out of range: {number}")
            override.value = number
        elif kind is ParamType.FLOAT:
            override.value = float(value)
        elif kind is ParamType.BOOL:
            override.value = bool(value)
        elif kind is ParamType.STRING:
            override.value = _truncate(str(value))
        else:
            raise ValueError("a parameter override of type NONE has no value")

    def output_names(self) -> list[str]:
        """Names of the actor's outputs, or an empty list if its type is unknown."""
        definition = self.definitions.get(self.actor.actor_type)
        return [signal.name for signal in definition.outputs] if definition else []

    def input_names(self, connection: ActorConnection) -> list[str]:
        """Names of the target actor's inputs, or an empty list if there is no valid target."""
        target = find_target_actor(self.level, connection.out_actor_name)
        if target is None:
            return []
        definition = self.definitions.get(target.actor_type)
        return [signal.name for signal in definition.inputs] if definition else []

    def _signal(self, actor_type: int, index: int, outputs: bool) -> Optional[ActorDefSignal]:
        if self.definitions.get(actor_type) is None:
            return None
        if outputs:
            return self.definitions.output(actor_type, index)
        return self.definitions.input(actor_type, index)

    def describe(self, connection: ActorConnection) -> ConnectionRow:
        """The row shown for ``connection`` in the connection list."""
        output = self._signal(self.actor.actor_type, connection.my_output, outputs=True)
        output_name = output.name if output is not None else UNKNOWN
        target = find_target_actor(self.level, connection.out_actor_name)
        if target is None:
            target_name = UNKNOWN
            input_name = UNKNOWN
        else:
            target_name = connection.out_actor_name
            signal = self._signal(target.actor_type, connection.target_input, outputs=False)
            input_name = signal.name if signal is not None else UNKNOWN
        return ConnectionRow(
            output=output_name,
            target=target_name,
            target_input=input_name,
            param=param_display_text(connection.out_param_override),
        )