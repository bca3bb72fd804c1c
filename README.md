# geditor

`geditor` is the editing core of a level editor for a small 2D top-down game.
It holds levels in memory and reads and writes the game's binary level format.
It loads actor definitions from the game's asset folder. It also runs the
editor's viewport logic: panning, zooming, grid snapping, hovering, selecting
and dragging. Drawing goes to a canvas that records commands, and any GUI
toolkit can play those commands back.

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Vectors

`geditor.vector.Vector2` is an immutable 2D vector. It supports `+`, `-`,
`* scalar` and `/ scalar`, and has the methods `distance`, `length`,
`normalized`, `dot`, `rotated` and `angle_to`, plus the constructors `splat`
and `from_angle`. `distance_to_line(start, end, point)` returns the shortest
distance from a point to a line segment.

## Levels and the level file

`geditor.model` defines `Level`, `Wall`, `Actor`, `ActorConnection`, `Player`,
`Param` and `ParamType`, together with `deg_to_rad` and `rad_to_deg`.
`Level.new()` returns an empty level that has the editor's defaults: the name
"Unnamed Level", course number -1, a sky, fog from 50 to 100 and the player
facing -90 degrees.

```python
from geditor.model import Level, Wall
from geditor.vector import Vector2
from geditor.levelfile import write_level, read_level

level = Level.new()
level.walls.append(Wall(a=Vector2(0, 0), b=Vector2(4, 0)))
write_level(level, "castle.bin")

loaded = read_level("castle.bin")
print(loaded.name, len(loaded.walls))
```

`encode_level` and `decode_level` do the same work on `bytes`. Decoding raises
`LevelFormatError` when the data is truncated or holds an unknown parameter
type. Encoding raises `ValueError` when a name or texture is too long for its
fixed-size field, or when a number does not fit its field.

## Editor options

`geditor.options.Options` holds the game directory. `to_bytes` and
`from_bytes` convert it to and from a fixed-size record protected by a
checksum (`options_checksum`). `load_options(path)` reads the record and falls
back to default options when the file is missing, has the wrong size or fails
its checksum. `save_options(options, path)` writes the record. Both functions
default to `editor_options.bin` in the current directory.
`is_valid_game_directory(directory)` checks that a directory holds a `game` or
`game.exe` and an `assets` folder.

## Actor definitions

```python
from geditor.gamedefs import GameDefinitions

defs = GameDefinitions()
defs.load_directory("/path/to/game")
for definition in defs:
    print(definition.actor_type, definition.actor_name, definition.render_type)
```

Definition files are version 2 JSON documents stored as `assets/defs/*.def`.
`load_file` raises `DefinitionError` when a file cannot be read, is malformed
or repeats an actor name that is already loaded. `get(actor_type)` returns the
definition for a type, or `None` if the type is unknown. `by_load_index`,
`input` and `output` look up definitions and their signals.
`scan_asset_folder(game_directory, folder, extension)` lists asset names
without their extension, in sorted order.

## Input, drawing and the editor

`geditor.input.InputTracker` takes mouse events (`mouse_enter`, `motion`,
`scroll`, `button_pressed`, `button_released` and the rest). It answers
per-frame queries such as `is_just_pressed`, `mouse_position` and
`relative_motion`. Call `tick()` and `end_frame()` once per frame.

`geditor.editor.Editor` combines a level, the game definitions, an input
tracker and the view state: scroll position, zoom from 4 to 40, and a snap size
chosen from 1/16 to 8. Each frame, call `update()` to apply the input. That
covers panning with the right button, zooming with the wheel, selecting and
dragging with the left button, and placing walls or actors according to
`add_request`. Then call `render(canvas)` with a `geditor.drawing.Canvas`.
`canvas.commands` then holds the frame as a list of `DrawCommand` values.
`RGBA.from_uint` and `RGBA.to_uint` convert between colours and packed
`0xRRGGBBAA` integers.

## I/O connections

`geditor.connections.ConnectionEditor` edits the connections on one actor that
link its outputs to the inputs of other actors. It can add and delete
connections and set the output, the target actor, the target input, and the
type and value of the parameter override. `describe(connection)` returns a
`ConnectionRow` holding the text the connections table shows; unresolvable
parts read "unknown". `find_target_actor`, `named_actors` and
`param_display_text` are also available on their own.

## What this package does not do

There is no window, menu bar, sidebar or dialog, and no command to start. The
package offers no on-screen editing. A GUI must feed mouse events to
`InputTracker`, call `Editor.update` and `Editor.render`, paint the recorded
`DrawCommand` list, and wire its own widgets to the model and to
`ConnectionEditor`. Levels are stored only in the uncompressed binary format.