# framekit

Small, dependency-free building blocks for programs built around a frame loop.

| Module | What it holds |
| --- | --- |
| `framekit.strings` | `split_string`, `starts_with`, `contains`, `replace_all`, `format_string` |
| `framekit.mathutil` | `PI`, `modulo`, `to_radian`, `to_degree`, `random_int`, `random_float`, `clamp` |
| `framekit.paths` | forward-slash path helpers and simple folder utilities |
| `framekit.timer` | `Timer`: per-frame delta, total running time and FPS |
| `framekit.inputstate` | `Keyboard`, `Mouse` and `ButtonStatus`: per-frame button transitions |
| `framekit.binaryfile` | `BinaryWriter`, `BinaryReader`: little-endian binary files |
| `framekit.xmlutil` | XML error codes (`XMLError`, `XMLException`), text processing and value conversion |
| `framekit.xmlnodes` | the node tree: `XMLNode`, `XMLElement`, `XMLAttribute`, `XMLText`, `XMLComment`, `XMLDeclaration`, `XMLUnknown`, `XMLVisitor` |
| `framekit.xmlprinter` | `XMLPrinter`: writes a tree, or direct calls, as XML text |
| `framekit.xmldocument` | `XMLDocument`: parses text and files into a tree and writes it back |

## Installation

```
pip install .
```

## Strings, math and paths

```python
from framekit.strings import split_string, replace_all, format_string
from framekit.mathutil import clamp, modulo
from framekit.paths import get_directory_name, get_extension, get_file_name_without_extension

split_string("a,b,,c", ",")                           # ['a', 'b', 'c']  (empty pieces dropped)
replace_all("C:\\data\\file.txt", "\\", "/")          # 'C:/data/file.txt'
format_string("%d items", 3)                          # '3 items'
clamp(12.0, 0.0, 10.0)                                # 10.0
modulo(7.0, 3.0)                                      # 1.0

get_directory_name("models\\tank.model")              # 'models/'
get_extension("models/tank.model")                    # 'model'
get_file_name_without_extension("models/tank.model")  # 'tank'
```

`combine` concatenates its parts as given, without adding separators.
`get_files(path, pattern, find_sub_folder)` lists files under `path` (used as a
prefix, so it should end with `/`) whose names match a shell-style `pattern`.
`create_folders` creates each directory along a path in turn.

## Frame timer

`Timer` takes a tick counter and its ticks per second; with no arguments it uses
`time.perf_counter_ns`. It must be started before `update` does anything.

```python
from framekit.timer import Timer

ticks = iter([0, 16, 32])
timer = Timer(lambda: next(ticks), 1000)
timer.start()
timer.update()
timer.delta      # 0.016
timer.running    # 0.016
```

`fps` is recomputed every half second of ticks. Starting a running timer or
stopping a stopped one raises `RuntimeError`.

## Input state

`Keyboard` and `Mouse` do not read any device themselves: each frame you pass in
the key codes or button indexes that are held, and they work out the transition.

```python
from framekit.inputstate import Keyboard, Mouse

keyboard = Keyboard()
keyboard.update({65})
keyboard.down(65)     # True
keyboard.update({65})
keyboard.press(65)    # True
keyboard.update(())
keyboard.up(65)       # True

mouse = Mouse(double_click_time=500, clock=lambda: 0)
mouse.update({0}, (10, 20))   # buttons held (0 left, 1 right, 2 middle), cursor position
mouse.down(0)                 # True
mouse.move_value              # (10.0, 20.0, 0.0)
```

A second press and release of a button within `double_click_time` milliseconds
reports `double_click`. `Mouse.input_proc(message, wparam, lparam)` accepts
window-message style values (`WM_MOUSEMOVE`, `WM_LBUTTONDOWN`, `WM_MOUSEWHEEL`)
to update `position` and the wheel.

## Binary files

```python
from framekit.binaryfile import BinaryWriter, BinaryReader

with BinaryWriter("scene.bin") as writer:
    writer.write_int(3)
    writer.write_vector3((1.0, 2.0, 3.0))
    writer.write_string("player")

with BinaryReader("scene.bin") as reader:
    count = reader.read_int()          # 3
    position = reader.read_vector3()   # (1.0, 2.0, 3.0)
    name = reader.read_string()        # 'player'
```

Values are little-endian; floats, vectors, colours, quaternions and 4x4 matrices
are 32-bit floats. Strings are a 32-bit length followed by UTF-8 bytes.
`write_color3f` drops alpha and `read_color3f` returns alpha 1.0. Reading past the
end of the file raises `EOFError`.

## XML

```python
from framekit.xmldocument import XMLDocument

doc = XMLDocument()
doc.parse('<root><item id="7">hello</item></root>')
item = doc.first_child_element("root").first_child_element("item")
item.int_attribute("id", 0)      # 7
item.get_text()                  # 'hello'
doc.to_string(compact=True)      # '<root><item id="7">hello</item></root>'
```

Trees can also be built with `new_element`, `new_text`, `new_comment`,
`new_declaration` and `new_unknown` and linked with `insert_end_child`,
`insert_first_child` and `insert_after_child`. `save_file` and `load_file` work
with UTF-8 files; `print` writes to standard output or to a given `XMLPrinter`.
Passing `Whitespace.COLLAPSE` to `XMLDocument` squeezes whitespace runs in text,
and `process_entities=False` leaves entities undecoded.

Parse and file failures raise `framekit.xmlutil.XMLException`, which carries an
`XMLError` code and a line number; the document also keeps the last error in
`error_id`, `error_name`, `error_str` and `error_line_num`. Typed queries such
as `query_int_text` or `query_float_value` raise `XMLException` when the text
cannot be converted; the `*_attribute` and `*_text` forms return a default instead.

## What it does not do

framekit has no window, rendering, GUI or file dialogs, and does not poll the
keyboard or mouse: input states must come from whatever toolkit drives your
frame loop.

## Running the tests

```
pip install .[test]
pytest
```