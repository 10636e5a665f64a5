# fdfview

Pure-Python building blocks for a wireframe height-map viewer. The package
reads `.fdf` height maps, holds RGBA pixel images in memory, decodes XPM42
images and models a window with its images, render order, input events and
per-frame hooks. It needs no display and runs entirely in memory.

## Installation

```
pip install .
```

The package has no dependencies outside the standard library. To run the
tests, install the `test` extra:

```
pip install ".[test]"
pytest
```

## The `.fdf` format

Each line of an `.fdf` file is one row of the map. Each space-separated word
is one point and gives its height. A colour can follow the height after a
comma, written as a two-character prefix such as `0x` and then hex digits:

```
0 0 0 0
0 10,0xff0000 10 0
0 0 0 0
```

A point with no colour is white (`ffffff`).

## Loading a map (`fdfview.fdfmap`)

```python
from fdfview.fdfmap import has_fdf_extension, load_map

if has_fdf_extension("maps/42.fdf"):
    height_map = load_map("maps/42.fdf")
    print(height_map.width, height_map.length)
    node = height_map.at(1, 1)
    print(node.z, node.color, hex(node.abgr))
```

- `has_fdf_extension` is true when the text after the first dot is exactly
  `fdf`.
- `load_map` returns a `HeightMap` whose `rows` are lists of `MapNode`. The
  width is the number of points on the first line; longer rows are cut to
  it. A map that is empty, has no points on its first line, or has a row
  shorter than the first raises `ValueError`.
- `MapNode` holds `z` and `color` (hex digits); `abgr` gives the colour as an
  opaque ABGR integer.
- `parse_line`, `parse_point`, `split_words`, `atoi` and `color_hex` handle
  single lines, words and fields. `atoi` reads a leading signed decimal and
  wraps to 32 bits; `color_hex` keeps at most six characters after the
  prefix.

## Colours (`fdfview.colors`)

```python
from fdfview.colors import hex_to_abgr, rgba_to_mono, strtol, fnv_hash

hex_to_abgr("ff0000")      # 0xFF0000FF: opaque red, channels in ABGR order
hex_to_abgr("fff")         # 0xFFFFFFFF: anything not six characters is white
rgba_to_mono(0x336699FF)   # grey with the alpha byte kept
strtol("0x1A", 16)         # 26
```

`strtol` accepts only bases 10 and 16 (other bases raise `ValueError`),
skips leading whitespace and stops at the first non-digit. `fnv_hash` is the
64-bit FNV-1a hash used to look up XPM42 colour tables.

## Images and textures (`fdfview.canvas`)

`Image` is a width × height buffer of 4-byte RGBA pixels. Dimensions must be
between 1 and 32767.

- `Image.put_pixel(x, y, color)` and `Image.get_pixel(x, y)` write and read a
  pixel, red in the first byte.
- `Image.resize(width, height)` rescales with nearest-neighbour sampling.
- `image_from_texture` copies a `Texture` into a new `Image`.
- `Instance` is one placement of an image; `DrawCall` refers to one
  instance, and `sort_render_queue` orders draw calls by depth, back to
  front.

## XPM42 images (`fdfview.xpm42`)

```python
from fdfview.xpm42 import load_xpm42

xpm = load_xpm42("icon.xpm42")
image = image_from_texture(xpm.texture)
```

The file starts with a `!XPM42` line, then `width height colours cpp mode`
where mode is `c` (colour) or `m` (monochrome), then one `chars #RRGGBBAA`
line per colour and one line of pixel characters per row.

## A headless window (`fdfview.window`)

```python
from fdfview.window import Mlx, Setting, set_setting

set_setting(Setting.HEADLESS, True)
mlx = Mlx(400, 400, "MLX42", False)
img = mlx.new_image(200, 200)
index = mlx.image_to_window(img, 100, 100)

def on_frame(param):
    param.close_window()

mlx.loop_hook(on_frame, mlx)
mlx.loop()
print(mlx.frames, mlx.render_order())
mlx.delete_image(img)
mlx.terminate()
```

- `loop` runs frames until the window is asked to close; each frame runs
  the loop hooks in the order they were added.
- `image_to_window` gives each new instance the next depth;
  `set_instance_depth` changes it, and `render_order` returns the enabled
  draw calls sorted back to front.
- Settings changed with `set_setting` apply to windows created afterwards.
- After `terminate`, further calls raise `RuntimeError`.

Input goes through `mlx.events`, a `fdfview.events.WindowEvents`. Register
callbacks with `key_hook`, `scroll_hook`, `mouse_hook`, `cursor_hook`,
`close_hook` and `resize_hook`, and fire events from code with `press_key`,
`release_key`, `scroll`, `press_mouse`, `release_mouse`, `move_cursor`,
`request_close` and `set_window_size`. `is_key_down`, `is_mouse_down` and
`get_mouse_pos` report the current state.

## Errors (`fdfview.errors`)

Failures in images and XPM42 loading raise `MlxError`, whose `code` is an
`ErrorCode`. `strerror` gives the message for a code.

## What the package does not do

There is no command-line viewer and nothing is shown on screen: the window
is an in-memory model. The package does not project a height map into an
isometric wireframe or draw its lines into an image, and it does not load
PNG files or render text.