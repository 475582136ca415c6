# pixelkit

Building blocks for 2D graphics code, in pure Python with no dependencies:

- `pixelkit.color.Color` — an immutable RGBA color with float components
  from 0.0 to 1.0, named constants (`BLACK`, `WHITE`, `RED`, `GRAY`,
  `TRANSPARENT`, ...) and constructors from floats, 0–255 integers and hex
  values.
- `pixelkit.vector.Vector2` — an immutable two-component vector supporting
  `+` and `-` (also with plain 2-tuples), `*` and `/` by a number, magnitude,
  normalization, 90-degree rotation, rounding and conversions between float
  and 32-bit integer components.
- `pixelkit.errors` — `GraphicsError`, an exception carrying a description,
  an optional cause and the stack where it was created, and `wrap_errors`,
  which turns any exception raised in a block into a `GraphicsError`.
- `pixelkit.layout` — word splitting and line layout: wrapping to a width,
  left/center/right alignment, tracking, line spacing and trimming of
  leading whitespace on each line.
- `pixelkit.fonts` — `Font`, which reads glyph metrics from TrueType and
  OpenType data, and `FontFamily`, which falls back through several fonts in
  order of priority. Both can lay out text.

## Installation

```
pip install .
```

## Colors

```python
from pixelkit.color import Color

sky = Color.from_rgb(0.8, 0.9, 1.0)
orange = Color.from_hex_rgb(0xFF5511)      # same as Color.from_int_rgb(0xFF, 0x55, 0x11)
faded = Color.from_hex_argb(0xAAFF5511)    # alpha in the high byte
print(orange.subjective_brightness())      # 0.299*r + 0.587*g + 0.114*b
```

Integer components outside 0–255, and hex values that do not fit in 32 bits,
raise `ValueError`. `from_hex_argb` with no alpha bits gives a fully
transparent color.

## Vectors

```python
from pixelkit.vector import Vector2

position = Vector2(10, 4) + (5, 16)        # Vector2(x=15, y=20)
offset = Vector2(3, 10) - Vector2.new_x(8) # Vector2(x=-5, y=10)
unit = Vector2(3.0, 4.0).normalize()       # None for a zero-length vector
rounded = Vector2(1.5, -2.5).round()       # halves round away from zero
x, y = position
```

`into_i32()` and `into_u32()` cast like numeric conversions (floats
saturate, integers wrap); `try_into_i32()` instead raises `TypeError` for
non-integers and `OverflowError` for values outside the 32-bit signed range.

## Errors

```python
from pixelkit.errors import GraphicsError, wrap_errors

with wrap_errors("Failed to read settings"):
    int("not a number")                    # raises GraphicsError, cause is the ValueError

err = GraphicsError("Upload failed").context("Frame could not be drawn")
```

`wrap_errors` can also be used as a decorator.

## Text layout

```python
from pixelkit.fonts import Font, FontFamily
from pixelkit.layout import TextAlignment, TextOptions

with open("MyFont.ttf", "rb") as handle:
    font = Font(handle.read())

options = TextOptions().with_wrap_to_width(500.0, TextAlignment.CENTER)
block = font.layout_text("Hello world!", 48.0, options)

print(block.size())
for line in block.lines:
    print(line.baseline_position, line.width, line.height)
    for glyph in line.glyphs:
        print(glyph.user_index, glyph.glyph_id, glyph.position_x, glyph.advance_width)
```

The scale is the font's pixel height (ascender minus descender). Text is
NFC-normalised before layout; use `layout_text_from_unindexed_codepoints`
or `layout_text_from_codepoints` with your own `Codepoint` values to map
each laid-out glyph back to its input character. Characters a font lacks
fall back to `□`, then `?`, and are skipped if neither exists.
`FontFamily([primary, fallback])` searches its fonts in order.

Data that cannot be read as a font raises `GraphicsError("Failed to load
font")`. Each `Font` gets a unique id, used for equality and hashing.

## What this package does not do

pixelkit computes positions and metrics only. It does not open windows,
draw anything, rasterize glyph outlines or talk to a GPU. Fonts are read for
their character maps (cmap formats 0, 4, 6 and 12), horizontal advances,
vertical metrics and kerning pairs from the `kern` table; kerning in `GPOS`
and other advanced OpenType layout features are not applied.

## Tests

```
pip install .[test]
pytest
```