"""TrueType and OpenType fonts able to lay out text."""

from __future__ import annotations

import itertools
import struct
import threading
from bisect import bisect_left
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from pixelkit.errors import GraphicsError
from pixelkit.layout import FontGlyph, LineVerticalMetrics, TextLayout

_FONT_IDS = itertools.count(10000)
_FONT_ID_LOCK = threading.Lock()

_SFNT_VERSIONS = {b"\x00\x01\x00\x00", b"true", b"OTTO"}

_KERN_HORIZONTAL = 0x1
_KERN_MINIMUM = 0x2
_KERN_CROSS_STREAM = 0x4


def _next_font_id() -> int:
    with _FONT_ID_LOCK:
        return next(_FONT_IDS)


class _CharacterMap(Protocol):
    def lookup(self, code: int) -> int: ...


@dataclass(frozen=True)
class _DirectMap:
    """Formats 0 and 6: an explicit table of glyph ids."""

    glyphs: Dict[int, int]

    def lookup(self, code: int) -> int:
        return self.glyphs.get(code, 0)


@dataclass(frozen=True)
class _SegmentMap:
    """Format 4: segment mapping to delta values, for the Basic Multilingual Plane."""

    data: bytes
    starts: Tuple[int, ...]
    ends: Tuple[int, ...]
    deltas: Tuple[int, ...]
    range_offsets: Tuple[int, ...]
    range_offsets_pos: int

    def lookup(self, code: int) -> int:
        if code > 0xFFFF:
            return 0
        index = bisect_left(self.ends, code)
        if index == len(self.ends) or self.starts[index] > code:
            return 0
        delta = self.deltas[index]
        range_offset = self.range_offsets[index]
        if range_offset == 0:
            return (code + delta) & 0xFFFF
        pos = (
            self.range_offsets_pos
            + 2 * index
            + range_offset
            + 2 * (code - self.starts[index])
        )
        if pos + 2 > len(self.data):
            return 0
        (glyph,) = struct.unpack_from(">H", self.data, pos)
        return (glyph + delta) & 0xFFFF if glyph else 0


@dataclass(frozen=True)
class _GroupMap:
    """Format 12: segmented coverage over the whole Unicode range."""

    starts: Tuple[int, ...]
    ends: Tuple[int, ...]
    first_glyphs: Tuple[int, ...]

    def lookup(self, code: int) -> int:
        index = bisect_left(self.ends, code)
        if index == len(self.ends) or self.starts[index] > code:
            return 0
        return self.first_glyphs[index] + (code - self.starts[index])


def _table_directory(data: bytes) -> Dict[str, bytes]:
    base = 0
    if data[:4] == b"ttcf":
        num_fonts, first_offset = struct.unpack_from(">II", data, 8)
        if num_fonts == 0:
            raise ValueError("font collection is empty")
        base = first_offset
    if data[base : base + 4] not in _SFNT_VERSIONS:
        raise ValueError("unrecognised font format")
    (num_tables,) = struct.unpack_from(">H", data, base + 4)
    start = base + 12
    records = data[start : start + 16 * num_tables]
    if len(records) != 16 * num_tables:
        raise ValueError("truncated table directory")

    tables: Dict[str, bytes] = {}
    for tag, _checksum, offset, length in struct.iter_unpack(">4sIII", records):
        if offset + length > len(data):
            raise ValueError(f"table {tag!r} extends past the end of the data")
        tables[tag.decode("latin-1")] = data[offset : offset + length]
    return tables


def _parse_format4(sub: bytes) -> _SegmentMap:
    (seg_x2,) = struct.unpack_from(">H", sub, 6)
    count = seg_x2 // 2
    ends = struct.unpack_from(f">{count}H", sub, 14)
    starts = struct.unpack_from(f">{count}H", sub, 16 + seg_x2)
    deltas = struct.unpack_from(f">{count}h", sub, 16 + 2 * seg_x2)
    range_offsets_pos = 16 + 3 * seg_x2
    range_offsets = struct.unpack_from(f">{count}H", sub, range_offsets_pos)
    return _SegmentMap(sub, starts, ends, deltas, range_offsets, range_offsets_pos)


def _parse_format12(sub: bytes) -> _GroupMap:
    (num_groups,) = struct.unpack_from(">I", sub, 12)
    raw = sub[16 : 16 + 12 * num_groups]
    if len(raw) != 12 * num_groups:
        raise ValueError("truncated cmap groups")
    groups = list(struct.iter_unpack(">III", raw))
    return _GroupMap(
        tuple(start for start, _, _ in groups),
        tuple(end for _, end, _ in groups),
        tuple(glyph for _, _, glyph in groups),
    )


def _parse_format0(sub: bytes) -> _DirectMap:
    ids = struct.unpack_from(">256B", sub, 6)
    return _DirectMap({code: glyph for code, glyph in enumerate(ids) if glyph})


def _parse_format6(sub: bytes) -> _DirectMap:
    first_code, entry_count = struct.unpack_from(">HH", sub, 6)
    ids = struct.unpack_from(f">{entry_count}H", sub, 10)
    return _DirectMap(
        {first_code + offset: glyph for offset, glyph in enumerate(ids) if glyph}
    )


_CMAP_PARSERS = {
    0: _parse_format0,
    4: _parse_format4,
    6: _parse_format6,
    12: _parse_format12,
}


def _is_unicode_encoding(platform: int, encoding: int) -> bool:
    return platform == 0 or (platform == 3 and encoding in (1, 10))


def _parse_cmap(table: bytes) -> List[_CharacterMap]:
    _version, num_records = struct.unpack_from(">HH", table, 0)
    raw = table[4 : 4 + 8 * num_records]
    if len(raw) != 8 * num_records:
        raise ValueError("truncated cmap encoding records")

    maps: List[_CharacterMap] = []
    for platform, encoding, offset in struct.iter_unpack(">HHI", raw):
        if not _is_unicode_encoding(platform, encoding):
            continue
        sub = table[offset:]
        (fmt,) = struct.unpack_from(">H", sub, 0)
        parser = _CMAP_PARSERS.get(fmt)
        if parser is not None:
            maps.append(parser(sub))
    return maps


def _parse_kern(table: Optional[bytes]) -> Dict[Tuple[int, int], int]:
    pairs: Dict[Tuple[int, int], int] = {}
    if not table or len(table) < 4:
        return pairs
    version, num_subtables = struct.unpack_from(">HH", table, 0)
    if version != 0:
        # Only the OpenType layout of the table is understood.
        return pairs

    pos = 4
    for _ in range(num_subtables):
        if pos + 6 > len(table):
            break
        _sub_version, length, coverage = struct.unpack_from(">HHH", table, pos)
        fmt = coverage >> 8
        usable = (
            fmt == 0
            and coverage & _KERN_HORIZONTAL
            and not coverage & (_KERN_MINIMUM | _KERN_CROSS_STREAM)
        )
        if usable:
            (num_pairs,) = struct.unpack_from(">H", table, pos + 6)
            raw = table[pos + 14 : pos + 14 + 6 * num_pairs]
            for left, right, value in struct.iter_unpack(">HHh", raw[: len(raw) - len(raw) % 6]):
                pairs.setdefault((left, right), value)
        if length < 6:
            break
        pos += length
    return pairs


@dataclass(frozen=True)
class _FontTables:
    ascender: int
    descender: int
    line_gap: int
    num_glyphs: int
    advances: Tuple[int, ...]
    character_maps: Tuple[_CharacterMap, ...]
    kerning: Dict[Tuple[int, int], int]


def _parse_font(data: bytes) -> _FontTables:
    tables = _table_directory(data)
    for required in ("head", "hhea", "maxp", "hmtx", "cmap"):
        if required not in tables:
            raise ValueError(f"missing required table {required!r}")

    hhea = tables["hhea"]
    ascender, descender, line_gap = struct.unpack_from(">hhh", hhea, 4)
    (num_h_metrics,) = struct.unpack_from(">H", hhea, 34)
    (num_glyphs,) = struct.unpack_from(">H", tables["maxp"], 4)
    struct.unpack_from(">H", tables["head"], 18)  # units per em must be present

    raw_metrics = tables["hmtx"][: 4 * num_h_metrics]
    if len(raw_metrics) != 4 * num_h_metrics:
        raise ValueError("truncated horizontal metrics")
    advances = tuple(advance for advance, _lsb in struct.iter_unpack(">Hh", raw_metrics))

    return _FontTables(
        ascender=ascender,
        descender=descender,
        line_gap=line_gap,
        num_glyphs=num_glyphs,
        advances=advances,
        character_maps=tuple(_parse_cmap(tables["cmap"])),
        kerning=_parse_kern(tables.get("kern")),
    )


class Font(TextLayout):
    """A TrueType or OpenType font. Each font loaded receives a unique id."""

    def __init__(self, data: bytes) -> None:
        try:
            self._tables = _parse_font(bytes(data))
        except (struct.error, ValueError, UnicodeDecodeError) as err:
            raise GraphicsError("Failed to load font", err) from err
        self._id = _next_font_id()

    @property
    def id(self) -> int:
        """The unique identifier of this font."""
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Font):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Font(id={self._id})"

    def _scale_factor(self, scale: float) -> float:
        height = self._tables.ascender - self._tables.descender
        return scale / height if height else 0.0

    def glyph_index(self, codepoint: str) -> int:
        """The glyph id for ``codepoint``, or 0 if the font has none."""
        code = ord(codepoint)
        for character_map in self._tables.character_maps:
            glyph = character_map.lookup(code)
            if glyph:
                return glyph
        return 0

    def advance_width(self, glyph_id: int, scale: float) -> float:
        """The horizontal advance of a glyph at ``scale`` pixels of height."""
        advances = self._tables.advances
        if not 0 <= glyph_id < self._tables.num_glyphs or not advances:
            return 0.0
        raw = advances[glyph_id] if glyph_id < len(advances) else advances[-1]
        return raw * self._scale_factor(scale)

    def pair_kerning(self, scale: float, first: int, second: int) -> float:
        """The kerning adjustment between two glyphs at ``scale``."""
        return self._tables.kerning.get((first, second), 0) * self._scale_factor(scale)

    def v_metrics(self, scale: float) -> LineVerticalMetrics:
        """Ascent, descent and line gap at ``scale`` pixels of height."""
        factor = self._scale_factor(scale)
        return LineVerticalMetrics(
            ascent=self._tables.ascender * factor,
            descent=self._tables.descender * factor,
            line_gap=self._tables.line_gap * factor,
        )

    def lookup_glyph_for_codepoint(self, codepoint: str) -> Optional[FontGlyph]:
        glyph_id = self.glyph_index(codepoint)
        return FontGlyph(glyph_id, self) if glyph_id else None

    def empty_line_vertical_metrics(self, scale: float) -> LineVerticalMetrics:
        return self.v_metrics(scale)


@dataclass(frozen=True)
class FontFamily(TextLayout):
    """Fonts in decreasing priority; later fonts supply characters earlier ones lack."""

    fonts: Tuple[Font, ...]

    def __init__(self, fonts: Iterable[Font]) -> None:
        object.__setattr__(self, "fonts", tuple(fonts))

    def lookup_glyph_for_codepoint(self, codepoint: str) -> Optional[FontGlyph]:
        for font in self.fonts:
            glyph = font.lookup_glyph_for_codepoint(codepoint)
            if glyph is not None:
                return glyph
        return None

    def empty_line_vertical_metrics(self, scale: float) -> LineVerticalMetrics:
        if not self.fonts:
            return LineVerticalMetrics(0.0, 0.0, 0.0)
        return self.fonts[0].v_metrics(scale)


def _unused(_: Sequence[object]) -> None:  # pragma: no cover
    return None