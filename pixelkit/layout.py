"""Text layout: splitting text into words and arranging glyphs into lines."""

from __future__ import annotations

import dataclasses
import unicodedata
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, List, Optional, Protocol, Sequence, Tuple, Union

from pixelkit.vector import Vector2

_U32_MAX = 2**32 - 1


@dataclass(frozen=True)
class Codepoint:
    """A Unicode character tagged with a caller-chosen index."""

    user_index: int
    codepoint: str

    ZERO_WIDTH_SPACE: ClassVar[str] = "\u200b"

    def __post_init__(self) -> None:
        if len(self.codepoint) != 1:
            raise ValueError(f"codepoint must be a single character, got {self.codepoint!r}")
        if not 0 <= self.user_index <= _U32_MAX:
            raise ValueError(f"user index {self.user_index} does not fit in 32 bits")

    @classmethod
    def from_unindexed(cls, characters: Iterable[str]) -> List[Codepoint]:
        """Codepoints indexed by their position in ``characters``, from zero."""
        return [cls(index, char) for index, char in enumerate(characters)]


@dataclass(frozen=True)
class RenderableWord:
    """A run of codepoints that is either all whitespace or contains none."""

    codepoints: Tuple[Codepoint, ...]
    is_whitespace: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "codepoints", tuple(self.codepoints))

    def starting_from(self, location: int) -> RenderableWord:
        """The same word without its first ``location`` codepoints."""
        return RenderableWord(self.codepoints[location:], self.is_whitespace)


class _Newline:
    _instance: ClassVar[Optional[_Newline]] = None

    def __new__(cls) -> _Newline:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NEWLINE"


NEWLINE = _Newline()

Word = Union[RenderableWord, _Newline]

_WORD_BREAKS = {" ", "\t", "\r", "\n", Codepoint.ZERO_WIDTH_SPACE}


def split_words(codepoints: Sequence[Codepoint]) -> List[Word]:
    """Split codepoints into words, single whitespace characters and newlines."""
    result: List[Word] = []
    current: List[Codepoint] = []

    def flush() -> None:
        if current:
            result.append(RenderableWord(tuple(current), False))
            current.clear()

    for token in codepoints:
        char = token.codepoint
        if char in _WORD_BREAKS:
            flush()
            if char == "\n":
                result.append(NEWLINE)
            elif char in (" ", "\t"):
                result.append(RenderableWord((token,), True))
        else:
            current.append(token)
    flush()
    return result


class TextAlignment(Enum):
    """Horizontal alignment of text within the wrapping width."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class TextOptions:
    """Options controlling how text is laid out."""

    tracking: float = 0.0
    wrap_words_after_width: Optional[float] = None
    alignment: TextAlignment = TextAlignment.LEFT
    line_spacing_multiplier: float = 1.0
    trim_each_line: bool = True

    def with_tracking(self, tracking: float) -> TextOptions:
        """Extra space in pixels between each character."""
        return dataclasses.replace(self, tracking=tracking)

    def with_wrap_to_width(self, width: float, alignment: TextAlignment) -> TextOptions:
        """Wrap words after ``width`` pixels, aligning lines within that width."""
        return dataclasses.replace(self, wrap_words_after_width=width, alignment=alignment)

    def with_line_spacing_multiplier(self, multiplier: float) -> TextOptions:
        """Multiply the distance between line baselines by ``multiplier``."""
        return dataclasses.replace(self, line_spacing_multiplier=multiplier)

    def with_trim_each_line(self, trim_each_line: bool) -> TextOptions:
        """Whether whitespace at the start of each line is dropped."""
        return dataclasses.replace(self, trim_each_line=trim_each_line)


@dataclass(frozen=True)
class LineVerticalMetrics:
    """Vertical metrics of a line of text, in pixels."""

    ascent: float
    descent: float
    line_gap: float

    def height(self) -> float:
        """The height of the line."""
        return self.ascent - self.descent


class _GlyphMetricsSource(Protocol):
    id: int

    def advance_width(self, glyph_id: int, scale: float) -> float: ...

    def pair_kerning(self, scale: float, first: int, second: int) -> float: ...

    def v_metrics(self, scale: float) -> LineVerticalMetrics: ...


@dataclass(frozen=True)
class FontGlyph:
    """A glyph identifier within a particular font."""

    glyph_id: int
    font: _GlyphMetricsSource


@dataclass(frozen=True)
class FormattedGlyph:
    """A glyph which has been positioned as part of a line of text."""

    glyph: FontGlyph
    scale: float
    position: Vector2
    user_index: int
    advance_width: float

    @property
    def font_id(self) -> int:
        return self.glyph.font.id

    @property
    def glyph_id(self) -> int:
        return self.glyph.glyph_id

    @property
    def position_x(self) -> float:
        return self.position.x

    def _with_y(self, y: float) -> FormattedGlyph:
        return dataclasses.replace(self, position=Vector2(self.position.x, y))

    def _offset_x(self, offset: float) -> FormattedGlyph:
        return dataclasses.replace(
            self, position=Vector2(self.position.x + offset, self.position.y)
        )


@dataclass(frozen=True)
class FormattedTextBlock:
    """A block of text which has been laid out."""

    lines: Tuple[FormattedTextLine, ...]
    width: float
    height: float

    def size(self) -> Vector2:
        """The width and height of the block in pixels."""
        return Vector2(self.width, self.height)


@dataclass(frozen=True)
class FormattedTextLine:
    """A line of text laid out as part of a block."""

    glyphs: Tuple[FormattedGlyph, ...]
    baseline_position: float
    width: float
    height: float
    ascent: float
    descent: float
    line_gap: float

    def as_block(self) -> FormattedTextBlock:
        """This line alone as a block, keeping its vertical offset."""
        return FormattedTextBlock((self,), self.width, self.height)


class _WordStream:
    def __init__(self, words: Iterable[Word]) -> None:
        self._words = deque(words)
        self._pending: deque = deque()

    def has_next(self) -> bool:
        return bool(self._words or self._pending)

    def peek(self) -> Optional[Word]:
        if self._pending:
            return self._pending[0]
        if self._words:
            return self._words[0]
        return None

    def pop(self) -> Optional[Word]:
        if self._pending:
            return self._pending.popleft()
        if self._words:
            return self._words.popleft()
        return None

    def push_pending(self, word: Word) -> None:
        self._pending.append(word)


@dataclass
class _LineMetrics:
    x_pos: float = 0.0
    max_ascent: float = 0.0
    min_descent: float = 0.0
    max_line_gap: float = 0.0
    last_glyph_id: Optional[int] = None
    last_font_id: Optional[int] = None

    def height(self) -> float:
        return self.max_ascent - self.min_descent

    def place(self, glyph: FontGlyph, scale: float, options: TextOptions) -> Tuple[float, float]:
        """Advance past ``glyph``; return its start position and advance width."""
        font = glyph.font
        if self.last_glyph_id is not None:
            if self.last_font_id == font.id:
                self.x_pos += font.pair_kerning(scale, self.last_glyph_id, glyph.glyph_id)
            self.x_pos += options.tracking

        if self.last_font_id != font.id:
            v_metrics = font.v_metrics(scale)
            self.max_ascent = max(self.max_ascent, v_metrics.ascent)
            self.min_descent = min(self.min_descent, v_metrics.descent)
            self.max_line_gap = max(self.max_line_gap, v_metrics.line_gap)

        advance = font.advance_width(glyph.glyph_id, scale)
        start = self.x_pos
        self.x_pos += advance
        self.last_font_id = font.id
        self.last_glyph_id = glyph.glyph_id
        return start, advance


class _WordOutcome(Enum):
    SUCCESS = "success"
    PARTIAL_WORD = "partial_word"
    NOT_ENOUGH_SPACE = "not_enough_space"


class TextLayout(ABC):
    """Something able to look up glyphs and lay out text for rendering."""

    @abstractmethod
    def lookup_glyph_for_codepoint(self, codepoint: str) -> Optional[FontGlyph]:
        """The glyph for ``codepoint``, or None if there is none."""

    @abstractmethod
    def empty_line_vertical_metrics(self, scale: float) -> LineVerticalMetrics:
        """The metrics of a line containing no characters."""

    def layout_text(
        self, text: str, scale: float, options: Optional[TextOptions] = None
    ) -> FormattedTextBlock:
        """Lay out ``text`` after NFC normalisation; user indices refer to that form."""
        normalized = unicodedata.normalize("NFC", text)
        return self.layout_text_from_unindexed_codepoints(list(normalized), scale, options)

    def layout_text_from_unindexed_codepoints(
        self, characters: Iterable[str], scale: float, options: Optional[TextOptions] = None
    ) -> FormattedTextBlock:
        """Lay out characters, indexing each glyph by its input position."""
        return self.layout_text_from_codepoints(
            Codepoint.from_unindexed(characters), scale, options
        )

    def layout_text_from_codepoints(
        self,
        codepoints: Sequence[Codepoint],
        scale: float,
        options: Optional[TextOptions] = None,
    ) -> FormattedTextBlock:
        """Lay out codepoints, keeping each one's user index on its glyph."""
        options = options if options is not None else TextOptions()
        stream = _WordStream(split_words(codepoints))
        pos_y = 0.0
        width = 0.0
        lines: List[FormattedTextLine] = []

        while stream.has_next():
            line = self._layout_line(stream, scale, options, pos_y)
            pos_y += line.height * options.line_spacing_multiplier
            if stream.has_next():
                pos_y += line.line_gap * options.line_spacing_multiplier
            width = max(width, line.width)
            lines.append(line)

        return FormattedTextBlock(tuple(lines), width, pos_y)

    def _resolve_glyph(self, codepoint: str) -> Optional[FontGlyph]:
        for candidate in (codepoint, "\u25a1", "?"):
            glyph = self.lookup_glyph_for_codepoint(candidate)
            if glyph is not None:
                return glyph
        return None

    def _layout_word(
        self,
        word: RenderableWord,
        stream: _WordStream,
        scale: float,
        options: TextOptions,
        baseline: float,
        first_word_on_line: bool,
        previous: _LineMetrics,
        output: List[FormattedGlyph],
    ) -> Tuple[_WordOutcome, Optional[_LineMetrics]]:
        metrics = dataclasses.replace(previous)
        max_x = options.wrap_words_after_width
        glyphs: List[FormattedGlyph] = []

        def commit() -> None:
            y = baseline + metrics.max_ascent
            output.extend(glyph._with_y(y) for glyph in glyphs)

        for index, codepoint in enumerate(word.codepoints):
            trial = dataclasses.replace(metrics)
            glyph = self._resolve_glyph(codepoint.codepoint)
            if glyph is None:
                continue

            start, advance = trial.place(glyph, scale, options)
            formatted = FormattedGlyph(
                glyph, scale, Vector2(start, 0.0), codepoint.user_index, advance
            )

            if max_x is not None and trial.x_pos > max_x:
                if not first_word_on_line:
                    stream.push_pending(word)
                    return _WordOutcome.NOT_ENOUGH_SPACE, None
                if index == 0:
                    # Too wide even alone: keep this glyph past the boundary.
                    glyphs.append(formatted)
                    metrics = trial
                    if len(word.codepoints) > 1:
                        stream.push_pending(word.starting_from(index + 1))
                else:
                    stream.push_pending(word.starting_from(index))
                commit()
                return _WordOutcome.PARTIAL_WORD, metrics

            glyphs.append(formatted)
            metrics = trial

        commit()
        return _WordOutcome.SUCCESS, metrics

    def _layout_line(
        self, stream: _WordStream, scale: float, options: TextOptions, baseline: float
    ) -> FormattedTextLine:
        metrics = _LineMetrics()
        glyphs: List[FormattedGlyph] = []
        first_word_on_line = True

        if options.trim_each_line:
            while True:
                upcoming = stream.peek()
                if isinstance(upcoming, RenderableWord) and upcoming.is_whitespace:
                    stream.pop()
                else:
                    break

        while isinstance(word := stream.pop(), RenderableWord):
            outcome, new_metrics = self._layout_word(
                word, stream, scale, options, baseline, first_word_on_line, metrics, glyphs
            )
            if new_metrics is not None:
                metrics = new_metrics
            if outcome is not _WordOutcome.SUCCESS:
                break
            first_word_on_line = False

        if not glyphs:
            empty = self.empty_line_vertical_metrics(scale)
            metrics.max_ascent = empty.ascent
            metrics.min_descent = empty.descent
            metrics.max_line_gap = empty.line_gap

        max_width = options.wrap_words_after_width
        if max_width is not None:
            if options.alignment is TextAlignment.CENTER:
                offset: Optional[float] = (max_width - metrics.x_pos) / 2.0
            elif options.alignment is TextAlignment.RIGHT:
                offset = max_width - metrics.x_pos
            else:
                offset = None
            if offset is not None:
                glyphs = [glyph._offset_x(offset) for glyph in glyphs]

        return FormattedTextLine(
            glyphs=tuple(glyphs),
            baseline_position=baseline,
            width=metrics.x_pos,
            height=metrics.height(),
            ascent=metrics.max_ascent,
            descent=metrics.min_descent,
            line_gap=metrics.max_line_gap,
        )