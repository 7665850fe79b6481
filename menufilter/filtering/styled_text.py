"""
Immutable styled text for menu titles.

A StyledText is a plain string, a base character format, and an ordered
list of format runs overlaid on half-open code point ranges. Highlighting
never mutates a StyledText; it returns a new one with extra runs.
"""

import html
from collections.abc import Iterable
from dataclasses import dataclass

from PySide6.QtGui import QFont, QTextCharFormat, QTextFormat


@dataclass(frozen=True)
class HighlightSpan:
    """Half-open range [start, end) over a title's code points."""

    start: int
    end: int

    def is_empty(self) -> bool:
        return self.end <= self.start


class StyledText:
    """Text with a base format and overlaid format runs."""

    __slots__ = ("_text", "_base_format", "_runs")

    def __init__(
        self,
        text: str = "",
        base_format: QTextCharFormat | None = None,
        runs: Iterable[tuple[HighlightSpan, QTextCharFormat]] = (),
    ) -> None:
        self._text = text
        self._base_format = QTextCharFormat(base_format) if base_format is not None else QTextCharFormat()
        self._runs: tuple[tuple[HighlightSpan, QTextCharFormat], ...] = tuple(
            (span, QTextCharFormat(fmt)) for span, fmt in runs
        )

    @classmethod
    def plain(cls, text: str, font: QFont | None = None) -> "StyledText":
        """Style plain text with a default font"""
        base_format = QTextCharFormat()
        if font is not None:
            base_format.setFont(font)
        return cls(text, base_format)

    @classmethod
    def empty(cls) -> "StyledText":
        return cls()

    @property
    def text(self) -> str:
        return self._text

    @property
    def spans(self) -> tuple[HighlightSpan, ...]:
        """Spans of every format run, in the order they were applied"""
        return tuple(span for span, _ in self._runs)

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StyledText):
            return NotImplemented
        return (
            self._text == other._text
            and self._base_format == other._base_format
            and self._runs == other._runs
        )

    def __hash__(self) -> int:
        return hash((self._text, self.spans))

    def __repr__(self) -> str:
        return f"StyledText({self._text!r}, spans={list(self.spans)!r})"

    def with_highlights(self, spans: Iterable[HighlightSpan], fmt: QTextCharFormat) -> "StyledText":
        """
        Return a copy with fmt overlaid on every span.

        Spans are clamped to the text; spans that end up empty are dropped.
        """
        size = len(self._text)
        new_runs = list(self._runs)
        for span in spans:
            clamped = HighlightSpan(max(0, min(span.start, size)), max(0, min(span.end, size)))
            if clamped.is_empty():
                continue
            new_runs.append((clamped, fmt))

        return StyledText(self._text, self._base_format, new_runs)

    def format_at(self, index: int) -> QTextCharFormat:
        """Effective format of the code point at index (base merged with covering runs)"""
        fmt = QTextCharFormat(self._base_format)
        for span, run_format in self._runs:
            if span.start <= index < span.end:
                fmt.merge(run_format)
        return fmt

    def to_html(self) -> str:
        """Render as Qt rich text (a <span> per run of identically formatted characters)"""
        if not self._text:
            return ""

        boundaries = {0, len(self._text)}
        for span, _ in self._runs:
            boundaries.add(span.start)
            boundaries.add(span.end)
        points = sorted(boundaries)

        parts: list[str] = []
        for start, end in zip(points, points[1:]):
            segment = html.escape(self._text[start:end])
            style = _css_for_format(self.format_at(start))
            if style:
                parts.append(f'<span style="{style}">{segment}</span>')
            else:
                parts.append(segment)

        return "".join(parts)


def _css_for_format(fmt: QTextCharFormat) -> str:
    """CSS subset understood by Qt rich text"""
    rules: list[str] = []

    if fmt.hasProperty(QTextFormat.Property.FontFamilies):
        families = fmt.fontFamilies()
        if families:
            rules.append(f"font-family: '{families[0]}'")
    if fmt.fontPointSize() > 0:
        rules.append(f"font-size: {fmt.fontPointSize():g}pt")
    if fmt.fontWeight() >= QFont.Weight.Bold.value:
        rules.append("font-weight: bold")
    if fmt.fontItalic():
        rules.append("font-style: italic")
    if fmt.fontUnderline():
        rules.append("text-decoration: underline")
    if fmt.hasProperty(QTextFormat.Property.BackgroundBrush):
        rules.append(f"background-color: {fmt.background().color().name()}")
    if fmt.hasProperty(QTextFormat.Property.ForegroundBrush):
        rules.append(f"color: {fmt.foreground().color().name()}")

    return "; ".join(rules)
