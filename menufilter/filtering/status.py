"""
Per-item filter results.

A FilterStatus holds the score and highlighted title for one menu item, and
the statuses of that item's alternates. Statuses are rebuilt from scratch on
every filter pass and never modified afterwards.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from PySide6.QtGui import QTextCharFormat

from menufilter.config.settings import Settings
from menufilter.constants import BEST_SCORE, WORST_SCORE
from menufilter.filtering.filter_spec import FilterSpec, classify
from menufilter.filtering.matcher import MatchResult, run_matcher
from menufilter.filtering.styled_text import HighlightSpan, StyledText

if TYPE_CHECKING:
    from menufilter.menu.item import Candidate


@dataclass(frozen=True)
class FilterStatus:
    """Filter result for one candidate."""

    candidate: "Candidate"
    score: int
    highlighted_title: StyledText
    spans: tuple[HighlightSpan, ...] = ()
    alternate_statuses: Mapping[str, "FilterStatus"] | None = None

    @property
    def is_included(self) -> bool:
        return self.score > WORST_SCORE


def default_highlight_format() -> QTextCharFormat:
    """Highlight style from the user's settings"""
    return Settings().highlight_format()


def searchable_title(candidate: "Candidate") -> StyledText:
    """
    Title to search and highlight.

    Prefers the attributed title; plain titles are styled with the item's font.
    """
    if candidate.attributed_title is not None:
        return candidate.attributed_title
    if candidate.title:
        return StyledText.plain(candidate.title, candidate.font)
    return StyledText.empty()


def evaluate(
    candidate: "Candidate",
    spec: FilterSpec,
    highlight_format: QTextCharFormat,
    should_stop: Callable[[], bool] | None = None,
) -> FilterStatus:
    """Score a candidate and, recursively, each of its alternates against the filter"""
    title = searchable_title(candidate)

    if candidate.is_separator or not title.text:
        result = MatchResult(WORST_SCORE)
    else:
        result = run_matcher(title.text, spec, should_stop)

    highlighted = title.with_highlights(result.spans, highlight_format) if result.spans else title

    # Alternates are scored even when this item is excluded: they may match on their own
    alternate_statuses: Mapping[str, FilterStatus] | None = None
    if candidate.alternates:
        alternate_statuses = MappingProxyType(
            {
                key: evaluate(alternate, spec, highlight_format, should_stop)
                for key, alternate in candidate.alternates.items()
            }
        )

    return FilterStatus(
        candidate=candidate,
        score=result.score,
        highlighted_title=highlighted,
        spans=result.spans,
        alternate_statuses=alternate_statuses,
    )


def filter_status(
    candidate: "Candidate",
    filter_string: str,
    highlight_format: QTextCharFormat | None = None,
) -> FilterStatus:
    """Classify filter_string and evaluate a single candidate"""
    if highlight_format is None:
        highlight_format = default_highlight_format()
    return evaluate(candidate, classify(filter_string), highlight_format)


def filter_candidates(
    candidates: Iterable["Candidate"],
    filter_string: str,
    highlight_format: QTextCharFormat | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> list[FilterStatus]:
    """
    Evaluate every candidate against filter_string.

    The result is aligned 1:1 with candidates. The filter string is
    classified once for the whole pass.
    """
    if highlight_format is None:
        highlight_format = default_highlight_format()

    spec = classify(filter_string)
    return [evaluate(candidate, spec, highlight_format, should_stop) for candidate in candidates]


def ranked(statuses: Iterable[FilterStatus]) -> list[FilterStatus]:
    """Included statuses, best score first (ties keep menu order)"""
    included = [status for status in statuses if status.is_included]
    return sorted(included, key=lambda status: BEST_SCORE - status.score)
