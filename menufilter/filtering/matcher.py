"""
Match scoring for menu titles.

Two matchers share one result shape:
- match_literal: ordered greedy character scan, scored by match qualities
- match_regex: every match and participating group is highlighted

Scores run from 0 (excluded) to 3 (best).
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

from menufilter.constants import BEST_SCORE, WORST_SCORE
from menufilter.filtering.filter_spec import EmptyFilter, FilterSpec, LiteralFilter, RegexFilter
from menufilter.filtering.styled_text import HighlightSpan


@dataclass
class MatchCriteria:
    """
    Qualities of a literal match, each true for every character compared.

    An ordered match is implied by having matched at all, so it always counts.
    """

    case_sensitive: bool = True
    contiguous: bool = True

    @property
    def ordered(self) -> bool:
        return True

    def score(self) -> int:
        return sum((self.ordered, self.case_sensitive, self.contiguous))


@dataclass(frozen=True)
class MatchResult:
    """Score plus the spans to highlight."""

    score: int
    spans: tuple[HighlightSpan, ...] = field(default_factory=tuple)


NO_MATCH = MatchResult(WORST_SCORE)


def _find_char_ignoring_case(title: str, char: str, start: int) -> int:
    """Index of the first code point at or after start equal to char ignoring case, or -1"""
    folded = char.casefold()
    for index in range(start, len(title)):
        candidate = title[index]
        if candidate == char or candidate.casefold() == folded:
            return index
    return -1


def match_literal(title: str, filter_string: str) -> MatchResult:
    """
    Match filter_string against title as an ordered character subsequence.

    Each filter character is searched case-insensitively after the previous
    match. Any character that cannot be found fails the whole match.
    """
    criteria = MatchCriteria()
    spans: list[HighlightSpan] = []
    search_start = 0
    last_match: int | None = None

    for char in filter_string:
        if search_start >= len(title):
            return NO_MATCH

        index = _find_char_ignoring_case(title, char, search_start)
        if index < 0:
            return NO_MATCH

        # A case-sensitive search from the same start lands here only if this character matches exactly
        if title[index] != char:
            criteria.case_sensitive = False

        if last_match is not None and index != last_match + 1:
            criteria.contiguous = False

        spans.append(HighlightSpan(index, index + 1))
        last_match = index
        search_start = index + 1

    return MatchResult(criteria.score(), tuple(spans))


def match_regex(
    title: str,
    pattern: re.Pattern[str],
    should_stop: Callable[[], bool] | None = None,
) -> MatchResult:
    """
    Highlight every non-overlapping match of pattern in title, and every group that took part.

    Any match scores best. If the regex engine fails part way, scanning stops
    and whatever was found so far is kept. should_stop is polled between
    matches so a superseded filter pass can bail out early.
    """
    score = WORST_SCORE
    spans: list[HighlightSpan] = []

    try:
        for match in pattern.finditer(title):
            for group in range(pattern.groups + 1):
                start, end = match.span(group)
                if start < 0:
                    continue  # Group did not participate

                score = BEST_SCORE
                if end > start:
                    spans.append(HighlightSpan(start, end))

            if should_stop is not None and should_stop():
                break
    except (re.error, RecursionError, MemoryError) as e:
        print(f"[Filter] Regex scan stopped on {title!r}: {e}")

    return MatchResult(score, tuple(spans))


def run_matcher(
    title: str,
    spec: FilterSpec,
    should_stop: Callable[[], bool] | None = None,
) -> MatchResult:
    """Run the matcher for this kind of filter"""
    match spec:
        case EmptyFilter():
            return MatchResult(BEST_SCORE)
        case LiteralFilter(text=text):
            return match_literal(title, text)
        case RegexFilter(pattern=pattern):
            return match_regex(title, pattern, should_stop)
