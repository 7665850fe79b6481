"""Fuzzy and regex filtering of menu titles"""

from menufilter.filtering.filter_spec import (
    EmptyFilter,
    FilterSpec,
    LiteralFilter,
    RegexFilter,
    classify,
)
from menufilter.filtering.matcher import MatchCriteria, MatchResult, match_literal, match_regex
from menufilter.filtering.status import FilterStatus, evaluate, filter_candidates, filter_status, ranked
from menufilter.filtering.styled_text import HighlightSpan, StyledText

__all__ = [
    "EmptyFilter",
    "FilterSpec",
    "FilterStatus",
    "HighlightSpan",
    "LiteralFilter",
    "MatchCriteria",
    "MatchResult",
    "RegexFilter",
    "StyledText",
    "classify",
    "evaluate",
    "filter_candidates",
    "filter_status",
    "match_literal",
    "match_regex",
    "ranked",
]
