"""Tests for per-candidate filter statuses."""

import dataclasses

import pytest
from PySide6.QtGui import QFont

from menufilter.filtering.filter_spec import classify
from menufilter.filtering.status import (
    evaluate,
    filter_candidates,
    filter_status,
    ranked,
    searchable_title,
)
from menufilter.filtering.styled_text import StyledText


class TestEligibility:
    """Separators and untitled items never match."""

    @pytest.mark.parametrize("filter_string", ["", "op", "g/./"])
    def test_separator_scores_zero(self, make_candidate, highlight_format, filter_string):
        status = filter_status(make_candidate("Open", separator=True), filter_string, highlight_format)
        assert status.score == 0
        assert not status.is_included

    @pytest.mark.parametrize("title", [None, ""])
    @pytest.mark.parametrize("filter_string", ["", "op", "g/x*/"])
    def test_empty_title_scores_zero(self, make_candidate, highlight_format, title, filter_string):
        status = filter_status(make_candidate(title), filter_string, highlight_format)
        assert status.score == 0
        assert status.highlighted_title.text == ""


class TestEvaluate:
    """Test scoring and highlighting of eligible candidates."""

    def test_empty_filter_is_best_and_unhighlighted(self, make_candidate, highlight_format):
        candidate = make_candidate("Open")
        status = filter_status(candidate, "", highlight_format)

        assert status.score == 3
        assert status.spans == ()
        assert status.highlighted_title == searchable_title(candidate)

    def test_literal_highlights_matched_characters(self, make_candidate, highlight_format):
        status = filter_status(make_candidate("Open Recent"), "or", highlight_format)

        assert status.score == 1
        assert [(s.start, s.end) for s in status.highlighted_title.spans] == [(0, 1), (5, 6)]
        assert status.highlighted_title.format_at(5).fontUnderline()
        assert not status.highlighted_title.format_at(1).fontUnderline()

    def test_failed_match_is_unhighlighted(self, make_candidate, highlight_format):
        status = filter_status(make_candidate("Open"), "ox", highlight_format)
        assert status.score == 0
        assert status.highlighted_title.spans == ()

    def test_regex_filter(self, make_candidate, highlight_format):
        statuses = filter_candidates(
            [make_candidate("Save"), make_candidate("Open"), make_candidate("Save As")],
            "g/^S/",
            highlight_format,
        )
        assert [status.score for status in statuses] == [3, 0, 3]

    def test_unusable_regex_is_filtered_literally(self, make_candidate, highlight_format):
        statuses = filter_candidates([make_candidate("Open")], "g/(?a)(?u)a/", highlight_format)
        assert [status.score for status in statuses] == [0]

    def test_regex_prefix_alone_keeps_every_item(self, make_candidate, highlight_format):
        statuses = filter_candidates(
            [make_candidate("Open"), make_candidate("Save"), make_candidate("Open", separator=True)],
            "g/",
            highlight_format,
        )
        assert [status.score for status in statuses] == [3, 3, 0]
        assert all(status.spans == () for status in statuses)

    def test_attributed_title_is_preferred(self, make_candidate, highlight_format):
        candidate = make_candidate("Plain", attributed_title=StyledText.plain("Fancy", QFont()))

        assert filter_status(candidate, "fa", highlight_format).score == 2
        assert filter_status(candidate, "pl", highlight_format).score == 0

    def test_plain_title_uses_candidate_font(self, make_candidate):
        candidate = make_candidate("Open")
        assert searchable_title(candidate) == StyledText.plain("Open", candidate.font)

    def test_status_is_immutable(self, make_candidate, highlight_format):
        status = filter_status(make_candidate("Open"), "op", highlight_format)
        with pytest.raises(dataclasses.FrozenInstanceError):
            status.score = 0  # type: ignore[misc]

    def test_scores_stay_in_range(self, make_candidate, highlight_format):
        titles = ["Open", "Open Recent", "Save As…", "Éditer", "Café", "\U0001F600 Smile", ""]
        filters = ["", "o", "OP", "ré", "g/e./", "g/(S)(m)?/", "\U0001F600s", "zz"]
        for filter_string in filters:
            for status in filter_candidates(map(make_candidate, titles), filter_string, highlight_format):
                assert status.score in (0, 1, 2, 3)

    def test_spans_stay_inside_title(self, make_candidate, highlight_format):
        titles = ["Café Bar", "\U0001F600\U0001F601 Emoji", "Ünïcödé", "Save As…"]
        filters = ["e", "eb", "\U0001F601e", "g/./", "g/(.)(.)/", "ÜN", "…"]
        for filter_string in filters:
            for title in titles:
                status = filter_status(make_candidate(title), filter_string, highlight_format)
                for span in status.spans:
                    assert 0 <= span.start < span.end <= len(title)
                for span in status.highlighted_title.spans:
                    assert 0 <= span.start < span.end <= len(title)

    def test_evaluation_is_deterministic(self, make_candidate, highlight_format):
        candidates = [make_candidate("Open Recent"), make_candidate("Save"), make_candidate("Close")]
        for filter_string in ["oe", "g/[aeiou]/", ""]:
            first = filter_candidates(candidates, filter_string, highlight_format)
            second = filter_candidates(candidates, filter_string, highlight_format)
            assert [(s.score, s.spans) for s in first] == [(s.score, s.spans) for s in second]
            assert [s.highlighted_title for s in first] == [s.highlighted_title for s in second]


class TestAlternates:
    """Alternates are evaluated with the same filter and reported under their key."""

    def test_alternate_status_always_present(self, make_candidate, highlight_format):
        candidate = make_candidate("Open", alternates={"shift": make_candidate("Open in New Window")})

        for filter_string in ["", "op", "window", "g/^O/", "zzz"]:
            status = filter_status(candidate, filter_string, highlight_format)
            assert status.alternate_statuses is not None
            assert "shift" in status.alternate_statuses

    def test_alternate_matches_independently(self, make_candidate, highlight_format):
        candidate = make_candidate("Open", alternates={"shift": make_candidate("Open in New Window")})
        status = filter_status(candidate, "window", highlight_format)

        assert status.score == 0
        assert status.alternate_statuses["shift"].score > 0
        assert status.alternate_statuses["shift"].highlighted_title.text == "Open in New Window"

    def test_no_alternates(self, make_candidate, highlight_format):
        assert filter_status(make_candidate("Open"), "op", highlight_format).alternate_statuses is None

    def test_evaluate_with_classified_filter(self, make_candidate, highlight_format):
        candidate = make_candidate("Save", alternates={"alt": make_candidate("Save All")})
        status = evaluate(candidate, classify("g/All/"), highlight_format)

        assert status.score == 0
        assert status.alternate_statuses["alt"].score == 3


class TestRanked:
    """Test the caller-side ordering helper."""

    def test_best_first_excluding_zero(self, make_candidate, highlight_format):
        titles = ["Open Recent", "Open", "Close", "Stop"]
        statuses = filter_candidates(map(make_candidate, titles), "op", highlight_format)

        assert [status.score for status in statuses] == [2, 2, 0, 3]
        assert [status.candidate.title for status in ranked(statuses)] == ["Stop", "Open Recent", "Open"]
