"""
Term matching and highlighting: literal matching of user text, case handling,
segment output and the sequential (nesting) treatment of overlapping terms.
"""
import re

import pytest
from matcher import compile_term, escape_for_pattern, matches
from highlight import Segment, highlight, highlight_markup

from conftest import marked


class TestMatches:
    """Case-insensitive substring semantics"""

    def test_substring_ignores_case(self):
        assert matches("Downtown Health", "health")
        assert matches("downtown health", "HEALTH")
        assert not matches("Downtown Health", "uptown clinic")

    def test_empty_needle_matches_everything(self):
        assert matches("anything", "")
        assert matches("", "")
        assert matches(None, None)

    def test_missing_haystack_is_empty_text(self):
        assert not matches(None, "a")

    def test_substring_not_token(self):
        """Matches inside words, no token boundaries"""
        assert matches("Orthodontics", "dont")


class TestEscaping:
    """User text is always matched literally"""

    @pytest.mark.parametrize("term", [".", "*", "+", "?", "^", "$", "{", "}", "(", ")", "|", "[", "]", "\\", "a.b", ".*", "(555) 1"])
    def test_escaped_term_compiles_and_matches_itself(self, term):
        pattern = re.compile(escape_for_pattern(term))
        assert pattern.search(term).group(0) == term

    def test_dot_is_not_a_wildcard(self):
        pattern = compile_term("a.b")
        assert pattern.search("xa.bx") is not None
        assert pattern.search("axbx") is None

    def test_dot_star_only_matches_literally(self):
        pattern = compile_term(".*")
        assert pattern.search("abc") is None
        assert pattern.search("a.*c").group(0) == ".*"

    def test_blank_terms_compile_to_none(self):
        assert compile_term("") is None
        assert compile_term("   ") is None
        assert compile_term(None) is None


class TestHighlightSegments:
    """Structured highlight output"""

    def test_dental_marked_on_dent_with_original_casing(self):
        segments = highlight("Dental", ["dent"])
        assert segments == [Segment("Dent", 1), Segment("al", 0)]
        assert marked(segments) == ["Dent"]

    def test_no_match_leaves_single_plain_segment(self):
        assert highlight("Downtown Health", ["dent"]) == [Segment("Downtown Health", 0)]

    def test_every_occurrence_marked(self):
        segments = highlight("Dental dentistry DENT", ["dent"])
        assert marked(segments) == ["Dent", "dent", "DENT"]

    def test_segments_rejoin_to_input(self):
        text = "123 Main St, Springfield, IL 62701"
        segments = highlight(text, ["main", "62", "st"])
        assert "".join(s.text for s in segments) == text

    def test_empty_terms_return_text_unchanged(self):
        assert highlight("Dental", []) == [Segment("Dental", 0)]
        assert highlight("Dental", ["", "  "]) == [Segment("Dental", 0)]

    def test_empty_and_missing_text(self):
        assert highlight("", ["a"]) == [Segment("", 0)]
        assert highlight(None, ["a"]) == []

    def test_metacharacters_highlight_literally(self):
        segments = highlight("(555) 123-4567", ["(555)"])
        assert marked(segments) == ["(555)"]

    def test_to_dict(self):
        assert Segment("Dent", 1).to_dict() == {"text": "Dent", "isMatch": True}
        assert Segment("al").to_dict() == {"text": "al", "isMatch": False}


class TestOverlappingTerms:
    """Later terms apply to what earlier terms produced; no interval merging"""

    def test_later_term_nests_inside_earlier_match(self):
        segments = highlight("Dental", ["dental", "ent"])
        assert segments == [Segment("D", 1), Segment("ent", 2), Segment("al", 1)]

    def test_later_term_cannot_span_earlier_boundary(self):
        # "ta" straddles the end of "Den" and the plain "tal"
        segments = highlight("Dental", ["den", "ta"])
        assert segments == [Segment("Den", 1), Segment("ta", 1), Segment("l", 0)]
        segments = highlight("Dental", ["den", "nta"])
        assert segments == [Segment("Den", 1), Segment("tal", 0)]


class TestHighlightMarkup:
    """Compatibility string form"""

    def test_wraps_matches_in_marker(self):
        assert highlight_markup("Dental", ["dent"]) == "<mark>Dent</mark>al"

    def test_custom_tag(self):
        assert highlight_markup("Dental", ["al"], tag="b") == "Dent<b>al</b>"

    def test_empty_inputs_unchanged(self):
        assert highlight_markup("", ["a"]) == ""
        assert highlight_markup(None, ["a"]) is None
        assert highlight_markup("Dental", []) == "Dental"

    def test_overlapping_terms_nest_markers(self):
        assert highlight_markup("Dental", ["dental", "ent"]) == "<mark>D<mark>ent</mark>al</mark>"
