import pytest
from hypothesis import given, settings
from hypothesis import strategies as st
from rapidfuzz.distance import Levenshtein

from entity_match.engine import edit_distance, fuzzy_subsequence_score, similarity_ratio

text = st.text(max_size=40)


def test_edit_distance_classic_fixtures() -> None:
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("saturday", "sunday") == 3
    assert edit_distance("", "") == 0
    assert edit_distance("", "abc") == 3
    assert edit_distance("abc", "") == 3


def test_edit_distance_is_case_sensitive() -> None:
    assert edit_distance("Acme", "acme") == 1


@given(text, text)
@settings(max_examples=200)
def test_edit_distance_matches_rapidfuzz(a: str, b: str) -> None:
    assert edit_distance(a, b) == Levenshtein.distance(a, b)


def test_similarity_ratio_values() -> None:
    assert similarity_ratio("hello", "hallo") == 0.8
    assert similarity_ratio("abc", "xyz") == 0.0
    assert similarity_ratio("abc", "xyz") < 0.5
    assert similarity_ratio("", "") == 1.0
    assert similarity_ratio("", "abc") == 0.0


def test_similarity_ratio_uses_longer_string_length() -> None:
    assert similarity_ratio("tech distributor sa", "techdistributor sa") == pytest.approx(18 / 19)


@given(text, text)
@settings(max_examples=200)
def test_similarity_ratio_is_symmetric(a: str, b: str) -> None:
    assert similarity_ratio(a, b) == similarity_ratio(b, a)


@given(text)
def test_similarity_ratio_identity(s: str) -> None:
    assert similarity_ratio(s, s) == 1.0


@given(text, text)
def test_similarity_ratio_bounds(a: str, b: str) -> None:
    assert 0.0 <= similarity_ratio(a, b) <= 1.0


def test_fuzzy_subsequence_containment() -> None:
    assert fuzzy_subsequence_score("iPhone 15 Pro", "iphone") == 6 / 13
    assert fuzzy_subsequence_score("Cable USB", "CABLE USB") == 1.0


def test_fuzzy_subsequence_ordered_match() -> None:
    # i, p, n, 1, 3 appear in order inside "iphone 13"
    assert fuzzy_subsequence_score("iPhone 13", "ipn13") == 5 / 9


def test_fuzzy_subsequence_incomplete_match_scores_zero() -> None:
    assert fuzzy_subsequence_score("abc", "abd") == 0.0
    assert fuzzy_subsequence_score("abc", "cba") == 0.0
    assert fuzzy_subsequence_score("ab", "abc") == 0.0


def test_fuzzy_subsequence_empty_inputs() -> None:
    assert fuzzy_subsequence_score("", "abc") == 0.0
    assert fuzzy_subsequence_score("abc", "") == 0.0
    assert fuzzy_subsequence_score("", "") == 0.0


@given(text, text)
def test_fuzzy_subsequence_bounds(haystack: str, needle: str) -> None:
    assert 0.0 <= fuzzy_subsequence_score(haystack, needle) <= 1.0
