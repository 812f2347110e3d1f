"""Unit tests for the string matching primitives and the result formatter."""

import pytest

from kgram_search import config
from kgram_search.storage import Document
from kgram_search.utils import (
    ResultFormatter,
    build_kgrams,
    edit_distance,
    get_fuzziness,
    has_wildcard,
    wildcard_match,
)


@pytest.mark.unit
class TestEditDistance:
    """Tests for edit_distance."""

    @pytest.mark.parametrize(
        "s1, s2, expected",
        [
            ("fast", "cats", 3),
            ("gopher", "python", 5),
            ("hello", "", 5),
            ("", "world", 5),
            ("kitten", "sitting", 3),
            ("cat", "cats", 1),
            ("cat", "bat", 1),
        ],
    )
    def test_known_distances(self, s1, s2, expected):
        assert edit_distance(s1, s2) == expected

    @pytest.mark.parametrize("s", ["", "a", "statistic", "inter-rater"])
    def test_identity_and_empty(self, s):
        assert edit_distance(s, s) == 0
        assert edit_distance(s, "") == len(s)

    @pytest.mark.parametrize("s1, s2", [("latent", "talent"), ("abc", "xyzabc"), ("radio", "rad")])
    def test_symmetric(self, s1, s2):
        assert edit_distance(s1, s2) == edit_distance(s2, s1)

    def test_max_distance_cutoff(self):
        assert edit_distance("kitten", "sitting", max_distance=1) == 2
        assert edit_distance("kitten", "sitting", max_distance=3) == 3


@pytest.mark.unit
class TestWildcardMatch:
    """Tests for wildcard_match."""

    @pytest.mark.parametrize(
        "pattern, text, expected",
        [
            ("time", "time", True),
            ("tome", "time", False),
            ("t?me", "time", True),
            ("t?e", "time", False),
            ("?ime", "time", True),
            ("t*e", "time", True),
            ("t*", "time", True),
            ("*e", "time", True),
            ("*i*", "time", True),
            ("t*x", "time", False),
            ("**time", "time", True),
            ("", "", True),
            ("", "a", False),
            ("*", "", True),
            ("?", "", False),
        ],
    )
    def test_patterns(self, pattern, text, expected):
        assert wildcard_match(pattern, text) is expected

    @pytest.mark.parametrize("s", ["", "a", "kappa", "code-division"])
    def test_star_matches_everything(self, s):
        assert wildcard_match("*", s)

    @pytest.mark.parametrize("s", ["", "a", "ab", "abc"])
    def test_question_mark_matches_one_character(self, s):
        assert wildcard_match("?", s) == (len(s) == 1)

    @pytest.mark.parametrize("s", ["statistic", "a", "23"])
    def test_literal_matches_itself(self, s):
        assert wildcard_match(s, s)


@pytest.mark.unit
class TestBuildKGrams:
    """Tests for build_kgrams."""

    def test_hello_trigrams(self):
        grams = build_kgrams("hello", 3)
        assert len(grams) == 7
        assert set(grams) == {"$$h", "$he", "hel", "ell", "llo", "lo$", "o$$"}

    def test_lowercases(self):
        assert build_kgrams("HeLLo", 3) == build_kgrams("hello", 3)

    @pytest.mark.parametrize("term", ["ab", "abc", "statistic", "inter-rater"])
    @pytest.mark.parametrize("k", [2, 3, 4])
    def test_gram_count(self, term, k):
        if len(term) >= k - 1:
            assert len(build_kgrams(term, k)) == len(term) + k - 1

    def test_term_of_length_k_minus_one_is_padded(self):
        assert build_kgrams("hi", 3) == ["$$h", "$hi", "hi$", "i$$"]

    def test_short_term_is_its_own_gram(self):
        assert build_kgrams("a", 3) == ["a"]
        assert build_kgrams("", 3) == [""]
        assert build_kgrams("ab", 4) == ["ab"]

    def test_bigrams(self):
        assert build_kgrams("ab", 2) == ["$a", "ab", "b$"]


@pytest.mark.unit
class TestFuzziness:
    """Tests for get_fuzziness and has_wildcard."""

    def test_thresholds(self):
        assert [get_fuzziness("x" * n) for n in (1, 2, 3, 5, 6, 12)] == [0, 0, 1, 1, 2, 2]

    def test_has_wildcard(self):
        assert has_wildcard("co*")
        assert has_wildcard("c?t")
        assert not has_wildcard("cat")


@pytest.mark.unit
class TestResultFormatter:
    """Tests for ResultFormatter."""

    @pytest.fixture
    def formatter(self):
        return ResultFormatter(config)

    def test_highlight_words(self, formatter):
        text = "Cohen's kappa coefficient"
        assert formatter.highlight_words(text, ["kappa"]) == "Cohen's [[kappa]] coefficient"

    def test_highlight_is_case_insensitive_and_whole_word(self, formatter):
        assert formatter.highlight_words("Kappa kappas", ["kappa"]) == "[[Kappa]] kappas"

    def test_highlight_without_words(self, formatter):
        assert formatter.highlight_words("text", []) == "text"

    def test_short_snippet_is_untrimmed(self, formatter):
        assert formatter.make_snippet("a\nkappa", ["kappa"], max_chars=50) == "a [[kappa]]"

    def test_long_snippet_centers_on_match(self, formatter):
        text = "a " * 100 + "kappa" + " b" * 100
        snippet = formatter.make_snippet(text, ["kappa"], max_chars=50)
        assert "[[kappa]]" in snippet
        assert snippet.startswith("…")
        assert snippet.endswith("…")

    def test_long_snippet_without_match(self, formatter):
        text = "word " * 100
        assert formatter.make_snippet(text, ["kappa"], max_chars=20) == text[:20]

    def test_print_results_table(self, formatter, capsys):
        docs = [Document(id=1, title="Cohen's kappa", body="kappa statistic", url="http://x")]
        formatter.print_results_table(docs, ["kappa"])
        out = capsys.readouterr().out
        assert "Cohen's kappa" in out
        assert "[[kappa]] statistic" in out

    def test_print_results_simple(self, formatter, capsys):
        docs = [
            Document(id=4, title="Okapi BM25", body="BM25 is a ranking function", url="http://b"),
            Document(id=1, title="Cohen's kappa", body="kappa statistic", url="http://k"),
        ]
        formatter.print_results_simple(docs, ["ranking"])
        lines = capsys.readouterr().out.splitlines()
        assert "#1  id=4  title=Okapi BM25  url=http://b" in lines
        assert "     BM25 is a [[ranking]] function" in lines
        assert "#2  id=1  title=Cohen's kappa  url=http://k" in lines

    def test_print_empty_results(self, formatter, capsys):
        formatter.print_results_table([], ["kappa"])
        formatter.print_results_simple([], ["kappa"])
        assert capsys.readouterr().out.count("No matching documents found.") == 2
