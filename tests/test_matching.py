"""Tests for word splitting and mnemonic matching."""
import pytest

from qgh.matching import is_word_boundary, iter_words, matches_mnemonic


class TestIterWords:

    def test_empty_string_has_no_words(self):
        assert list(iter_words("")) == []

    def test_delimiters_and_case_split_words(self):
        assert list(iter_words("my-app_Name.v2")) == ["my", "app", "Name", "v2"]

    def test_slashes_split_path_components(self):
        assert list(iter_words("/home/dev\\src")) == ["home", "dev", "src"]

    def test_camel_case_boundary(self):
        assert list(iter_words("fooBarBaz")) == ["foo", "Bar", "Baz"]

    def test_upper_to_upper_is_not_a_boundary(self):
        assert list(iter_words("HTTPServer")) == ["HTTPServer"]

    def test_other_characters_are_dropped_not_split(self):
        # Space is not a delimiter, so the words run together
        assert list(iter_words("hello world!")) == ["helloworld"]

    def test_only_delimiters(self):
        assert list(iter_words("--__..")) == []

    def test_sequence_can_be_restarted(self):
        text = "operations-istio-cni-helm"
        assert list(iter_words(text)) == list(iter_words(text))

    @pytest.mark.parametrize("text,pos,expected", [
        ("abc", 0, True),
        ("a-b", 2, True),
        ("aB", 1, True),
        ("Ab", 1, False),
        ("ab", 5, False),
    ])
    def test_is_word_boundary(self, text, pos, expected):
        assert is_word_boundary(text, pos) is expected


class TestMatchesMnemonic:

    def test_initials_match(self):
        assert matches_mnemonic("operations-istio-cni-helm", "oic")

    def test_missing_initial_does_not_match(self):
        assert not matches_mnemonic("operations-istio-cni-helm", "oix")

    @pytest.mark.parametrize("text", ["", "anything", "my-app_Name.v2"])
    def test_empty_query_matches_everything(self, text):
        assert matches_mnemonic(text, "")

    def test_case_insensitive(self):
        assert matches_mnemonic("Foo-Bar", "fb")
        assert matches_mnemonic("foo-bar", "FB")
        assert matches_mnemonic("fooBar", "fb")

    def test_words_can_be_skipped(self):
        assert matches_mnemonic("operations-istio-cni-helm", "oh")

    def test_order_matters(self):
        assert not matches_mnemonic("alpha-beta", "ba")

    def test_each_word_consumes_at_most_one_character(self):
        assert not matches_mnemonic("alpha", "aa")
        assert matches_mnemonic("alpha-another", "aa")

    def test_greedy_pass_ignores_interior_letters(self):
        # "al" is a prefix of the only word, but only initials count
        assert not matches_mnemonic("alpha", "al")
        assert not matches_mnemonic("alpha-beta", "alb")

    def test_query_longer_than_word_count(self):
        assert not matches_mnemonic("a-b", "abc")
