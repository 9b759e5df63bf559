"""Test text and artist similarity scoring"""

import pytest

from online_lyrics.matching.similarity import (
    artist_list_similarity,
    artist_similarity,
    duplicate_rate,
    longest_common_substring_length,
    similarity,
    split_artists,
    text_similarity,
)


class TestLongestCommonSubstring:
    """Test contiguous common substring length"""

    def test_finds_contiguous_run(self):
        assert longest_common_substring_length("abcdef", "zcdez") == 3

    def test_no_common_characters(self):
        assert longest_common_substring_length("abc", "xyz") == 0

    def test_subsequence_is_not_counted(self):
        # "ace" is a subsequence of "abcde" but no two letters are adjacent
        assert longest_common_substring_length("ace", "abcde") == 1

    def test_empty_input(self):
        assert longest_common_substring_length("", "abc") == 0
        assert longest_common_substring_length("abc", "") == 0

    def test_symmetric(self):
        assert longest_common_substring_length("ab", "xxabxx") == 2
        assert longest_common_substring_length("xxabxx", "ab") == 2

    def test_unicode(self):
        assert longest_common_substring_length("夜に駆ける", "夜に駆ける (Cover)") == 5


class TestDuplicateRate:
    """Test Jaccard index of character sets"""

    def test_partial_overlap(self):
        assert duplicate_rate("abc", "bcd") == pytest.approx(0.5)

    def test_repeated_characters_count_once(self):
        assert duplicate_rate("aaa", "a") == 1.0

    def test_empty_strings(self):
        assert duplicate_rate("", "") == 1.0
        assert duplicate_rate("abc", "") == 0.0
        assert duplicate_rate("", "abc") == 0.0


class TestTextSimilarity:
    """Test text_similarity"""

    @pytest.mark.parametrize("text", ["a", "Lemon", "夜に駆ける", "Hello, World!"])
    def test_identical_text_scores_one(self, text):
        assert text_similarity(text, text) == 1.0

    @pytest.mark.parametrize("text", ["a", "Lemon", "夜に駆ける"])
    def test_empty_candidate_scores_zero(self, text):
        assert text_similarity(text, "") == 0.0

    @pytest.mark.parametrize("text", ["", "a", "Lemon"])
    def test_empty_query_scores_half(self, text):
        assert text_similarity("", text) == 0.5

    def test_case_insensitive(self):
        assert text_similarity("ABC", "abc") == 1.0

    def test_no_common_substring_scores_zero(self):
        assert text_similarity("abc", "xyz") == 0.0

    def test_formula(self):
        # common ratio 2/4, duplicate rate 2/4
        expected = 0.5 * (0.5 ** 0.5) ** (1 / 1.5)
        assert text_similarity("abcd", "ab") == pytest.approx(expected)

    def test_asymmetric(self):
        assert text_similarity("ab", "abcd") > text_similarity("abcd", "ab")

    def test_range(self):
        for a, b in [("Lemon", "Lemon (Cover)"), ("晴天", "晴天 Live"), ("abc", "cab")]:
            assert 0.0 <= text_similarity(a, b) <= 1.0

    def test_alias(self):
        assert similarity is text_similarity


class TestSplitArtists:
    """Test artist string splitting"""

    def test_mixed_separators(self):
        assert split_artists("YOASOBI、Ayase / ikura") == ["YOASOBI", "Ayase", "ikura"]

    def test_ascii_separators(self):
        assert split_artists("A & B,C+D|E\\F") == ["A", "B", "C", "D", "E", "F"]

    def test_fullwidth_comma(self):
        assert split_artists("周杰伦，费玉清") == ["周杰伦", "费玉清"]

    def test_empty(self):
        assert split_artists("") == []
        assert split_artists(" , / ") == []


class TestArtistListSimilarity:
    """Test artist_list_similarity"""

    def test_empty_query_scores_half(self):
        assert artist_list_similarity("", "Someone") == 0.5
        assert artist_list_similarity("", "") == 0.5

    def test_empty_candidate_scores_zero(self):
        assert artist_list_similarity("Ayase", "") == 0.0

    def test_query_of_separators_only(self):
        assert artist_list_similarity(" / ", "Ayase") == 0.0

    def test_all_artists_covered(self):
        assert artist_list_similarity("Ayase, ikura", "YOASOBI Ayase ikura") == 1.0

    def test_extra_candidate_artists_do_not_lower_score(self):
        assert artist_list_similarity("Ayase", "Ayase ikura") == 1.0

    def test_missing_query_artist_lowers_score(self):
        assert artist_list_similarity("Ayase ikura", "Ayase") < 1.0

    def test_mean_of_best_matches(self):
        expected = (1.0 + text_similarity("ikura", "ayase")) / 2
        assert artist_list_similarity("Ayase & ikura", "Ayase") == pytest.approx(expected)

    def test_alias(self):
        assert artist_similarity is artist_list_similarity
