"""Tests for answer normalization."""

from adaptquiz.engine.normalizer import answers_match, normalize_answer


class TestNormalizer:
    def test_strips_whitespace(self):
        assert answers_match(" 60 ", "60")

    def test_case_insensitive(self):
        assert answers_match("Distance/Time", "distance/time")

    def test_canonical_side_normalized_too(self):
        assert answers_match("true", " True ")

    def test_inner_whitespace_is_significant(self):
        assert not answers_match("distance / time", "distance/time")

    def test_no_match(self):
        assert not answers_match("61", "60")

    def test_empty_answer(self):
        assert not answers_match("", "60")

    def test_normalize_answer(self):
        assert normalize_answer("  4X \n") == "4x"
