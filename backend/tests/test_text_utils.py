import math

import pytest

from services.text_utils import (
    clamp,
    clamp01,
    has_word,
    normalize,
    score_to_label,
    score_to_level,
    similarity,
    tokenize,
    uniq,
)


def test_normalize_collapses_spaces_keeps_lines():
    assert normalize("  a \t  b \r\n  c  ") == "a b\nc"


def test_normalize_non_string():
    assert normalize(None) == ""
    assert normalize(42) == ""


def test_tokenize_lowercases_and_drops_punctuation():
    tokens = tokenize("Python, SQL and React!")
    assert "python" in tokens
    assert "sql" in tokens
    assert "react" in tokens
    assert "," not in tokens
    assert "!" not in tokens


def test_tokenize_empty():
    assert tokenize("") == []
    assert tokenize("   ") == []
    assert tokenize(None) == []


def test_similarity_boundaries():
    assert similarity([], []) == 1.0
    assert similarity(["a"], []) == 0.0
    assert similarity([], ["a"]) == 0.0


def test_similarity_jaccard():
    assert similarity(["a", "b"], ["b", "c"]) == pytest.approx(1 / 3)
    assert similarity(["a", "a", "b"], ["b", "a"]) == 1.0


class TestHasWord:
    def test_ascii_boundaries(self):
        """java must not match inside javascript."""
        assert not has_word("javascript developer", "java")
        assert has_word("java developer", "java")

    def test_korean_particle_after_ascii(self):
        assert has_word("sql을 활용한 분석", "sql")

    def test_korean_containment(self):
        assert has_word("리액트로 화면 개발", "리액트")

    def test_token_list(self):
        assert has_word(["python", "sql"], "sql")
        assert not has_word(["python"], "sql")
        assert has_word(["supply", "chain"], "supply chain")

    def test_blank_keyword(self):
        assert not has_word("anything", "  ")


def test_clamp_nan_and_bad_input():
    assert clamp(math.nan) == 0.0
    assert clamp("x", 0.2, 1.0) == 0.2
    assert clamp(5, 0, 1) == 1
    assert clamp01(-0.3) == 0.0


def test_uniq_preserves_order_and_drops_blanks():
    assert uniq(["b", "a", "b", "", None, " a "]) == ["b", "a"]


def test_score_labels():
    assert score_to_label(1) == "낮음"
    assert score_to_label(3) == "보통"
    assert score_to_label(5) == "높음"
    assert score_to_level(0.1) == "low"
    assert score_to_level(0.5) == "mid"
    assert score_to_level(0.9) == "high"


def test_score_to_level_boundaries():
    assert score_to_level(0.33) == "low"
    assert score_to_level(0.34) == "mid"
    assert score_to_level(0.66) == "mid"
    assert score_to_level(0.67) == "high"
    assert score_to_level(float("nan")) == "low"
