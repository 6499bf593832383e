"""
Tests for combining word vectors into a query.
"""

import logging

import numpy as np
import pytest

from wordvec_analogy.analyzer import find_nearest
from wordvec_analogy.errors import EmptyInput
from wordvec_analogy.expression import combine, evaluate_expression, parse_expression


class TestParseExpression:
    """Tests for parse_expression."""

    def test_separated_tokens(self):
        assert parse_expression("king - man + woman") == ["king", "-", "man", "+", "woman"]

    def test_joined_tokens(self):
        assert parse_expression("king-man+woman") == ["king", "-", "man", "+", "woman"]

    def test_token_list(self):
        assert parse_expression(["king-man", "+", "woman"]) == ["king", "-", "man", "+", "woman"]

    def test_leading_operator(self):
        assert parse_expression("-man") == ["-", "man"]

    def test_vocabulary_words_kept_whole(self):
        assert parse_expression(["e-mail", "+", "x-ray"], vocabulary={"e-mail"}) == [
            "e-mail", "+", "x", "-", "ray",
        ]


class TestEvaluateExpression:
    """Tests for evaluate_expression."""

    def test_king_minus_man_plus_queen(self, royal_table):
        result = evaluate_expression(["king", "-", "man", "+", "queen"], royal_table)

        np.testing.assert_allclose(result.vector, [1.8, -0.9], rtol=1e-6)
        assert result.words == ["king", "man", "queen"]
        assert result.unknown == []
        assert result.mode == "expression"

    def test_analogy_has_no_result_when_inputs_excluded(self, royal_table):
        result = evaluate_expression(["king", "-", "man", "+", "queen"], royal_table)

        assert find_nearest(royal_table, result.vector, exclude=set(result.words)) is None

    def test_first_word_added_implicitly(self, royal_table):
        result = evaluate_expression(["man"], royal_table)

        np.testing.assert_allclose(result.vector, [0.1, 1.0], rtol=1e-6)

    def test_words_without_operators_are_added(self, royal_table):
        result = evaluate_expression(["king", "man"], royal_table)

        np.testing.assert_allclose(result.vector, [1.1, 1.0], rtol=1e-6)

    def test_leading_minus(self, royal_table):
        result = evaluate_expression(["-", "king"], royal_table)

        np.testing.assert_allclose(result.vector, [-1.0, 0.0])

    def test_sign_persists_until_changed(self, royal_table):
        result = evaluate_expression(["-", "king", "man"], royal_table)

        np.testing.assert_allclose(result.vector, [-1.1, -1.0], rtol=1e-6)

    def test_consecutive_operators_overwrite(self, royal_table):
        result = evaluate_expression(["king", "-", "+", "man"], royal_table)

        np.testing.assert_allclose(result.vector, [1.1, 1.0], rtol=1e-6)

    def test_unknown_word_is_skipped_with_warning(self, royal_table, caplog):
        with caplog.at_level(logging.WARNING, logger="wordvec_analogy"):
            result = evaluate_expression(["king", "+", "zzz"], royal_table)

        np.testing.assert_array_equal(result.vector, royal_table.get_vector("king"))
        assert result.words == ["king"]
        assert result.unknown == ["zzz"]
        assert "'zzz' not in vocabulary" in caplog.text

    def test_no_known_words(self, royal_table):
        with pytest.raises(EmptyInput):
            evaluate_expression(["zzz", "-", "yyy"], royal_table)

    def test_only_operators(self, royal_table):
        with pytest.raises(EmptyInput):
            evaluate_expression(["+", "-"], royal_table)

    def test_does_not_modify_table(self, royal_table):
        before = royal_table.vectors.copy()

        evaluate_expression(["king", "-", "man"], royal_table)

        np.testing.assert_array_equal(royal_table.vectors, before)


class TestCombine:
    """Tests for combine."""

    def test_expression_mode(self, royal_table):
        result = combine(["king", "-", "man"], royal_table, mode="expression")

        np.testing.assert_allclose(result.vector, [0.9, -1.0], rtol=1e-6)

    def test_sum_mode(self, abc_table):
        result = combine(["a", "b", "c"], abc_table, mode="sum")

        np.testing.assert_allclose(result.vector, [2.0, 2.0])
        assert result.mode == "sum"

    def test_average_mode(self, abc_table):
        result = combine(["a", "b"], abc_table, mode="average")

        np.testing.assert_allclose(result.vector, [0.5, 0.5])
        assert result.words == ["a", "b"]

    def test_average_then_search(self, abc_table):
        result = combine(["a", "b"], abc_table, mode="average")

        nearest = find_nearest(abc_table, result.vector, exclude=set(result.words))

        assert nearest.word == "c"
        assert nearest.score == pytest.approx(1.0)

    def test_average_skips_unknown_words(self, abc_table, caplog):
        with caplog.at_level(logging.WARNING, logger="wordvec_analogy"):
            result = combine(["a", "nope", "b"], abc_table, mode="average")

        np.testing.assert_allclose(result.vector, [0.5, 0.5])
        assert result.unknown == ["nope"]
        assert "'nope' not in vocabulary" in caplog.text

    def test_operators_ignored_in_sum_mode(self, abc_table, caplog):
        with caplog.at_level(logging.WARNING, logger="wordvec_analogy"):
            result = combine(["a", "-", "b"], abc_table, mode="sum")

        np.testing.assert_allclose(result.vector, [1.0, 1.0])
        assert "no effect in sum mode" in caplog.text

    @pytest.mark.parametrize("mode", ["expression", "sum", "average"])
    def test_no_valid_words(self, abc_table, mode):
        with pytest.raises(EmptyInput, match="No valid input words"):
            combine(["x", "y"], abc_table, mode=mode)

    def test_unknown_mode(self, abc_table):
        with pytest.raises(ValueError, match="Unknown combination mode"):
            combine(["a"], abc_table, mode="product")
