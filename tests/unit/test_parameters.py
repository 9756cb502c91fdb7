"""Unit tests for the ParameterSet model and permissive parameter resolution."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from zseeker_service.core.parameters import (
    parse_float,
    parse_int,
    parse_score_list,
    resolve_parameters,
)
from zseeker_service.models.parameters import (
    DEFAULT_CONSECUTIVE_AT_SCORING,
    FORM_FIELD_NAMES,
    ParameterSet,
)


class TestParameterSet:
    """Tests for ParameterSet defaults and invariants."""

    def test_default_values(self):
        """Should carry the canonical default table."""
        params = ParameterSet()
        assert params.gc_weight == 7.0
        assert params.at_weight == 0.5
        assert params.gt_weight == 1.0
        assert params.ac_weight == 1.0
        assert params.mismatch_penalty_starting_value == 1
        assert params.mismatch_penalty_linear_delta == 2
        assert params.mismatch_penalty_type == "linear"
        assert params.method == "transitions"
        assert params.cadence_reward == 1.0
        assert params.n_jobs == 8
        assert params.threshold == 50
        assert params.consecutive_at_scoring == (0.5, 0.5, 0.5, 0.5, 0.0, 0.0, -5.0, -100.0)

    def test_default_curve_has_eight_values(self):
        assert len(DEFAULT_CONSECUTIVE_AT_SCORING) == 8

    def test_frozen(self):
        """Should be immutable."""
        params = ParameterSet()
        with pytest.raises(ValidationError):
            params.gc_weight = 3.0

    def test_rejects_empty_curve(self):
        with pytest.raises(ValidationError):
            ParameterSet(consecutive_at_scoring=())

    def test_rejects_non_finite_weight(self):
        with pytest.raises(ValidationError):
            ParameterSet(gc_weight=float("nan"))

    def test_form_names_cover_every_field(self):
        """Every ParameterSet field should be reachable from the form."""
        assert set(FORM_FIELD_NAMES.values()) == set(ParameterSet.model_fields)


class TestScalarParsers:
    """Tests for parse_float / parse_int."""

    def test_parse_float_strips_whitespace(self):
        assert parse_float("  6.25 ") == 6.25

    @pytest.mark.parametrize("raw", ["abc", "", "nan", "inf", "-Infinity"])
    def test_parse_float_rejects(self, raw: str):
        with pytest.raises(ValueError):
            parse_float(raw)

    def test_parse_int_accepts_sign(self):
        assert parse_int("-3") == -3

    @pytest.mark.parametrize("raw", ["1.5", "abc", "", "0x10"])
    def test_parse_int_rejects(self, raw: str):
        with pytest.raises(ValueError):
            parse_int(raw)


class TestParseScoreList:
    """Tests for comma-separated AT scoring curves."""

    def test_invalid_tokens_dropped_in_order(self):
        assert parse_score_list("1.0,bad,2.0") == (1.0, 2.0)

    def test_whitespace_trimmed(self):
        assert parse_score_list(" 0.5 , -5 ,  -100") == (0.5, -5.0, -100.0)

    def test_warns_for_dropped_tokens(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING):
            parse_score_list("1.0,oops")
        assert "oops" in caplog.text

    @pytest.mark.parametrize("raw", ["", "bad", ",,", "x,y,nan"])
    def test_nothing_usable_raises(self, raw: str):
        with pytest.raises(ValueError):
            parse_score_list(raw)


class TestResolveParameters:
    """Tests for resolve_parameters permissive policy."""

    def test_empty_form_gives_defaults(self):
        assert resolve_parameters({}) == ParameterSet()

    def test_valid_values_parsed(self):
        params = resolve_parameters({
            "GC_weight": "6.5",
            "AT_weight": "0.25",
            "GT_weight": "2",
            "AC_weight": "3.0",
            "mismatch_penalty_starting_value": "4",
            "mismatch_penalty_linear_delta": "5",
            "mismatch_penalty_type": "exponential",
            "method": "coverage",
            "cadence_reward": "0.75",
            "n_jobs": "2",
            "threshold": "30",
            "consecutive_AT_scoring": "1,2,3",
        })
        assert params.gc_weight == 6.5
        assert params.at_weight == 0.25
        assert params.gt_weight == 2.0
        assert params.ac_weight == 3.0
        assert params.mismatch_penalty_starting_value == 4
        assert params.mismatch_penalty_linear_delta == 5
        assert params.mismatch_penalty_type == "exponential"
        assert params.method == "coverage"
        assert params.cadence_reward == 0.75
        assert params.n_jobs == 2
        assert params.threshold == 30
        assert params.consecutive_at_scoring == (1.0, 2.0, 3.0)

    def test_invalid_field_uses_default(self):
        """A single bad field should fall back without affecting others."""
        params = resolve_parameters({"GC_weight": "abc", "AT_weight": "0.9"})
        assert params.gc_weight == 7.0
        assert params.at_weight == 0.9

    def test_default_substitution_is_idempotent(self):
        form = {"GC_weight": "abc", "n_jobs": "many"}
        assert resolve_parameters(form) == resolve_parameters(form)

    @pytest.mark.parametrize("field", ["n_jobs", "threshold", "mismatch_penalty_linear_delta"])
    def test_invalid_integer_uses_default(self, field: str):
        params = resolve_parameters({field: "3.5"})
        assert getattr(params, field) == getattr(ParameterSet(), field)

    def test_partial_curve_keeps_valid_tokens(self):
        params = resolve_parameters({"consecutive_AT_scoring": "1.0,bad,2.0"})
        assert params.consecutive_at_scoring == (1.0, 2.0)

    @pytest.mark.parametrize("raw", ["", "   ", "bad,worse"])
    def test_unusable_curve_uses_default(self, raw: str):
        params = resolve_parameters({"consecutive_AT_scoring": raw})
        assert params.consecutive_at_scoring == DEFAULT_CONSECUTIVE_AT_SCORING

    def test_blank_text_fields_use_default(self):
        params = resolve_parameters({"mismatch_penalty_type": "  ", "method": ""})
        assert params.mismatch_penalty_type == "linear"
        assert params.method == "transitions"

    def test_text_fields_passed_through(self):
        params = resolve_parameters({"mismatch_penalty_type": "Linear "})
        assert params.mismatch_penalty_type == "Linear "

    def test_none_values_treated_as_absent(self):
        assert resolve_parameters({"GC_weight": None}) == ParameterSet()

    def test_unknown_keys_ignored(self):
        assert resolve_parameters({"fasta": "x", "colour": "blue"}) == ParameterSet()

    def test_non_finite_weight_uses_default(self):
        assert resolve_parameters({"AT_weight": "inf"}).at_weight == 0.5
