"""
Unit tests for derived values (fit score and profile completion).
"""

import pytest

from redzone.contexts.scoring import (
    compute_fit_score,
    compute_profile_completion,
    parse_leading_float,
)
from redzone.contexts.tracker import Achievement, Profile


class TestComputeFitScore:
    """Tests for compute_fit_score."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "gpa, expected",
        [
            ("4.0", 100),
            ("0", 0),
            ("3.0", 75),
            ("2.5", 63),
            ("5.0", 100),
            ("-1.2", 0),
        ],
    )
    def test_scales_gpa_onto_0_to_100(self, gpa, expected):
        assert compute_fit_score(gpa) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("gpa", ["not-a-number", "", "   ", "GPA 3.5", "nan"])
    def test_unparsable_gpa_scores_neutral_50(self, gpa):
        assert compute_fit_score(gpa) == 50

    @pytest.mark.unit
    def test_reads_leading_number_and_ignores_suffix(self):
        assert compute_fit_score("3.6 weighted") == 90

    @pytest.mark.unit
    def test_halves_round_up(self):
        # 0.02 / 4 * 100 == 0.5
        assert compute_fit_score("0.02") == 1

    @pytest.mark.unit
    def test_infinity_clamps_to_100(self):
        assert compute_fit_score("Infinity") == 100
        assert compute_fit_score("-Infinity") == 0

    @pytest.mark.unit
    @pytest.mark.parametrize("gpa", ["1e9", "-1e9", "3.999", "0.001", "4.0001", "1e-9"])
    def test_always_within_bounds(self, gpa):
        assert 0 <= compute_fit_score(gpa) <= 100


class TestParseLeadingFloat:
    """Tests for parse_leading_float."""

    @pytest.mark.unit
    def test_plain_and_prefixed_numbers(self):
        assert parse_leading_float("3.6") == 3.6
        assert parse_leading_float("  .5") == 0.5
        assert parse_leading_float("4.") == 4.0
        assert parse_leading_float("3.2/4.0") == 3.2
        assert parse_leading_float("2e1x") == 20.0

    @pytest.mark.unit
    def test_no_leading_number(self):
        assert parse_leading_float("abc") is None
        assert parse_leading_float("") is None
        assert parse_leading_float(".") is None


class TestComputeProfileCompletion:
    """Tests for compute_profile_completion."""

    @pytest.mark.unit
    def test_empty_profile_is_zero(self):
        assert compute_profile_completion(Profile()) == 0

    @pytest.mark.unit
    def test_all_scalar_fields_without_achievements(self, full_profile_fields):
        profile = Profile(**full_profile_fields)
        assert compute_profile_completion(profile) == 89

    @pytest.mark.unit
    def test_achievements_count_once(self, full_profile_fields):
        one = Profile(**full_profile_fields, achievements=(Achievement(1, "All-State"),))
        two = Profile(
            **full_profile_fields,
            achievements=(Achievement(1, "All-State"), Achievement(2, "Team captain")),
        )

        assert compute_profile_completion(one) == 100
        assert compute_profile_completion(two) == 100

    @pytest.mark.unit
    def test_partial_profile(self):
        profile = Profile(name="Jordan", gpa="3.6", position="WR", height="6'1\"")
        assert compute_profile_completion(profile) == 44

    @pytest.mark.unit
    def test_only_achievements(self):
        profile = Profile(achievements=(Achievement(1, "All-State"),))
        assert compute_profile_completion(profile) == 11
