"""Tests for the Duration value type."""

from datetime import datetime

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from measurekit import Duration

ONE_HOUR_ONE_MIN = 3_665_500_000_000  # 1h 1m 5.5s
ONE_MIN = 65_500_000_000  # 1m 5.5s
HALF_SECOND = 500_000_000


# ---------------------------------------------------------------------------
# Construction and decomposition
# ---------------------------------------------------------------------------

class TestDecomposition:
    def test_fields_for_hours_minutes_seconds(self):
        d = Duration(ONE_HOUR_ONE_MIN)
        assert d.nanoseconds == ONE_HOUR_ONE_MIN
        assert d.hours == 1
        assert d.minutes == 1
        assert d.seconds == 5
        assert d.milliseconds == 500.0

    def test_sub_millisecond_precision_is_kept_as_fraction(self):
        d = Duration(1_234_567)
        assert d.hours == d.minutes == d.seconds == 0
        assert d.milliseconds == pytest.approx(1.234567)

    def test_hours_are_not_wrapped_at_a_day(self):
        d = Duration(49 * 3_600_000_000_000 + 59 * 60_000_000_000)
        assert d.hours == 49
        assert d.minutes == 59

    def test_zero(self):
        d = Duration(0)
        assert (d.hours, d.minutes, d.seconds, d.milliseconds) == (0, 0, 0, 0.0)

    def test_negative_raises(self):
        with pytest.raises(AssertionError, match="cannot be negative"):
            Duration(-1)

    def test_beartype_rejects_float(self):
        with pytest.raises(BeartypeCallHintParamViolation):
            Duration(1.5)

    def test_bool_is_rejected(self):
        with pytest.raises(AssertionError, match="nanosecond count"):
            Duration(True)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class TestFormatting:
    @pytest.mark.parametrize(
        "nanoseconds,human,condensed,expressive",
        [
            (HALF_SECOND, "500.00ms", "500.00", "500.00 Milliseconds"),
            (5_500_000_000, "5.500sec", "5.500", "5.500 Seconds"),
            (ONE_MIN, "1min 5.500sec", "01:05.500", "1 Minutes, and 5.500 Seconds"),
            (
                ONE_HOUR_ONE_MIN,
                "1hrs 1min 5.500sec",
                "01:01:05.500",
                "1 Hours, 1 Minutes, and 5.500 Seconds",
            ),
        ],
        ids=["milliseconds", "seconds", "minutes", "hours"],
    )
    def test_tiers(self, nanoseconds, human, condensed, expressive):
        d = Duration(nanoseconds)
        assert d.to_string("Human") == human
        assert d.to_string("Condensed") == condensed
        assert d.to_string("Expressive") == expressive

    def test_default_format_is_human(self):
        d = Duration(ONE_MIN)
        assert d.to_string() == "1min 5.500sec"
        assert str(d) == "1min 5.500sec"

    def test_zero_renders_as_milliseconds(self):
        assert Duration(0).to_string() == "0.00ms"
        assert Duration(0).to_string("Condensed") == "0.00"

    def test_small_milliseconds_keep_two_decimals(self):
        assert Duration(5_500_000).to_string() == "5.50ms"
        assert Duration(5_005_000).to_string() == "5.00ms"

    @pytest.mark.parametrize(
        "nanoseconds,human,condensed",
        [
            (5_005_000, "5.00ms", "5.00"),
            (1_005_000, "1.00ms", "1.00"),
            (2_675_000, "2.67ms", "2.67"),
            (125_000, "0.13ms", "0.13"),
        ],
    )
    def test_millisecond_ties_follow_the_float_value(self, nanoseconds, human, condensed):
        # 5.005 is stored just below the tie, 0.125 is an exact tie and rounds up.
        d = Duration(nanoseconds)
        assert d.to_string("Human") == human
        assert d.to_string("Condensed") == condensed

    def test_coarser_units_force_finer_units(self):
        d = Duration(3_600_000_000_000)
        assert d.to_string("Human") == "1hrs 0min 0.000sec"
        assert d.to_string("Condensed") == "01:00:00.000"
        assert d.to_string("Expressive") == "1 Hours, 0 Minutes, and 0.000 Seconds"

    def test_milliseconds_are_zero_padded_in_second_tiers(self):
        assert Duration(2_007_000_000).to_string() == "2.007sec"
        assert Duration(62_070_000_000).to_string("Condensed") == "01:02.070"

    def test_millisecond_rounding_can_reach_one_thousand(self):
        assert Duration(1_999_600_000).to_string() == "1.1000sec"

    def test_two_digit_hours_are_not_padded_further(self):
        assert Duration(36_000_000_000_000).to_string("Condensed") == "10:00:00.000"
        assert Duration(125 * 3_600_000_000_000).to_string() == "125hrs 0min 0.000sec"

    def test_format_spec_selects_format(self):
        d = Duration(ONE_MIN)
        assert f"{d:Condensed}" == "01:05.500"
        assert f"{d}" == "1min 5.500sec"
        assert f"{d:Expressive}" == "1 Minutes, and 5.500 Seconds"

    def test_standard_format_spec_aligns_human_string(self):
        assert f"{Duration(5):>10}" == "    0.00ms"
        assert f"{Duration(ONE_MIN):<16}|" == "1min 5.500sec   |"
        assert f"{Duration(HALF_SECOND):^12}" == "  500.00ms  "

    def test_unknown_format_raises(self):
        with pytest.raises(BeartypeCallHintParamViolation):
            Duration(0).to_string("Verbose")

    def test_repr(self):
        assert repr(Duration(42)) == "Duration(42)"


# ---------------------------------------------------------------------------
# Arithmetic and comparison
# ---------------------------------------------------------------------------

class TestArithmetic:
    def test_add(self):
        assert Duration(3).add(Duration(4)).nanoseconds == 7
        assert (Duration(3) + Duration(4)).nanoseconds == 7

    def test_subtract(self):
        assert Duration(10).subtract(Duration(4)).nanoseconds == 6
        assert (Duration(10) - Duration(4)).nanoseconds == 6

    def test_subtract_clamps_to_zero(self):
        assert Duration(4).subtract(Duration(10)).nanoseconds == 0
        assert (Duration(4) - Duration(10)).nanoseconds == 0

    def test_add_preserves_large_values_exactly(self):
        big = Duration(2**70)
        assert (big + Duration(1)).nanoseconds == 2**70 + 1

    def test_operands_are_not_mutated(self):
        a, b = Duration(5), Duration(7)
        _ = a + b
        _ = a - b
        assert a.nanoseconds == 5
        assert b.nanoseconds == 7

    def test_adding_a_number_is_rejected(self):
        with pytest.raises(TypeError):
            Duration(5) + 5


class TestComparison:
    def test_predicates(self):
        small, large = Duration(1), Duration(2)
        assert small.less_than(large)
        assert large.greater_than(small)
        assert small.less_than_or_equal(small)
        assert large.greater_than_or_equal(large)
        assert small.equals(Duration(1))
        assert not small.equals(large)

    def test_operators(self):
        assert Duration(1) < Duration(2)
        assert Duration(2) > Duration(1)
        assert Duration(2) <= Duration(2)
        assert Duration(2) >= Duration(2)
        assert Duration(2) == Duration(2)
        assert Duration(2) != Duration(3)

    def test_numbers_compare_as_nanoseconds(self):
        d = Duration(1_000)
        assert d == 1_000
        assert d < 1_001
        assert d > 999.5
        assert 2_000 > d

    def test_unrelated_types_are_not_equal(self):
        assert Duration(1) != "1"

    def test_hash_matches_nanoseconds(self):
        assert len({Duration(5), Duration(5), Duration(6)}) == 2
        assert hash(Duration(5)) == hash(5)

    def test_sorting(self):
        values = [Duration(3), Duration(1), Duration(2)]
        assert [d.nanoseconds for d in sorted(values)] == [1, 2, 3]


class TestCoercion:
    def test_int_is_exact(self):
        assert int(Duration(2**60 + 1)) == 2**60 + 1

    def test_float(self):
        assert float(Duration(1_500)) == 1500.0


# ---------------------------------------------------------------------------
# to_date
# ---------------------------------------------------------------------------

class TestToDate:
    def test_time_of_day_projection(self):
        assert Duration(ONE_HOUR_ONE_MIN).to_date() == datetime(1899, 12, 31, 1, 1, 5, 500_000)

    def test_fractional_milliseconds_are_truncated(self):
        assert Duration(700_900_000).to_date() == datetime(1899, 12, 31, 0, 0, 0, 700_000)

    def test_hours_past_a_day_roll_the_date(self):
        assert Duration(25 * 3_600_000_000_000).to_date() == datetime(1900, 1, 1, 1, 0)
