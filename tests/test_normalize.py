import pytest

from challenger.scoring.normalize import (
    epley_one_rep_max,
    format_raw_value,
    format_time,
    normalize_raw_value,
    parse_time,
    round_half_up,
)


class TestNormalizeRawValue:
    def test_single_rep_is_identity(self):
        assert normalize_raw_value('squat', 140, 1) == 140
        assert normalize_raw_value('bench', 97.5, None) == 97.5

    def test_multi_rep_uses_epley(self):
        assert normalize_raw_value('deadlift', 100, 5) == pytest.approx(100 * (1 + 5 / 30))
        assert normalize_raw_value('squat', 90, 10) == pytest.approx(120)

    def test_endurance_ignores_reps(self):
        assert normalize_raw_value('rowing_500m', 95.2, 5) == 95.2
        assert normalize_raw_value('rowing_4min', 1150, 3) == 1150

    def test_unknown_activity_passes_through(self):
        assert normalize_raw_value('curling', 42, 5) == 42

    def test_epley_identity(self):
        assert epley_one_rep_max(123.4, 1) == 123.4


class TestParseTime:
    @pytest.mark.parametrize('text, expected', [
        ('1:26.3', 86.3),
        ('95', 95.0),
        ('0:45', 45.0),
        ('1:26.35', 86.35),
        (' 2:05.1 ', 125.1),
        ('12.5', 12.5),
    ])
    def test_valid(self, text, expected):
        assert parse_time(text) == pytest.approx(expected)

    def test_numbers_pass_through(self):
        assert parse_time(88) == 88.0

    @pytest.mark.parametrize('text', ['', 'abc', '1:2:3', '-5', '1:', ':30'])
    def test_malformed_raises(self, text):
        with pytest.raises(ValueError):
            parse_time(text)


class TestFormatTime:
    def test_over_a_minute(self):
        assert format_time(86.3) == '1:26.3 (mm:ss.ms)'

    def test_under_a_minute(self):
        assert format_time(45.2) == '45.2 (ss.ms)'

    def test_rounds_before_splitting(self):
        assert format_time(59.96) == '1:00.0 (mm:ss.ms)'

    def test_pads_seconds(self):
        assert format_time(65) == '1:05.0 (mm:ss.ms)'


class TestFormatRawValue:
    def test_weight_with_reps(self):
        assert format_raw_value('squat', 100, 5) == '100kg × 5'

    def test_weight_defaults_to_one_rep(self):
        assert format_raw_value('bench', 82.5) == '82.5kg × 1'

    def test_time(self):
        assert format_raw_value('rowing_500m', 86.3) == '1:26.3 (mm:ss.ms)'

    def test_distance_rounds_half_up(self):
        assert format_raw_value('rowing_4min', 1202.5) == '1203m'

    def test_unknown(self):
        assert format_raw_value('curling', 42) == '42'


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
