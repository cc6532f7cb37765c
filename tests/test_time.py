from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from challenger.helpers.time import parse_timestamp

EXPECTED = datetime(2024, 3, 9, 12, 30, 0)
EPOCH = int(EXPECTED.replace(tzinfo=timezone.utc).timestamp())


@pytest.mark.parametrize('value', [
    EXPECTED,
    EXPECTED.replace(tzinfo=timezone.utc),
    datetime(2024, 3, 9, 23, 30, tzinfo=timezone(timedelta(hours=11))),
    EPOCH,
    EPOCH * 1000,
    str(EPOCH),
    '2024-03-09T12:30:00Z',
    '2024-03-09T12:30:00+00:00',
    {'seconds': EPOCH, 'nanoseconds': 0},
    {'_seconds': EPOCH, '_nanoseconds': 0},
    SimpleNamespace(seconds=EPOCH, nanoseconds=0),
])
def test_shapes_normalize_to_naive_utc(value):
    out = parse_timestamp(value)
    assert out == EXPECTED
    assert out.tzinfo is None


def test_date_becomes_midnight():
    assert parse_timestamp(date(2024, 3, 9)) == datetime(2024, 3, 9)


def test_none_and_blank():
    assert parse_timestamp(None) is None
    assert parse_timestamp('  ') is None


@pytest.mark.parametrize('value', [True, object(), {'nanoseconds': 5}])
def test_unrecognised_raises_type_error(value):
    with pytest.raises(TypeError):
        parse_timestamp(value)


def test_bad_string_raises_value_error():
    with pytest.raises(ValueError):
        parse_timestamp('not a date')
