from datetime import datetime, timedelta, timezone

import pytest

from ekit.nulls import (
    Null,
    new_null_bool,
    new_null_bytes,
    new_null_float64,
    new_null_int64,
    new_null_string,
    new_null_time,
)


@pytest.mark.parametrize(
    "val, want",
    [(True, Null(True, True)), (False, Null(False, False))],
)
def test_new_null_bool(val, want):
    assert new_null_bool(val) == want


@pytest.mark.parametrize(
    "val, want",
    [(b"test", Null("test", True)), (b"", Null("", False))],
)
def test_new_null_bytes(val, want):
    assert new_null_bytes(val) == want


@pytest.mark.parametrize(
    "val, want",
    [(1.1, Null(1.1, True)), (0.0, Null(0.0, False))],
)
def test_new_null_float64(val, want):
    assert new_null_float64(val) == want


@pytest.mark.parametrize(
    "val, want",
    [(1, Null(1, True)), (0, Null(0, False))],
)
def test_new_null_int64(val, want):
    assert new_null_int64(val) == want


@pytest.mark.parametrize(
    "val, want",
    [("test", Null("test", True)), ("", Null("", False))],
)
def test_new_null_string(val, want):
    assert new_null_string(val) == want


def test_new_null_time_nonzero():
    moment = datetime(2023, 10, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert new_null_time(moment) == Null(moment, True)


def test_new_null_time_zero():
    assert new_null_time(datetime.min) == Null(datetime.min, False)


def test_new_null_time_zero_aware():
    zero = datetime(1, 1, 1, tzinfo=timezone.utc)
    assert new_null_time(zero).valid is False


def test_new_null_time_zero_instant_in_other_zone():
    zone = timezone(timedelta(hours=-1))
    moment = datetime(1, 1, 1, 1, 0, 0, tzinfo=timezone.utc).astimezone(zone)
    assert new_null_time(moment).valid is True
    moment_zero = datetime(1, 1, 1, 0, 0, 0, tzinfo=timezone(timedelta(hours=1)))
    assert new_null_time(moment_zero).valid is True


def test_new_null_time_none():
    assert new_null_time(None) == Null(None, False)