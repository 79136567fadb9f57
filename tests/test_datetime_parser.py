from datetime import datetime, timedelta, timezone

import pytest

from received_field.datetime_parser import DATE_TIME_RE, format_date_time, parse_date_time


def test_parses_full_clause_with_literal_offset():
    dt = parse_date_time('Tue, 10 May 2005 17:26:50 -0500')
    assert dt == datetime(2005, 5, 10, 17, 26, 50, tzinfo=timezone(timedelta(hours=-5)))
    # the offset is kept, not normalized
    assert dt.utcoffset() == timedelta(hours=-5)
    assert dt.hour == 17


def test_weekday_and_seconds_are_optional():
    dt = parse_date_time('25 Jan 2011 12:31 +0530')
    assert dt == datetime(2011, 1, 25, 12, 31, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))


def test_trailing_zone_comment_is_ignored():
    dt = parse_date_time('Tue, 10 May 2005 17:26:50 +0000 (GMT)')
    assert dt is not None
    assert dt.utcoffset() == timedelta(0)


def test_negative_zero_offset():
    dt = parse_date_time('25 Jan 2011 12:31:11 -0000')
    assert dt.utcoffset() == timedelta(0)


def test_leap_day():
    assert parse_date_time('29 Feb 2012 10:00:00 +0000') is not None
    assert parse_date_time('29 Feb 2013 10:00:00 +0000') is None


@pytest.mark.parametrize('clause', [
    'Mon, 29 Jul 2013 25:12:46 +0900',   # hour
    'Mon, 29 Jul 2013 12:60:46 +0900',   # minute
    'Mon, 29 Jul 2013 12:12:60 +0900',   # second
    'Mon, 32 Jul 2013 12:12:46 +0900',   # day
    '31 Apr 2013 12:12:46 +0900',        # day for that month
    'Mon, 29 Jul 2013 12:12:46 +0960',   # offset minutes
    'Mon, 29 Jul 2013 12:12:46 +2400',   # offset hours
])
def test_out_of_range_fields_give_no_date(clause):
    assert parse_date_time(clause) is None


@pytest.mark.parametrize('clause', [
    '',
    'yesterday',
    'Mon, 29 Jul 2013',
    'Mon, 29 Jul 2013 12:12:46',
    'Mon, 29 Jul 2013 12:12:46 GMT',
    'Mon 29 Jul 2013 12:12:46 +0000',
    '29 Jul 13 12:12:46 +0000',
    'Mon, 29 Jul 2013 12:12:46 +0000 (GMT) (extra)',
    'Mon, 29 Jul 2013 12:12:46 +0000 trailing',
])
def test_structural_mismatch_gives_no_date(clause):
    assert parse_date_time(clause) is None


def test_format_keeps_offset():
    dt = datetime(2005, 5, 10, 17, 26, 50, tzinfo=timezone(timedelta(hours=-5)))
    assert format_date_time(dt) == 'Tue, 10 May 2005 17:26:50 -0500'


def test_format_half_hour_offset():
    dt = datetime(2011, 1, 5, 1, 2, 3, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    assert format_date_time(dt) == 'Wed, 05 Jan 2011 01:02:03 +0530'


def test_month_and_weekday_are_case_insensitive():
    dt = parse_date_time('WED, 13 MAR 2019 14:50:05 -0700')
    assert dt == datetime(2019, 3, 13, 14, 50, 5, tzinfo=timezone(timedelta(hours=-7)))


def test_full_month_names_are_not_accepted():
    assert parse_date_time('13 March 2019 14:50:05 -0700') is None


def test_grammar_does_not_allow_a_trailing_newline():
    assert DATE_TIME_RE.fullmatch('13 Mar 2019 14:50:05 -0700\n') is None
    assert DATE_TIME_RE.fullmatch('13 Mar 2019 14:50:05 -0700') is not None


def test_negative_zero_offset_formats_as_plus_zero():
    assert format_date_time(parse_date_time('25 Jan 2011 12:31:11 -0000')) == 'Tue, 25 Jan 2011 12:31:11 +0000'
