from datetime import date, datetime

import pytz

from helpers import entry

from xtime_app.analytics.filters import filter_entries, local_day
from xtime_app.core.models import CalendarWindow

UTC = pytz.UTC
WINDOW = CalendarWindow(start=date(2024, 1, 15), end=date(2024, 1, 21))


def _sample():
    return [
        entry(datetime(2024, 1, 14, 23, 59), entry_id="before"),
        entry(datetime(2024, 1, 15, 0, 0), entry_id="first-day"),
        entry(datetime(2024, 1, 17, 12, 0), entry_id="mid", author_id="colleague"),
        entry(datetime(2024, 1, 21, 23, 59), entry_id="last-day"),
        entry(datetime(2024, 1, 22, 0, 0), entry_id="after"),
        entry(datetime(2024, 1, 18, 9, 0), entry_id="unknown-author", author_id=None),
    ]


def test_range_is_inclusive_on_both_ends():
    kept = filter_entries(_sample(), WINDOW, trusted_author_id="me", tz=UTC)
    assert [e.id for e in kept] == ["first-day", "last-day"]


def test_other_authors_dropped_when_author_known():
    kept = filter_entries(_sample(), WINDOW, trusted_author_id="me", tz=UTC)
    assert all(e.author_id == "me" for e in kept)


def test_fallback_without_author_filters_by_date_only():
    kept = filter_entries(_sample(), WINDOW, trusted_author_id=None, tz=UTC)
    assert [e.id for e in kept] == ["first-day", "mid", "last-day", "unknown-author"]


def test_filter_is_idempotent():
    once = filter_entries(_sample(), WINDOW, trusted_author_id="me", tz=UTC)
    twice = filter_entries(once, WINDOW, trusted_author_id="me", tz=UTC)
    assert once == twice
    once_nf = filter_entries(_sample(), WINDOW, tz=UTC)
    assert filter_entries(once_nf, WINDOW, tz=UTC) == once_nf


def test_local_timezone_decides_the_day():
    istanbul = pytz.timezone("Europe/Istanbul")
    # 22:30 UTC on Sunday is already Monday 01:30 in Istanbul
    late = entry(datetime(2024, 1, 21, 22, 30), entry_id="late")
    assert local_day(late.started, UTC) == date(2024, 1, 21)
    assert local_day(late.started, istanbul) == date(2024, 1, 22)
    assert filter_entries([late], WINDOW, tz=UTC) == [late]
    assert filter_entries([late], WINDOW, tz=istanbul) == []


def test_naive_datetime_treated_as_utc():
    assert local_day(datetime(2024, 1, 15, 23, 0), UTC) == date(2024, 1, 15)
