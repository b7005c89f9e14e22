from datetime import date, datetime

import pytest

from ledger.aggregation import aggregate, compute_stats, series_keys
from helpers import make_entry

ANCHOR = date(2024, 3, 8)  # a Friday


def scenario():
    return (
        make_entry("e1", "2024-03-01", "Food", 100),
        make_entry("e2", "2024-03-01", "Food", 50),
        make_entry("e3", "2024-03-08", "Transport", 200),
    )


def test_scenario_totals():
    stats = compute_stats(scenario(), ANCHOR)

    assert stats.total == 350
    assert stats.daily == 200
    assert stats.monthly == 350
    assert stats.weekly == 200
    assert [(c.name, c.total) for c in stats.category_totals] == [("Transport", 200), ("Food", 150)]


def test_scenario_monthly_history():
    stats = compute_stats(scenario(), ANCHOR)

    assert len(stats.monthly_history) == 1
    march = stats.monthly_history[0]
    assert march.period_key == "2024-03"
    assert march.label == "March 2024"
    assert march.count == 3
    assert march.total == 350


def test_scenario_weekly_history():
    stats = compute_stats(scenario(), ANCHOR)

    assert [b.period_key for b in stats.weekly_history] == ["2024-W10", "2024-W09"]
    assert [b.total for b in stats.weekly_history] == [200, 150]
    assert stats.weekly_history[1].label == "Week 09, 2024"


def test_empty_entries():
    stats = compute_stats((), ANCHOR)

    assert (stats.daily, stats.weekly, stats.monthly, stats.total) == (0, 0, 0, 0)
    assert stats.category_totals == ()
    assert stats.monthly_history == ()
    assert stats.weekly_history == ()
    assert len(stats.seven_day_series) == 7
    assert all(p.total == 0 for p in stats.seven_day_series)


def test_seven_day_series_is_seeded_and_chronological():
    entries = (
        make_entry("a", "2024-03-02", "Food", 10),
        make_entry("b", "2024-03-08", "Food", 5),
        make_entry("c", "2024-03-08", "Health", 7),
        make_entry("d", "2024-03-01", "Food", 999),  # outside the window
        make_entry("e", "2024-03-09", "Food", 999),  # after the anchor
    )
    series = compute_stats(entries, ANCHOR).seven_day_series

    assert [p.date_key for p in series] == series_keys(ANCHOR)
    assert series[0].date_key == "2024-03-02"
    assert series[-1].date_key == "2024-03-08"
    assert [p.day for p in series] == ["Sat", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri"]
    assert [p.total for p in series] == [10, 0, 0, 0, 0, 0, 12]


def test_seven_day_series_normalizes_date_keys():
    entries = (make_entry("a", "2024-03-07T18:30:00", "Food", 40),)
    stats = compute_stats(entries, ANCHOR)

    assert stats.seven_day_series[-2].total == 40
    # daily is an exact key match, the suffix keeps it out
    assert compute_stats((make_entry("b", "2024-03-08T09:00:00", "Food", 1),), ANCHOR).daily == 0


def test_category_ties_keep_first_seen_order():
    entries = (
        make_entry("a", "2024-03-01", "Shopping", 50),
        make_entry("b", "2024-03-01", "Health", 10),
        make_entry("c", "2024-03-01", "Food", 50),
    )
    names = [c.name for c in compute_stats(entries, ANCHOR).category_totals]
    assert names == ["Shopping", "Food", "Health"]

    names = [c.name for c in compute_stats(tuple(reversed(entries)), ANCHOR).category_totals]
    assert names == ["Food", "Shopping", "Health"]


def test_category_grouping_is_raw_string():
    entries = (
        make_entry("a", "2024-03-01", "Food", 1),
        make_entry("b", "2024-03-01", "food", 2),
        make_entry("c", "2024-03-01", "Food ", 3),
    )
    totals = {c.name: c.total for c in compute_stats(entries, ANCHOR).category_totals}
    assert totals == {"Food": 1, "food": 2, "Food ": 3}


def test_unknown_category_gets_fallback_color():
    entries = (make_entry("a", "2024-03-01", "Pets", 5),)
    (pets,) = compute_stats(entries, ANCHOR).category_totals
    assert pets.name == "Pets"
    assert pets.color == "#94A3B8"


def test_category_totals_sum_to_total():
    entries = (
        make_entry("a", "2023-12-31", "Food", 12.5),
        make_entry("b", "2024-01-01", "Transport", 0.1),
        make_entry("c", "2024-02-29", "Food", 0.2),
        make_entry("d", "2024-03-08", "Health", "33.3"),
        make_entry("e", "2024-03-08", "Other", "oops"),
    )
    stats = compute_stats(entries, ANCHOR)
    assert sum(c.total for c in stats.category_totals) == pytest.approx(stats.total)


def test_unparsable_amount_counts_but_adds_zero():
    entries = (
        make_entry("a", "2024-03-08", "Food", "abc"),
        make_entry("b", "2024-03-08", "Food", None),
        make_entry("c", "2024-03-08", "Food", "12.5"),
        make_entry("d", "2024-03-08", "Food", float("nan")),
    )
    stats = compute_stats(entries, ANCHOR)

    assert stats.total == 12.5
    assert stats.daily == 12.5
    assert stats.monthly_history[0].count == 4
    assert len(stats.monthly_history[0].items) == 4


def test_week_membership_checks_owning_year():
    # 2023-01-04 is week 1 of 2023, the anchor is week 1 of 2025
    anchor = date(2024, 12, 30)
    entries = (
        make_entry("a", "2023-01-04", "Food", 10),
        make_entry("b", "2025-01-02", "Food", 20),
        make_entry("c", "2024-12-30", "Food", 30),
    )
    stats = compute_stats(entries, anchor)

    assert stats.weekly == 50
    assert stats.monthly == 30
    assert [b.period_key for b in stats.weekly_history] == ["2025-W01", "2023-W01"]


def test_monthly_requires_same_year():
    entries = (
        make_entry("a", "2023-03-08", "Food", 10),
        make_entry("b", "2024-03-31", "Food", 20),
    )
    assert compute_stats(entries, ANCHOR).monthly == 20


def test_bucket_items_keep_traversal_order():
    entries = (
        make_entry("late", "2024-03-20", "Food", 1),
        make_entry("early", "2024-03-02", "Food", 1),
        make_entry("mid", "2024-03-10", "Food", 1),
    )
    (march,) = compute_stats(entries, ANCHOR).monthly_history
    assert [e.id for e in march.items] == ["late", "early", "mid"]


def test_history_is_strictly_descending():
    entries = tuple(
        make_entry(str(i), key, "Food", 1)
        for i, key in enumerate(["2023-11-05", "2024-03-01", "2023-12-31", "2024-01-15", "2024-03-02"])
    )
    stats = compute_stats(entries, ANCHOR)

    months = [b.period_key for b in stats.monthly_history]
    weeks = [b.period_key for b in stats.weekly_history]
    assert months == ["2024-03", "2024-01", "2023-12", "2023-11"]
    assert all(a > b for a, b in zip(weeks, weeks[1:]))
    for bucket in stats.monthly_history + stats.weekly_history:
        assert bucket.count == len(bucket.items)


def test_idempotent():
    entries = scenario()
    assert compute_stats(entries, ANCHOR) == compute_stats(entries, ANCHOR)


def test_datetime_anchor():
    stats = compute_stats(scenario(), datetime(2024, 3, 8, 23, 45))
    assert stats.daily == 200


def test_accepts_any_iterable_without_mutating():
    entries = list(scenario())
    before = list(entries)
    compute_stats(iter(entries), ANCHOR)
    assert entries == before


def test_aggregate_leaves_buckets_unsorted():
    entries = (
        make_entry("a", "2024-01-10", "Food", 1),
        make_entry("b", "2024-03-01", "Food", 1),
        make_entry("c", "2024-02-01", "Food", 1),
    )
    rollup = aggregate(entries, ANCHOR)
    assert list(rollup.month_buckets) == ["2024-01", "2024-03", "2024-02"]


def test_unreadable_date_keys_fall_back_to_anchor():
    entries = (
        make_entry("empty", "", "Food", 3),
        make_entry("junk", "garbage", "Food", 4),
        make_entry("ok", "2024-01-15", "Food", 10),
    )
    stats = compute_stats(entries, ANCHOR)

    # daily is an exact string match, so neither fallback entry counts
    assert stats.daily == 0
    assert stats.weekly == 7
    assert stats.monthly == 7
    assert stats.total == 17
    assert stats.seven_day_series[-1].total == 7
    assert stats.monthly_history[0].period_key == "2024-03"
    assert [e.id for e in stats.monthly_history[0].items] == ["empty", "junk"]
    assert stats.weekly_history[0].period_key == "2024-W10"
    assert stats.weekly_history[0].count == 2
