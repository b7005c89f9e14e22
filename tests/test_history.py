from ledger.domain import RawBucket
from ledger.history import month_label, project_months, project_weeks, week_label
from helpers import make_entry


def test_month_label():
    assert month_label("2024-03") == "March 2024"
    assert month_label("1999-12") == "December 1999"


def test_week_label_keeps_padding():
    assert week_label("2024-W09") == "Week 09, 2024"
    assert week_label("2020-W53") == "Week 53, 2020"


def test_project_months_sorts_descending_and_copies_payload():
    e1 = make_entry("a", "2024-01-02", "Food", 5)
    e2 = make_entry("b", "2023-12-30", "Food", 7)
    buckets = {
        "2023-12": RawBucket(total=7, count=1, items=[e2]),
        "2024-01": RawBucket(total=5, count=1, items=[e1]),
    }
    history = project_months(buckets)

    assert [b.period_key for b in history] == ["2024-01", "2023-12"]
    assert history[0].label == "January 2024"
    assert history[0].items == (e1,)
    assert history[1].total == 7


def test_project_weeks_orders_across_years():
    buckets = {
        "2024-W02": RawBucket(total=1, count=0),
        "2023-W52": RawBucket(total=2, count=0),
        "2024-W10": RawBucket(total=3, count=0),
    }
    assert [b.period_key for b in project_weeks(buckets)] == ["2024-W10", "2024-W02", "2023-W52"]


def test_empty():
    assert project_months({}) == ()
    assert project_weeks({}) == ()
