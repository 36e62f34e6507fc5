from datetime import datetime

from helpers import entry

from xtime_app.analytics.aggregations.projects import by_project, project_distribution, project_key


def test_project_key_prefix():
    assert project_key("ABC-123") == "ABC"
    assert project_key("DATA-OPS-7") == "DATA"
    assert project_key("NOHYPHEN") == "NOHYPHEN"


def test_by_project_sums_hours_per_prefix():
    entries = [
        entry(datetime(2024, 1, 15, 9), seconds=3600, issue_key="ABC-1", entry_id="1"),
        entry(datetime(2024, 1, 15, 10), seconds=1800, issue_key="XYZ-9", entry_id="2"),
        entry(datetime(2024, 1, 16, 9), seconds=1800, issue_key="ABC-2", entry_id="3"),
        entry(datetime(2024, 1, 16, 9), seconds=600, issue_key="SOLO", entry_id="4"),
    ]
    buckets = by_project(entries)
    assert buckets == {"ABC": 1.5, "XYZ": 0.5, "SOLO": 0.17}


def test_by_project_total_matches_entries():
    entries = [
        entry(datetime(2024, 1, 15, 9), seconds=5400, issue_key="ABC-1", entry_id="1"),
        entry(datetime(2024, 1, 15, 10), seconds=1800, issue_key="XYZ-9", entry_id="2"),
    ]
    assert sum(by_project(entries).values()) == 2.0


def test_empty_input():
    assert by_project([]) == {}
    frame = project_distribution({})
    assert frame.empty
    assert list(frame.columns) == ["project", "hours"]


def test_distribution_sorted_by_hours():
    entries = [
        entry(datetime(2024, 1, 15, 9), seconds=600, issue_key="ABC-1", entry_id="1"),
        entry(datetime(2024, 1, 15, 10), seconds=7200, issue_key="XYZ-9", entry_id="2"),
    ]
    frame = project_distribution(by_project(entries))
    assert frame["project"].tolist() == ["XYZ", "ABC"]
