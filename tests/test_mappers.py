from helpers import raw_worklog

from xtime_app.core.mappers import (
    WORKLOG_COLUMNS,
    adf_to_text,
    map_issue_option,
    map_issue_worklogs,
    map_worklog,
    worklogs_to_dataframe,
)


def test_adf_to_text_flattens_paragraphs():
    doc = {
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": "first"}]},
            {"type": "paragraph", "content": [{"type": "text", "text": "second"}]},
        ],
    }
    assert adf_to_text(doc) == "first\nsecond"
    assert adf_to_text("plain") == "plain"
    assert adf_to_text(None) is None
    assert adf_to_text({"type": "doc", "content": []}) is None


def test_map_worklog_fields():
    entry = map_worklog(raw_worklog("2024-01-15T09:30:00.000+0300", 1800, "acc-1", "7"), "ABC-1", "Sum")
    assert entry.id == "7"
    assert entry.time_spent_seconds == 1800
    assert entry.author_id == "acc-1"
    assert entry.started.hour == 6
    assert entry.comment == "work"


def test_map_worklog_skips_missing_start_and_clamps_seconds():
    assert map_worklog({"id": "1"}, "ABC-1", "") is None
    raw = raw_worklog("2024-01-15T09:30:00.000+0000", -20)
    assert map_worklog(raw, "ABC-1", "").time_spent_seconds == 0


def test_map_issue_worklogs_and_option():
    issue = {
        "key": "ABC-9",
        "fields": {
            "summary": "Deploy",
            "status": {"name": "To Do"},
            "worklog": {"worklogs": [raw_worklog("2024-01-15T09:00:00.000+0000"), {"id": "x"}]},
        },
    }
    entries = map_issue_worklogs(issue)
    assert len(entries) == 1
    assert entries[0].issue_summary == "Deploy"
    option = map_issue_option(issue)
    assert (option.key, option.status_name) == ("ABC-9", "To Do")


def test_empty_dataframe_keeps_columns():
    df = worklogs_to_dataframe([])
    assert df.empty
    assert list(df.columns) == list(WORKLOG_COLUMNS)
