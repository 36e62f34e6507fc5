import json
from datetime import date

import pytest
import pytz

from xtime_app.core.jira_client import JiraAPI, JiraRequestError
from xtime_app.core.service import WorklogService
from xtime_app.features.dashboard import STATUS_MOCK, load_dashboard


class FakeResponse:
    def __init__(self, body, status_code=200):
        self.status_code = status_code
        self.text = body if isinstance(body, str) else json.dumps(body)

    def json(self):
        return json.loads(self.text)


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(("get", url, kwargs))
        return self.responses.pop(0)

    def post(self, url, **kwargs):
        self.calls.append(("post", url, kwargs))
        return self.responses.pop(0)


class FakeClient:
    def __init__(self, session):
        self._session = session


class SessionAPI(JiraAPI):
    def __init__(self, responses):
        self.server = "https://example.atlassian.net"
        self.client = FakeClient(FakeSession(responses))
        self._cache = {}
        self._cache_ttl = 300

    @property
    def session(self):
        return self.client._session

    def myself(self):
        return {"accountId": "me"}


LOGIN_PAGE = "<html><body>Please log in</body></html>"


def test_search_follows_next_page_token():
    api = SessionAPI(
        [
            FakeResponse({"issues": [{"key": "A-1"}], "nextPageToken": "p2"}),
            FakeResponse({"issues": [{"key": "A-2"}], "isLast": True}),
        ]
    )
    issues = api.search_enhanced("project = A", fields=["summary"])
    assert [i["key"] for i in issues] == ["A-1", "A-2"]
    assert api.session.calls[1][2]["params"]["nextPageToken"] == "p2"
    # served from cache the second time
    assert api.search_enhanced("project = A", fields=["summary"]) == issues
    assert len(api.session.calls) == 2


def test_search_with_html_body_raises_request_error():
    api = SessionAPI([FakeResponse(LOGIN_PAGE)])
    with pytest.raises(JiraRequestError):
        api.search_enhanced("project = A")


def test_worklog_paging_with_html_body_raises_request_error():
    api = SessionAPI([FakeResponse({"worklogs": [{"id": "1"}], "total": 2}), FakeResponse(LOGIN_PAGE)])
    with pytest.raises(JiraRequestError):
        api.fetch_issue_worklogs("A-1")


def test_add_worklog_body_handling():
    api = SessionAPI([FakeResponse({"id": "5"}, 201), FakeResponse("", 201), FakeResponse(LOGIN_PAGE)])
    assert api.add_worklog("A-1", {"timeSpentSeconds": 60}) == {"id": "5"}
    assert api.add_worklog("A-1", {"timeSpentSeconds": 60}) == {}
    with pytest.raises(JiraRequestError):
        api.add_worklog("A-1", {"timeSpentSeconds": 60})


def test_error_status_raises_request_error():
    api = SessionAPI([FakeResponse({"errorMessages": ["bad jql"]}, 400)])
    with pytest.raises(JiraRequestError):
        api.search_enhanced("bad")


def test_dashboard_falls_back_when_search_returns_html():
    api = SessionAPI([FakeResponse(LOGIN_PAGE)])
    ctx = load_dashboard(WorklogService(api), mode="weekly", today=date(2024, 1, 17), tz=pytz.UTC)
    assert ctx.status == STATUS_MOCK
    assert "not JSON" in ctx.error
