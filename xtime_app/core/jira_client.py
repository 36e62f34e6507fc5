"""Jira API client wrapper (REST v3 enhanced search, worklogs, current user)."""

from __future__ import annotations

import hashlib
import json
import time
from typing import Any

import requests
from jira import JIRA, JIRAError

from .config import SEARCH_CACHE_TTL_SECONDS, SEARCH_PAGE_SIZE


class JiraRequestError(RuntimeError):
    """A Jira request failed (non-2xx response or transport error)."""


class JiraAPI:
    def __init__(self, server: str, email: str, token: str):
        self.server = server.rstrip("/")
        self.client = JIRA(
            basic_auth=(email, token), options={"server": self.server, "rest_api_version": "3"}
        )
        # Simple in-memory cache: {(hash): (timestamp, data)}
        self._cache: dict[str, tuple[float, list]] = {}
        self._cache_ttl = SEARCH_CACHE_TTL_SECONDS

    def clear_cache(self) -> None:
        """Reset the in-memory search cache."""
        cache = getattr(self, "_cache", None)
        if isinstance(cache, dict):
            cache.clear()

    def _session(self):
        session = getattr(self.client, "_session", None)
        if session is None:
            raise JiraRequestError("JIRA session unavailable")
        return session

    def _request(self, method: str, url: str, **kwargs):
        try:
            return getattr(self._session(), method)(url, **kwargs)
        except (JIRAError, requests.RequestException) as exc:
            raise JiraRequestError(f"{method.upper()} {url} failed: {exc}") from exc

    def _json(self, resp, context: str) -> dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as exc:
            raise JiraRequestError(f"{context}: response is not JSON: {resp.text[:200]!r}") from exc
        if not isinstance(data, dict):
            raise JiraRequestError(f"{context}: unexpected response body")
        return data

    def _cache_key(self, jql: str, fields, expand, page_size: int) -> str:
        payload = {
            "jql": jql,
            "fields": fields,
            "expand": expand,
            "page_size": page_size,
        }
        return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()

    def search_enhanced(
        self,
        jql: str,
        fields: list[str] | None = None,
        expand: list[str] | None = None,
        page_size: int = SEARCH_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        url = f"{self.server}/rest/api/3/search/jql"
        key = self._cache_key(jql, fields, expand, page_size)
        now = time.time()
        cached = self._cache.get(key)
        if cached and (now - cached[0]) < self._cache_ttl:
            return cached[1]
        params = {"jql": jql, "maxResults": page_size}
        if fields:
            params["fields"] = ",".join(fields)
        if expand:
            params["expand"] = ",".join(expand)
        out: list[dict[str, Any]] = []
        token = None
        while True:
            qp = dict(params)
            if token:
                qp["nextPageToken"] = token
            resp = self._request("get", url, params=qp)
            if resp.status_code >= 400:
                raise JiraRequestError(f"Enhanced search failed {resp.status_code}: {resp.text[:200]}")
            data = self._json(resp, "Enhanced search")
            out.extend(data.get("issues", []))
            token = data.get("nextPageToken")
            if not token or data.get("isLast") is True:
                break
        self._cache[key] = (now, out)
        return out

    def myself(self) -> dict[str, Any]:
        try:
            return self.client.myself()
        except (JIRAError, requests.RequestException) as exc:  # pragma: no cover - network error path
            raise JiraRequestError(f"Failed to resolve current user: {exc}") from exc

    def fetch_issue_worklogs(self, issue_key: str, page_size: int = 1000) -> list[dict[str, Any]]:
        """Return every worklog of ``issue_key`` (the search API truncates them)."""
        url = f"{self.server}/rest/api/3/issue/{issue_key}/worklog"
        out: list[dict[str, Any]] = []
        start_at = 0
        while True:
            resp = self._request("get", url, params={"startAt": start_at, "maxResults": page_size})
            if resp.status_code >= 400:
                raise JiraRequestError(
                    f"Worklog fetch for {issue_key} failed {resp.status_code}: {resp.text[:200]}"
                )
            data = self._json(resp, f"Worklog fetch for {issue_key}")
            page = data.get("worklogs") or []
            out.extend(page)
            total = data.get("total")
            start_at += len(page)
            if not page or not isinstance(total, int) or start_at >= total:
                break
        return out

    def add_worklog(self, issue_key: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.server}/rest/api/3/issue/{issue_key}/worklog"
        resp = self._request("post", url, data=json.dumps(payload))
        if resp.status_code >= 400:
            raise JiraRequestError(f"Worklog save failed {resp.status_code}: {resp.text[:200]}")
        if not (resp.text or "").strip():
            return {}
        return self._json(resp, f"Worklog save for {issue_key}")
