"""Open a WorklogService for an account, or None when it cannot authenticate."""

from __future__ import annotations

import logging

import requests
from jira import JIRAError

from .credentials import TokenStore
from .jira_client import JiraAPI
from .models import Account
from .service import TrustedAuthorCache, WorklogService

logger = logging.getLogger(__name__)


def open_service(
    account: Account | None,
    tokens: TokenStore,
    author_cache: TrustedAuthorCache | None = None,
) -> WorklogService | None:
    if account is None:
        return None
    token = tokens.resolve_token(account)
    if not token:
        logger.warning("No API token found for %s; switching to placeholder data", account.email)
        return None
    try:
        api = JiraAPI(account.domain, account.email, token)
    except (JIRAError, requests.RequestException) as exc:
        logger.warning("Could not connect to %s: %s", account.domain, exc)
        return None
    return WorklogService(api, author_cache=author_cache)
