#!/usr/bin/env python3
"""
GitHub Actions cache REST client

Wraps the one repository endpoint the save step needs:
- delete_cache_by_key(owner, repo, key) -> DeleteResult

Failures come back as DeleteResult(success=False), never as exceptions, so a
failed delete cannot stop the save that follows it.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from .constants import DEFAULT_API_URL
from .logging_utils import log_warning

logger = logging.getLogger(__name__)


@dataclass
class DeleteResult:
    """Result of a delete-by-key call."""
    success: bool
    key: str
    status_code: Optional[int] = None
    message: str = ""
    error_name: Optional[str] = None
    deleted: List[Dict[str, Any]] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)


class ActionsCacheClient:
    """
    Client for the repository Actions cache API.

    Auth: bearer token (the job's GITHUB_TOKEN needs ``actions: write``).
    """

    DEFAULT_TIMEOUT = 30
    API_VERSION = "2022-11-28"

    def __init__(self, token: str, api_url: str = DEFAULT_API_URL, timeout: Optional[int] = None):
        self.token = token
        self.api_url = (api_url or DEFAULT_API_URL).rstrip("/")
        self.timeout = timeout or self.DEFAULT_TIMEOUT

        if not self.token:
            logger.warning("No GitHub token configured, cache API calls will be rejected")

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def delete_cache_by_key(self, owner: str, repo: str, key: str) -> DeleteResult:
        """Delete every cache entry of ``owner/repo`` stored under ``key``."""
        url = f"{self.api_url}/repos/{owner}/{repo}/actions/caches"

        try:
            resp = requests.delete(
                url,
                params={"key": key},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log_warning(f"{e.__class__.__name__} '{e}' trying to delete cache with key: {key}")
            return DeleteResult(
                success=False, key=key, message=str(e), error_name=e.__class__.__name__,
            )

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        if resp.status_code >= 400:
            message = data.get("message") or resp.text[:200]
            log_warning(f"HttpError '{resp.status_code}: {message}' trying to delete cache with key: {key}")
            return DeleteResult(
                success=False,
                key=key,
                status_code=resp.status_code,
                message=message,
                error_name="HttpError",
            )

        caches = data.get("actions_caches")
        deleted = [entry for entry in caches if isinstance(entry, dict)] if isinstance(caches, list) else []
        if resp.status_code == 200:
            deleted_key = deleted[0].get("key", key) if deleted else key
            logger.info(f"Successfully deleted cache with key: {deleted_key}")

        return DeleteResult(
            success=True,
            key=key,
            status_code=resp.status_code,
            deleted=deleted,
        )
