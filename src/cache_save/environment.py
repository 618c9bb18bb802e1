"""Checks that decide whether this run may use the cache at all."""

from __future__ import annotations

from urllib.parse import urlparse

from .backend import CacheService
from .config import ActionConfig
from .constants import DEFAULT_SERVER_URL
from .logging_utils import log_warning

GHES_UNAVAILABLE_MESSAGE = (
    "Cache action is only supported on GHES version >= 3.5. If you are on version >=3.5 "
    "Please check with GHES admin if Actions cache service is enabled or not.\n"
    "Otherwise please upgrade to GHES version >= 3.5 and If you are also using Github "
    "Connect, please unretire the actions/cache namespace before upgrade (see "
    "https://docs.github.com/en/enterprise-server@3.5/admin/github-actions/"
    "managing-access-to-actions-from-githubcom/enabling-automatic-access-to-githubcom-"
    "actions-using-github-connect#automatic-retirement-of-namespaces-for-actions-"
    "accessed-on-githubcom)"
)

CLOUD_UNAVAILABLE_MESSAGE = (
    "An internal error has occurred in cache backend. Please check "
    "https://www.githubstatus.com/ for any ongoing issue in actions."
)


def is_ghes(server_url: str = DEFAULT_SERVER_URL) -> bool:
    """True for a self-hosted GitHub Enterprise Server instance."""
    hostname = (urlparse(server_url or DEFAULT_SERVER_URL).hostname or "").upper()
    is_github_host = hostname == "GITHUB.COM"
    is_enterprise_cloud_host = hostname.endswith(".GHE.COM")
    is_local_host = hostname.endswith(".LOCALHOST")
    return not is_github_host and not is_enterprise_cloud_host and not is_local_host


def is_valid_event(config: ActionConfig) -> bool:
    # The cache token is only authorized for events tied to a ref.
    return bool(config.ref)


def is_cache_feature_available(cache_service: CacheService, config: ActionConfig) -> bool:
    if cache_service.is_feature_available():
        return True

    if is_ghes(config.server_url):
        log_warning(GHES_UNAVAILABLE_MESSAGE)
    else:
        log_warning(CLOUD_UNAVAILABLE_MESSAGE)
    return False


def is_eligible(cache_service: CacheService, config: ActionConfig) -> bool:
    if not is_cache_feature_available(cache_service, config):
        return False

    if not is_valid_event(config):
        log_warning(
            f"Event Validation Error: The event type {config.event_name} is not "
            f"supported because it's not tied to a branch or tag ref."
        )
        return False

    return True
