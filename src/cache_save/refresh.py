"""Decide whether an existing cache entry is kept, refreshed or saved anew."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import Credentials


class RefreshOutcome(Enum):
    SAVE = "save"
    DELETE_AND_SAVE = "delete_and_save"
    SKIP_CACHE_HIT = "skip_cache_hit"
    SKIP_NO_CREDENTIALS = "skip_no_credentials"


@dataclass(frozen=True)
class RefreshDecision:
    outcome: RefreshOutcome
    primary_key: str
    restored_key: Optional[str]
    exact_match: bool
    refresh_cache: bool
    credentials_present: bool

    @property
    def should_save(self) -> bool:
        return self.outcome in (RefreshOutcome.SAVE, RefreshOutcome.DELETE_AND_SAVE)

    @property
    def should_delete(self) -> bool:
        return self.outcome is RefreshOutcome.DELETE_AND_SAVE


def _base_form(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped).casefold()


def is_exact_key_match(key: str, cache_key: Optional[str] = None) -> bool:
    """Compare keys ignoring case and accent marks."""
    if not cache_key:
        return False
    return _base_form(cache_key) == _base_form(key)


def decide_refresh(
    primary_key: str,
    restored_key: Optional[str],
    refresh_cache: bool,
    credentials: Optional[Credentials],
) -> RefreshDecision:
    """
    Pick what the save step does with the entry found for ``primary_key``.

    Without an exact match the cache is saved. On an exact match the entry is
    kept unless a refresh was requested; a refresh deletes the entry first and
    needs a token and an ``owner/repo`` identifier. A refresh that cannot
    authenticate skips the save entirely.
    """
    exact_match = is_exact_key_match(primary_key, restored_key)
    usable_credentials = credentials is not None and credentials.owner_and_repo() is not None

    if not exact_match:
        outcome = RefreshOutcome.SAVE
    elif not refresh_cache:
        outcome = RefreshOutcome.SKIP_CACHE_HIT
    elif usable_credentials:
        outcome = RefreshOutcome.DELETE_AND_SAVE
    else:
        outcome = RefreshOutcome.SKIP_NO_CREDENTIALS

    return RefreshDecision(
        outcome=outcome,
        primary_key=primary_key,
        restored_key=restored_key,
        exact_match=exact_match,
        refresh_cache=refresh_cache,
        credentials_present=usable_credentials,
    )
