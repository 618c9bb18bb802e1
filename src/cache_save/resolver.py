"""Resolve the primary key and the key a previous restore matched."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

LookupFn = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class ResolvedKeys:
    primary_key: str
    restored_key: Optional[str] = None
    looked_up: bool = False


def resolve_keys(
    prior_state_key: Optional[str],
    configured_key: str,
    refresh_cache: bool,
    matched_key: Optional[str],
    lookup: LookupFn,
) -> Optional[ResolvedKeys]:
    """
    Return the keys the refresh decision works on, or None without a key.

    The key recorded by the restore step wins over the configured one since
    inputs are re-evaluated between restore and save. When no matched key was
    recorded but a refresh is wanted, ``lookup`` queries the store for the
    primary key without downloading anything.
    """
    primary_key = prior_state_key or configured_key
    if not primary_key:
        return None

    if matched_key or not refresh_cache:
        return ResolvedKeys(primary_key=primary_key, restored_key=matched_key or None)

    logger.debug(f"No matched key in state, looking up {primary_key}")
    return ResolvedKeys(primary_key=primary_key, restored_key=lookup(primary_key), looked_up=True)
