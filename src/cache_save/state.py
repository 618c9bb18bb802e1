"""State handed from the restore step to the save step.

The composite action restores and saves within one job, so the restore step
leaves the primary key and the matched key behind as ``STATE_*`` values. The
granular save-only action runs without that memory.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

from .constants import State

logger = logging.getLogger(__name__)


class StateProvider(Protocol):
    def get_state(self, name: str) -> str:
        ...

    def get_cache_state(self) -> Optional[str]:
        ...


class ActionStateProvider:
    """Reads the state the restore step saved for this job."""

    def __init__(self, state: Mapping[str, str]) -> None:
        self._state = dict(state)

    def get_state(self, name: str) -> str:
        return self._state.get(name, "")

    def get_cache_state(self) -> Optional[str]:
        cache_key = self.get_state(State.CACHE_MATCHED_KEY)
        if cache_key:
            logger.debug(f"Cache state/key: {cache_key}")
            return cache_key
        return None


class NullStateProvider:
    """Used by the save-only action, which has no restore step before it."""

    def get_state(self, name: str) -> str:
        return ""

    def get_cache_state(self) -> Optional[str]:
        return None
