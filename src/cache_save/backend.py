"""Port to the cache store and the tagged-result wrapper around it.

Archiving, chunked upload and storage all live behind ``CacheService``; this
package only decides when to call it.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, Protocol, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService(Protocol):
    """Port for the remote cache store."""

    def is_feature_available(self) -> bool:
        """Report whether the cache service is reachable on this runner."""
        ...

    def save_cache(
        self,
        paths: Sequence[str],
        key: str,
        upload_chunk_size: Optional[int] = None,
        enable_cross_os_archive: bool = False,
    ) -> int:
        """Archive ``paths`` under ``key``; return the cache id or -1 if not saved."""
        ...

    def restore_cache(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Sequence[str] = (),
        lookup_only: bool = False,
        enable_cross_os_archive: bool = False,
    ) -> Optional[str]:
        """Return the matched key, downloading nothing when ``lookup_only``."""
        ...


@dataclass
class CallResult(Generic[T]):
    """Outcome of a delegated call."""
    success: bool
    action: str
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None


def call_service(action: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> CallResult[T]:
    try:
        return CallResult(success=True, action=action, value=fn(*args, **kwargs))
    except Exception as e:  # noqa: BLE001
        logger.debug(f"{action} failed: {e!r}")
        return CallResult(
            success=False,
            action=action,
            error=str(e) or e.__class__.__name__,
            error_type=e.__class__.__name__,
        )


class UnavailableCacheService:
    """Stand-in used when no cache backend is configured on the runner."""

    def is_feature_available(self) -> bool:
        return False

    def save_cache(self, paths, key, upload_chunk_size=None, enable_cross_os_archive=False) -> int:
        raise RuntimeError("Cache service is not configured")

    def restore_cache(
        self, paths, primary_key, restore_keys=(), lookup_only=False,
        enable_cross_os_archive=False,
    ) -> Optional[str]:
        raise RuntimeError("Cache service is not configured")


def load_cache_service(spec: str) -> CacheService:
    """Build a cache service from a ``module:factory`` path.

    An empty spec yields ``UnavailableCacheService``, which makes the save step
    warn and skip instead of failing.
    """
    if not spec:
        logger.debug("No cache backend configured")
        return UnavailableCacheService()

    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Cache backend must look like 'module:factory', got {spec!r}")

    factory = getattr(importlib.import_module(module_name), attr)
    service = factory()
    logger.info(f"Using cache backend {spec}")
    return service
