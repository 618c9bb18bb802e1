"""The save step: validate, resolve keys, decide, delegate.

Nothing here may fail the job except a missing required input. Every other
problem is logged as a warning and the step ends normally.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .backend import CacheService, call_service
from .config import ActionConfig
from .constants import CACHE_NOT_SAVED, Inputs, State
from .environment import is_eligible
from .github_api import ActionsCacheClient
from .inputs import InputError, get_input, get_input_as_array, get_input_as_bool, get_input_as_int
from .logging_utils import log_warning
from .observability import log_decision
from .refresh import RefreshOutcome, decide_refresh
from .resolver import resolve_keys
from .state import StateProvider

logger = logging.getLogger(__name__)


def save_impl(
    config: ActionConfig,
    state_provider: StateProvider,
    cache_service: CacheService,
    cache_client: Optional[ActionsCacheClient] = None,
) -> Optional[int]:
    """
    Run the save step once.

    Returns None when the step stopped before trying to save, otherwise the
    cache id reported by the store (-1 when nothing was saved). Raises
    InputError only, and only before any network call.
    """
    cache_id = CACHE_NOT_SAVED
    try:
        if not is_eligible(cache_service, config):
            return None

        cache_paths = get_input_as_array(config.inputs, Inputs.PATH, required=True)
        refresh_cache = get_input_as_bool(config.inputs, Inputs.REFRESH_CACHE)
        enable_cross_os_archive = get_input_as_bool(config.inputs, Inputs.ENABLE_CROSS_OS_ARCHIVE)
        upload_chunk_size = get_input_as_int(config.inputs, Inputs.UPLOAD_CHUNK_SIZE)

        def lookup(primary_key: str) -> Optional[str]:
            result = call_service(
                "lookup",
                cache_service.restore_cache,
                cache_paths,
                primary_key,
                [],
                lookup_only=True,
                enable_cross_os_archive=enable_cross_os_archive,
            )
            if not result.success:
                log_warning(f"Failed to look up cache with key {primary_key}: {result.error}")
                return None
            return result.value

        # The restore step stored the key it used; inputs may have changed since.
        keys = resolve_keys(
            state_provider.get_state(State.CACHE_PRIMARY_KEY),
            get_input(config.inputs, Inputs.KEY),
            refresh_cache,
            state_provider.get_cache_state(),
            lookup,
        )
        if keys is None:
            log_warning("Key is not specified.")
            return None
        primary_key = keys.primary_key

        decision = decide_refresh(primary_key, keys.restored_key, refresh_cache, config.credentials)
        log_decision(decision, looked_up=keys.looked_up)

        if decision.outcome is RefreshOutcome.SKIP_CACHE_HIT:
            logger.info(f"Cache hit occurred on the primary key {primary_key}, not saving cache.")
            return None

        if decision.outcome is RefreshOutcome.SKIP_NO_CREDENTIALS:
            log_warning("Can't refresh cache, either the repository info or a valid token are missing.")
            return None

        if decision.should_delete:
            logger.info(
                f"Cache hit occurred on the primary key {primary_key}, "
                f"attempting to refresh the contents of the cache."
            )
            _delete_stale_entry(config, decision.restored_key or primary_key, cache_client)

        logger.debug(f"Saving {_describe_paths(cache_paths)} under {primary_key}")
        result = call_service(
            "save",
            cache_service.save_cache,
            cache_paths,
            primary_key,
            upload_chunk_size=upload_chunk_size,
            enable_cross_os_archive=enable_cross_os_archive,
        )
        if not result.success:
            log_warning(result.error)
            return cache_id

        cache_id = result.value
        if cache_id != CACHE_NOT_SAVED:
            logger.info(f"Cache saved with key: {primary_key}")
        else:
            logger.info(f"Cache not saved, an entry with key {primary_key} already exists.")
    except InputError:
        raise
    except Exception as e:  # noqa: BLE001
        log_warning(str(e))
    return cache_id


def _delete_stale_entry(
    config: ActionConfig,
    matched_key: str,
    cache_client: Optional[ActionsCacheClient],
) -> None:
    credentials = config.credentials
    owner_and_repo = credentials.owner_and_repo() if credentials else None
    if owner_and_repo is None:
        return

    client = cache_client or ActionsCacheClient(
        token=credentials.token,
        api_url=config.api_url,
        timeout=config.request_timeout,
    )
    owner, repo = owner_and_repo
    result = call_service("delete", client.delete_cache_by_key, owner, repo, matched_key)
    if not result.success:
        log_warning(f"{result.error_type} '{result.error}' trying to delete cache with key: {matched_key}")
    elif not result.value.success:
        logger.debug(f"Delete of {matched_key} failed ({result.value.status_code}), saving anyway")


def _describe_paths(paths: List[str]) -> str:
    return ", ".join(paths) if paths else "<none>"
