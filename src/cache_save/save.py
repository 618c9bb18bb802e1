#!/usr/bin/env python3
"""
Cache save step of the composite action.

Runs after the restore step in the same job and reuses the keys it left in
state.

Usage:
  INPUT_PATH=~/.cache/pip INPUT_KEY=linux-pip python -m cache_save.save
"""

import logging
import sys
from typing import Callable, Mapping, Optional

from .backend import CacheService, UnavailableCacheService, load_cache_service
from .config import ActionConfig
from .inputs import InputError
from .logging_utils import configure_logging, install_thread_excepthook, log_warning
from .save_impl import save_impl
from .state import ActionStateProvider, StateProvider

logger = logging.getLogger(__name__)


def build_cache_service(config: ActionConfig) -> CacheService:
    try:
        return load_cache_service(config.cache_backend)
    except Exception as e:  # noqa: BLE001
        log_warning(f"Failed to load cache backend {config.cache_backend!r}: {e}")
        return UnavailableCacheService()


def run(
    state_provider_factory: Callable[[ActionConfig], StateProvider],
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    config = ActionConfig.from_env(environ)
    configure_logging(config.log_level)
    install_thread_excepthook()

    try:
        save_impl(config, state_provider_factory(config), build_cache_service(config))
    except InputError as e:
        logger.error(str(e))
        return 1
    return 0


def main() -> None:
    sys.exit(run(lambda config: ActionStateProvider(config.state)))


if __name__ == "__main__":
    main()
