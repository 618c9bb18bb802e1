"""
Cache save step for CI workflows.

Decides whether a cache entry has to be written, refreshed or left alone and
hands the actual upload to a pluggable cache service.
"""

from .backend import CacheService, CallResult, call_service, load_cache_service
from .config import ActionConfig, Credentials
from .github_api import ActionsCacheClient, DeleteResult
from .inputs import InputError, get_input_as_array, get_input_as_bool, get_input_as_int
from .refresh import RefreshDecision, RefreshOutcome, decide_refresh, is_exact_key_match
from .resolver import ResolvedKeys, resolve_keys
from .save_impl import save_impl
from .state import ActionStateProvider, NullStateProvider, StateProvider

__all__ = [
    'CacheService', 'CallResult', 'call_service', 'load_cache_service',
    'ActionConfig', 'Credentials',
    'ActionsCacheClient', 'DeleteResult',
    'InputError', 'get_input_as_array', 'get_input_as_bool', 'get_input_as_int',
    'RefreshDecision', 'RefreshOutcome', 'decide_refresh', 'is_exact_key_match',
    'ResolvedKeys', 'resolve_keys',
    'save_impl',
    'ActionStateProvider', 'NullStateProvider', 'StateProvider',
]
