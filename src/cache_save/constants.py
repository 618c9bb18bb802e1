"""Names shared between the save step, the restore step and the runner."""

from __future__ import annotations


class Inputs:
    KEY = "key"
    PATH = "path"
    UPLOAD_CHUNK_SIZE = "upload-chunk-size"
    ENABLE_CROSS_OS_ARCHIVE = "enableCrossOsArchive"
    REFRESH_CACHE = "refresh-cache"


class State:
    CACHE_PRIMARY_KEY = "CACHE_KEY"
    CACHE_MATCHED_KEY = "CACHE_RESULT"


class Events:
    KEY = "GITHUB_EVENT_NAME"


REF_KEY = "GITHUB_REF"

DEFAULT_SERVER_URL = "https://github.com"
DEFAULT_API_URL = "https://api.github.com"

# Returned by the cache service when nothing was saved.
CACHE_NOT_SAVED = -1
