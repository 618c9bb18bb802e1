"""Configuration loader for the cache save step.

Everything the step reads from the runner environment is captured once here,
so no other module touches ``os.environ`` directly.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .constants import DEFAULT_API_URL, DEFAULT_SERVER_URL, REF_KEY, Events
from .logging_utils import log_warning

ACTION_METADATA_PATH = Path(__file__).parent / "action.yml"

INPUT_PREFIX = "INPUT_"
STATE_PREFIX = "STATE_"

DEFAULT_REQUEST_TIMEOUT = 30

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def input_env_name(name: str) -> str:
    """Runner environment variable carrying the input ``name``."""
    return f"{INPUT_PREFIX}{name.replace(' ', '_').upper()}"


@dataclass(frozen=True)
class Credentials:
    token: str
    repository: str

    def owner_and_repo(self) -> Optional[Tuple[str, str]]:
        owner, _, repo = self.repository.partition("/")
        if owner and repo:
            return owner, repo
        return None


@dataclass(frozen=True)
class ActionConfig:
    inputs: Mapping[str, str] = field(default_factory=dict)
    state: Mapping[str, str] = field(default_factory=dict)
    event_name: str = ""
    ref: str = ""
    server_url: str = DEFAULT_SERVER_URL
    api_url: str = DEFAULT_API_URL
    token: str = field(default="", repr=False)
    repository: str = ""
    cache_backend: str = ""
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"

    @property
    def credentials(self) -> Optional[Credentials]:
        if self.token and self.repository:
            return Credentials(token=self.token, repository=self.repository)
        return None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        metadata_path: Optional[Path] = ACTION_METADATA_PATH,
    ) -> "ActionConfig":
        env = dict(os.environ if environ is None else environ)
        defaults: Dict[str, str] = {}
        if metadata_path is not None and metadata_path.exists():
            defaults = load_action_defaults(metadata_path)

        inputs = merge_input_overrides(defaults, env)
        state = {
            name[len(STATE_PREFIX):]: value
            for name, value in env.items()
            if name.startswith(STATE_PREFIX)
        }

        log_level = env.get("CACHE_SAVE_LOG_LEVEL", "INFO").upper()
        if env.get("RUNNER_DEBUG") == "1":
            log_level = "DEBUG"

        return cls(
            inputs=inputs,
            state=state,
            event_name=env.get(Events.KEY, ""),
            ref=env.get(REF_KEY, ""),
            server_url=env.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL,
            api_url=(env.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            token=env.get("GITHUB_TOKEN", ""),
            repository=env.get("GITHUB_REPOSITORY", ""),
            cache_backend=env.get("CACHE_SAVE_BACKEND", ""),
            request_timeout=_parse_timeout(env.get("CACHE_SAVE_REQUEST_TIMEOUT", "")),
            log_level=log_level,
        )


def _parse_timeout(value: str) -> int:
    if not value:
        return DEFAULT_REQUEST_TIMEOUT
    match = _LEADING_INT.match(value)
    if match is None or int(match.group(1)) <= 0:
        log_warning(
            f"Ignoring CACHE_SAVE_REQUEST_TIMEOUT={value!r}, "
            f"using {DEFAULT_REQUEST_TIMEOUT} seconds"
        )
        return DEFAULT_REQUEST_TIMEOUT
    return int(match.group(1))


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_action_defaults(path: Path = ACTION_METADATA_PATH) -> Dict[str, str]:
    """Read input defaults from action metadata, keyed by ``INPUT_*`` name."""
    data = load_yaml(path)
    defaults: Dict[str, str] = {}
    for name, spec in (data.get("inputs") or {}).items():
        if isinstance(spec, dict) and "default" in spec:
            defaults[input_env_name(name)] = str(spec["default"])
    return defaults


def merge_input_overrides(
    defaults: Mapping[str, str], environ: Mapping[str, str]
) -> Dict[str, str]:
    merged = dict(defaults)
    for name, value in environ.items():
        if name.startswith(INPUT_PREFIX):
            merged[name] = value
    return merged
