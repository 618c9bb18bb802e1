"""Typed access to the raw text inputs handed over by the runner."""

from __future__ import annotations

import re
from typing import List, Mapping, Optional

from .config import input_env_name

_EXCLUDE_PREFIX = re.compile(r"^!\s+")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class InputError(ValueError):
    """A required input was not supplied."""


def get_input(inputs: Mapping[str, str], name: str, required: bool = False) -> str:
    value = (inputs.get(input_env_name(name)) or "").strip()
    if required and not value:
        raise InputError(f"Input required and not supplied: {name}")
    return value


def get_input_as_array(
    inputs: Mapping[str, str], name: str, required: bool = False
) -> List[str]:
    """Split a newline separated input into path patterns.

    Blank lines are dropped and ``!   pattern`` is collapsed to ``!pattern`` so
    exclusions survive however they were indented.
    """
    lines = get_input(inputs, name, required).split("\n")
    patterns = [_EXCLUDE_PREFIX.sub("!", line).strip() for line in lines]
    return [pattern for pattern in patterns if pattern != ""]


def get_input_as_int(
    inputs: Mapping[str, str], name: str, required: bool = False
) -> Optional[int]:
    match = _LEADING_INT.match(get_input(inputs, name, required))
    if match is None:
        return None
    value = int(match.group(1))
    if value < 0:
        return None
    return value


def get_input_as_bool(
    inputs: Mapping[str, str], name: str, required: bool = False
) -> bool:
    value = get_input(inputs, name, required)
    return value in ("true", "1")
