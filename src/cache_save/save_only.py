#!/usr/bin/env python3
"""
Granular save action.

Runs without a restore step before it, so a refresh has to look the key up in
the store first.

Usage:
  INPUT_PATH=~/.cache/pip INPUT_KEY=linux-pip python -m cache_save.save_only
"""

import sys

from .save import run
from .state import NullStateProvider


def main() -> None:
    sys.exit(run(lambda config: NullStateProvider()))


if __name__ == "__main__":
    main()
