# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for MQLSpec.

Re-exports the immutable `Config`, its `MutableConfig` builder and the logging
helpers so callers can write ``from mqlspec.config import Config, logging``.
"""

from __future__ import annotations

from mqlspec.config import logging
from mqlspec.config.model import Config, MutableConfig

__all__ = [
    "Config",
    "MutableConfig",
    "logging",
]
