# topmark:header:start
#
#   project      : MQLSpec
#   file         : schemas.py
#   file_relpath : src/mqlspec/validation/schemas.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load the packaged meta-schemas and build their validators.

Both schemas are read once from the ``mqlspec.schemas`` package resources and
compiled into ``jsonschema.Draft6Validator`` instances. Validators are
stateless and shared between worker threads.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from jsonschema import Draft6Validator

from mqlspec.config.logging import get_logger
from mqlspec.constants import OPERATOR_SCHEMA_NAME, SCHEMAS_PACKAGE, TYPE_SCHEMA_NAME

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mqlspec.config.logging import MqlSpecLogger

logger: MqlSpecLogger = get_logger(__name__)

SCHEMA_NAMES: tuple[str, ...] = (OPERATOR_SCHEMA_NAME, TYPE_SCHEMA_NAME)


def load_schema(name: str) -> dict[str, Any]:
    """Read and parse one packaged meta-schema.

    Raises:
        FileNotFoundError: If no schema called ``name`` is packaged.
    """
    resource = resources.files(SCHEMAS_PACKAGE).joinpath(name)
    if not resource.is_file():
        raise FileNotFoundError(f"Meta-schema not packaged: {name}")
    schema: dict[str, Any] = json.loads(resource.read_text(encoding="utf-8"))
    Draft6Validator.check_schema(schema)
    return schema


@lru_cache(maxsize=1)
def get_validators() -> Mapping[str, Draft6Validator]:
    """Return schema basename → compiled validator, built once."""
    validators: dict[str, Draft6Validator] = {}
    for name in SCHEMA_NAMES:
        validators[name] = Draft6Validator(
            load_schema(name),
            format_checker=Draft6Validator.FORMAT_CHECKER,
        )
        logger.debug("Compiled meta-schema %s", name)
    return MappingProxyType(validators)


def get_validator(name: str) -> Draft6Validator | None:
    """Return the validator for a schema basename, or ``None`` if unknown."""
    return get_validators().get(name)
