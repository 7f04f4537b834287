# topmark:header:start
#
#   project      : MQLSpec
#   file         : loader.py
#   file_relpath : src/mqlspec/scalars/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""PyYAML loader and dumper with the explicit BSON scalar tags.

``DefinitionLoader`` is a ``yaml.SafeLoader`` with one constructor per tag in
[`SCALAR_CODECS`][mqlspec.scalars.codecs.SCALAR_CODECS];
``DefinitionDumper`` is the matching ``yaml.SafeDumper``.

The implicit YAML timestamp resolver is left untouched: an untagged
``2024-01-01`` still loads as ``datetime``, while ``!bson_utcdatetime`` loads as
``DatetimeMS``. Each type is dumped back with its own tag, so the two never
swap places on a round trip.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import yaml
from bson.errors import BSONError

from mqlspec.config.logging import get_logger
from mqlspec.core.errors import ScalarDecodeError
from mqlspec.scalars.codecs import SCALAR_CODECS, ScalarCodec

if TYPE_CHECKING:
    from collections.abc import Callable

    from mqlspec.config.logging import MqlSpecLogger

logger: MqlSpecLogger = get_logger(__name__)


class DefinitionLoader(yaml.SafeLoader):
    """Safe YAML loader that understands the ``!bson_*`` tags."""


class DefinitionDumper(yaml.SafeDumper):
    """Safe YAML dumper that writes ``bson`` values back with their ``!bson_*`` tags."""


def _node_kind(node: yaml.Node) -> str:
    if isinstance(node, yaml.ScalarNode):
        return "scalar"
    if isinstance(node, yaml.SequenceNode):
        return "sequence"
    return "mapping"


def _make_constructor(codec: ScalarCodec) -> Callable[[yaml.SafeLoader, yaml.Node], Any]:
    def construct(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
        mark = node.start_mark
        line: int = mark.line + 1
        column: int = mark.column + 1

        raw: Any
        decode: Callable[[Any], Any]
        if isinstance(node, yaml.ScalarNode):
            raw = loader.construct_scalar(node)
            decode = codec.decode
        elif isinstance(node, yaml.SequenceNode) and codec.decode_sequence is not None:
            raw = loader.construct_sequence(node)
            decode = codec.decode_sequence
        else:
            raise ScalarDecodeError(
                f"Tag {codec.tag} cannot be applied to a {_node_kind(node)} node",
                tag=codec.tag,
                line=line,
                column=column,
            )

        try:
            return decode(raw)
        except (ValueError, TypeError, ArithmeticError, BSONError) as exc:
            raise ScalarDecodeError(
                f"Invalid {codec.tag} literal {raw!r}: {exc}",
                tag=codec.tag,
                line=line,
                column=column,
            ) from exc

    return construct


def _make_representer(codec: ScalarCodec) -> Callable[[yaml.SafeDumper, Any], yaml.Node]:
    def represent(dumper: yaml.SafeDumper, value: Any) -> yaml.Node:
        encoded: str | list[str] = codec.encode(value)
        if isinstance(encoded, list):
            return dumper.represent_sequence(codec.tag, encoded, flow_style=True)
        return dumper.represent_scalar(codec.tag, encoded)

    return represent


def _register() -> None:
    for codec in SCALAR_CODECS.values():
        DefinitionLoader.add_constructor(codec.tag, _make_constructor(codec))
        DefinitionDumper.add_representer(codec.python_type, _make_representer(codec))
    logger.trace("Registered %d BSON scalar tags", len(SCALAR_CODECS))


_register()


def load(stream: str | bytes | IO[str] | IO[bytes]) -> Any:
    """Load one YAML document with the BSON scalar tags.

    Raises:
        ScalarDecodeError: If a tagged literal cannot be decoded.
        yaml.YAMLError: On YAML syntax errors.
    """
    return yaml.load(stream, Loader=DefinitionLoader)  # noqa: S506 - safe loader subclass


def dump(data: Any, stream: IO[str] | None = None, **kwargs: Any) -> str | None:
    """Dump ``data`` as YAML, writing ``bson`` values with their tags.

    Returns:
        The YAML text when ``stream`` is None, otherwise None.
    """
    kwargs.setdefault("sort_keys", False)
    kwargs.setdefault("allow_unicode", True)
    return yaml.dump(data, stream, Dumper=DefinitionDumper, **kwargs)
