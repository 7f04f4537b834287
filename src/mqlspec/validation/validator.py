# topmark:header:start
#
#   project      : MQLSpec
#   file         : validator.py
#   file_relpath : src/mqlspec/validation/validator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Definition validator.

Each document goes through the same steps:

1. the ``# $schema:`` directive on the first line selects a meta-schema;
2. the YAML is parsed with the BSON scalar tags;
3. the decoded document is checked against the meta-schema (all errors
   collected, each located by the JSON pointer of the failing value);
4. documents that pass are turned into definition records and checked
   semantically (type tokens, ``mergeObject``, argument names, ...).

A step that fails records its errors and skips the remaining steps for that
document. Failures never escape: the corpus is always processed in full and
the result is a [`ValidationReport`][mqlspec.validation.report.ValidationReport].
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from mqlspec.config.logging import get_logger
from mqlspec.config.model import Config, MutableConfig
from mqlspec.constants import OPERATOR_SCHEMA_NAME, ROOT_LOCATION, TYPE_SCHEMA_NAME
from mqlspec.core.errors import (
    DefinitionError,
    ScalarDecodeError,
    SchemaReferenceError,
    StructuralError,
)
from mqlspec.definitions.parser import (
    check_closed_set,
    check_operator,
    parse_closed_set,
    parse_operator,
)
from mqlspec.diagnostic.model import DiagnosticLog
from mqlspec.scalars.loader import load
from mqlspec.tokens.table import get_type_table
from mqlspec.validation.directive import find_schema_name
from mqlspec.validation.discovery import find_definition_files
from mqlspec.validation.report import (
    Definition,
    DocumentResult,
    ValidationReport,
    corpus_failure,
)
from mqlspec.validation.schemas import get_validator, get_validators

if TYPE_CHECKING:
    from collections.abc import Iterable

    from jsonschema import Draft6Validator
    from jsonschema.exceptions import ValidationError

    from mqlspec.config.logging import MqlSpecLogger
    from mqlspec.tokens.table import TypeTable

logger: MqlSpecLogger = get_logger(__name__)


def json_pointer(path: Iterable[Any]) -> str:
    """Return the JSON pointer for an instance path (``<root>`` for the empty path)."""
    parts: list[str] = [str(p).replace("~", "~0").replace("/", "~1") for p in path]
    return "/" + "/".join(parts) if parts else ROOT_LOCATION


def _yaml_location(exc: yaml.YAMLError) -> str:
    mark = getattr(exc, "problem_mark", None) or getattr(exc, "context_mark", None)
    if mark is None:
        return ROOT_LOCATION
    return f"line {mark.line + 1}, column {mark.column + 1}"


def _structural_errors(validator: Draft6Validator, document: Any) -> list[StructuralError]:
    errors: list[ValidationError] = list(validator.iter_errors(document))
    return [
        StructuralError(err.message, location=json_pointer(err.absolute_path)) for err in errors
    ]


def _semantic_check(
    schema_name: str,
    document: Any,
    path: Path,
    table: TypeTable,
) -> tuple[Definition | None, list[DefinitionError]]:
    try:
        if schema_name == OPERATOR_SCHEMA_NAME:
            operator = parse_operator(document, source=path)
            return operator, list(check_operator(operator, table))
        if schema_name == TYPE_SCHEMA_NAME:
            closed_set = parse_closed_set(document, source=path)
            return closed_set, list(check_closed_set(closed_set, table))
    except StructuralError as exc:
        return None, [exc]
    return None, []


def validate_document(path: Path, *, table: TypeTable | None = None) -> DocumentResult:
    """Validate one definition document.

    Args:
        path: Document path.
        table: Type table for semantic checks (the shared table by default).

    Returns:
        The document result. Every failure is recorded in its diagnostics;
        none is raised.
    """
    log = DiagnosticLog()
    table = table or get_type_table()

    try:
        text: str = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.add_error(f"Cannot read document: {exc}", kind="io")
        return DocumentResult(path, None, log.freeze())

    try:
        schema_name: str = find_schema_name(text, document=str(path))
    except SchemaReferenceError as exc:
        log.add_failure(exc.at(path))
        return DocumentResult(path, None, log.freeze())

    validator: Draft6Validator | None = get_validator(schema_name)
    if validator is None:
        log.add_failure(
            SchemaReferenceError(f'Schema "{schema_name}" not found for {path}', document=path)
        )
        return DocumentResult(path, schema_name, log.freeze())

    try:
        document: Any = load(text)
    except ScalarDecodeError as exc:
        log.add_failure(exc.at(path))
        return DocumentResult(path, schema_name, log.freeze())
    except yaml.YAMLError as exc:
        log.add_error(f"Invalid YAML: {exc}", kind="yaml", location=_yaml_location(exc))
        return DocumentResult(path, schema_name, log.freeze())

    structural: list[StructuralError] = _structural_errors(validator, document)
    if structural:
        for error in structural:
            log.add_failure(error.at(path))
        return DocumentResult(path, schema_name, log.freeze())

    definition, semantic = _semantic_check(schema_name, document, path, table)
    for error in semantic:
        log.add_failure(error.at(path))
    if semantic:
        definition = None

    logger.debug("%s: %d failure(s)", path, len(log))
    return DocumentResult(path, schema_name, log.freeze(), definition)


def _resolve_config(root: Path | str | None, config: Config | None) -> Config:
    if config is None:
        if root is None:
            return MutableConfig.load_merged().freeze()
        builder: MutableConfig = MutableConfig.from_defaults()
    else:
        builder = config.thaw()
    if root is not None:
        builder.definitions_root = Path(root).resolve()
    return builder.freeze()


def validate_corpus(
    root: Path | str | None = None,
    *,
    config: Config | None = None,
    max_workers: int | None = None,
) -> ValidationReport:
    """Validate every definition document under a definitions root.

    Args:
        root: Definitions root. Overrides ``config.definitions_root`` when both are given.
        config: Configuration snapshot. When omitted and ``root`` is None, the
            merged project configuration of the current directory is used.
        max_workers: Worker threads for per-document work (overrides the config).

    Returns:
        The aggregated report, with results sorted by document path.

    Raises:
        FileNotFoundError: If the definitions root is not a directory.
    """
    cfg: Config = _resolve_config(root, config)
    definitions_root: Path = cfg.definitions_root
    if not definitions_root.is_dir():
        raise FileNotFoundError(f"Definitions root not found: {definitions_root}")

    files: list[Path] = find_definition_files(
        definitions_root,
        suffix=cfg.suffix,
        exclude_patterns=cfg.exclude_patterns,
    )
    if not files:
        logger.warning("No definition documents under %s", definitions_root)
        return ValidationReport(
            root=definitions_root,
            corpus_failures=(
                corpus_failure(
                    definitions_root, f"No YAML files found under {definitions_root}/"
                ),
            ),
        )

    # Build shared read-only state before fanning out.
    table: TypeTable = get_type_table()
    get_validators()

    workers: int = max(1, max_workers if max_workers is not None else cfg.max_workers)
    results: list[DocumentResult]
    if workers > 1 and len(files) > 1:
        logger.debug("Validating %d documents on %d threads", len(files), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(lambda p: validate_document(p, table=table), files))
    else:
        results = [validate_document(p, table=table) for p in files]

    report = ValidationReport(root=definitions_root, results=tuple(results))
    logger.info(
        "Validated %d document(s) under %s: %d failure(s)",
        report.documents,
        definitions_root,
        len(report.failures),
    )
    return report
