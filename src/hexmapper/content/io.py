from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Iterable

from hexmapper.content.schema import DocumentValidationError, ValidationIssue, validate_documents
from hexmapper.mapping.model import Document, LoadedDocument
from hexmapper.mapping.render import RenderMap

logger = logging.getLogger(__name__)

CANONICAL_JSON_INDENT = 2
CANONICAL_JSON_SEPARATORS = (",", ": ")


class RenderWriteError(OSError):
    """Raised when the render artifact cannot be written."""


def canonical_json(payload: Any) -> str:
    return json.dumps(
        payload,
        indent=CANONICAL_JSON_INDENT,
        separators=CANONICAL_JSON_SEPARATORS,
        sort_keys=True,
    )


def _write_atomic_json(path: str | Path, payload: Any) -> None:
    destination = Path(path)
    serialized = canonical_json(payload) + "\n"

    temp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=destination.parent,
            delete=False,
            suffix=".tmp",
        ) as temp_file:
            temp_path = Path(temp_file.name)
            temp_file.write(serialized)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_path, destination)
    except Exception:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise


def read_payloads(paths: Iterable[str | Path]) -> tuple[list[tuple[str, Any]], list[ValidationIssue]]:
    """Read every file as JSON; unreadable or malformed files become issues."""
    payloads: list[tuple[str, Any]] = []
    issues: list[ValidationIssue] = []
    for path in paths:
        source = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            issues.append(ValidationIssue(source=source, message=f"cannot read file: {exc.strerror or exc}"))
            continue
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            issues.append(ValidationIssue(source=source, message=f"invalid JSON: {exc}"))
            continue
        payloads.append((source, payload))
    return payloads, issues


def load_documents(paths: Iterable[str | Path]) -> list[LoadedDocument]:
    """Load and validate documents, raising one error that lists every issue found."""
    payloads, issues = read_payloads(paths)
    issues.extend(validate_documents(payloads))
    if issues:
        raise DocumentValidationError(issues)

    loaded = [LoadedDocument(source=source, document=Document.from_dict(payload)) for source, payload in payloads]
    logger.info("loaded documents=%d", len(loaded))
    return loaded


def write_render_json(path: str | Path, render_map: RenderMap) -> None:
    try:
        _write_atomic_json(path, render_map.to_dict())
    except OSError as exc:
        raise RenderWriteError(f"failed to write {path}: {exc.strerror or exc}") from exc
    logger.info("wrote render map path=%s hexes=%d", path, len(render_map.hexes))
