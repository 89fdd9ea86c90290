"""
Batch pass over a directory of cached JSON manifests.

Responsibilities:
- list the target directory once and select ``*.json`` entries
- per file: read, decode text, parse, decode entities, re-serialize, overwrite
- isolate per-file failures; only a failed directory listing aborts the pass
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional

from charset_normalizer import from_bytes

from .decode import decode_value
from .models import BatchReport
from .rules import DEFAULT_MANIFEST_DIR, JSON_INDENT, JSON_SUFFIX, LOG_TAG, SOURCE_ENCODING

logger = logging.getLogger(__name__)


class ManifestDecodeError(ValueError):
    """Raised when a manifest's bytes are not valid UTF-8 text."""

    def __init__(self, message: str, guessed_encoding: Optional[str] = None):
        super().__init__(message)
        self.guessed_encoding = guessed_encoding


def read_manifest_text(raw: bytes) -> str:
    """
    Decode manifest bytes to text.

    Rules:
    - Strict UTF-8; a leading BOM is dropped.
    - Anything else raises ManifestDecodeError and the file is not rewritten.
      charset-normalizer's best guess is attached for the report, never used
      to decode, since a file mixing encodings would be rewritten as mojibake.
    """
    try:
        return raw.decode(SOURCE_ENCODING + "-sig")
    except UnicodeDecodeError as exc:
        match = from_bytes(raw).best()
        guessed = match.encoding if match is not None else None
        hint = f" (looks like {guessed})" if guessed else ""
        raise ManifestDecodeError(f"not valid {SOURCE_ENCODING}{hint}: {exc}", guessed) from exc


def dump_manifest(value: Any) -> str:
    return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False) + "\n"


def fix_manifest_file(path: str) -> None:
    """
    Rewrite one manifest in place with its entities decoded.

    Read, parse and write errors propagate to the caller.
    """
    with open(path, "rb") as f:
        raw = f.read()

    decoded = decode_value(json.loads(read_manifest_text(raw)))
    # encode before opening for write so a failure leaves the file intact
    payload = dump_manifest(decoded).encode(SOURCE_ENCODING)

    with open(path, "wb") as f:
        f.write(payload)


def _issue_for(exc: Exception) -> str:
    if isinstance(exc, RecursionError):
        return "too_deep"
    if isinstance(exc, json.JSONDecodeError):
        return "invalid_json"
    if isinstance(exc, ManifestDecodeError):
        return "undecodable_bytes"
    if isinstance(exc, UnicodeError):
        return "unencodable_text"
    return "io_error"


def process_directory(directory: str) -> BatchReport:
    """Run one batch pass over ``directory`` and return what happened."""
    report = BatchReport(directory=str(directory))

    try:
        entries = os.listdir(directory)
    except OSError as exc:
        logger.error("%s Cannot list directory %s: %s", LOG_TAG, directory, exc)
        raise

    names = [name for name in entries if name.endswith(JSON_SUFFIX)]
    report.summary.files_found = len(names)

    if not names:
        logger.info("%s No %s files in %s, nothing to do", LOG_TAG, JSON_SUFFIX, directory)
        return report

    logger.info("%s Decoding entities in %d file(s) under %s", LOG_TAG, len(names), directory)

    for name in names:
        path = os.path.join(directory, name)
        try:
            fix_manifest_file(path)
        except (OSError, ValueError, RecursionError) as exc:
            logger.error("%s Error processing %s: %s", LOG_TAG, name, exc)
            report.record_error(
                name, _issue_for(exc), str(exc),
                encoding=getattr(exc, "guessed_encoding", None),
            )
            continue

        logger.info("%s Processed %s", LOG_TAG, name)
        report.record_success(name)

    logger.info(
        "%s Done: %d processed, %d error(s)",
        LOG_TAG, report.summary.processed, report.summary.errors,
    )
    return report


def decode_manifests(directory: Optional[str] = None) -> None:
    """
    Decode entities in every manifest under ``directory`` (default: DEFAULT_MANIFEST_DIR).

    Per-file failures are logged and skipped; a directory that cannot be
    listed raises the underlying OSError.
    """
    process_directory(DEFAULT_MANIFEST_DIR if directory is None else directory)
