"""Parses raw oracle output into signing blocks."""

import json
from typing import Any

from sigpack.extraction.exceptions import ExtractionValidationError
from sigpack.extraction.models import (
    ExtractionMalformed,
    ExtractionOk,
    ExtractionResult,
    SignatureBlock,
)
from sigpack.logging.logger import Log

_BLOCK_FIELDS = ("party_name", "signatory_name", "capacity")


def parse_response(raw: str) -> ExtractionResult:
    """Turn raw oracle text into a tagged result. Never raises."""
    try:
        data = _parse_json(raw)
        return ExtractionOk(blocks=validate_and_build(data))
    except ExtractionValidationError as exc:
        return ExtractionMalformed(reason=str(exc))


def validate_and_build(data: dict[str, Any]) -> list[SignatureBlock]:
    """Build signing blocks from the parsed response object.

    Items that are not objects are skipped. Non-string fields are read as empty.

    Raises:
        ExtractionValidationError: if 'signatures' is missing or not a list.
    """
    signatures = data.get("signatures")
    if not isinstance(signatures, list):
        raise ExtractionValidationError("'signatures' must be a list")
    blocks: list[SignatureBlock] = []
    for i, item in enumerate(signatures):
        if not isinstance(item, dict):
            Log.warning(f"Skipping signature entry at index {i}: not an object")
            continue
        blocks.append(SignatureBlock(**{name: _text(item.get(name)) for name in _BLOCK_FIELDS}))
    return blocks


def _text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _parse_json(raw: str) -> dict[str, Any]:
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ExtractionValidationError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ExtractionValidationError("JSON response must be an object")
    return parsed
