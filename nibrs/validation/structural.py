"""
Structural Validator — Schema conformance (layer 1).

Parses a payload into NibrsSegments. Any failure is a schema violation
and is fatal: the later layers only ever see a well-formed record.
"""

from typing import Any, Optional, Union

from pydantic import ValidationError

from nibrs.ir.schema import NibrsSegments


def format_error_location(loc: tuple) -> str:
    """("offenses", 0, "code") -> "offenses.0.code"."""
    return ".".join(str(part) for part in loc)


def schema_errors(error: ValidationError) -> list[tuple[str, str]]:
    """
    Flatten a pydantic ValidationError.

    Returns:
        (field path, "path: message") pairs in error order
    """
    flattened = []
    for err in error.errors():
        path = format_error_location(err["loc"])
        message = f"{path}: {err['msg']}" if path else err["msg"]
        flattened.append((path, message))
    return flattened


def parse_segments(
    payload: Union[NibrsSegments, dict[str, Any]],
) -> tuple[Optional[NibrsSegments], list[tuple[str, str]]]:
    """
    Parse a payload into a record.

    A NibrsSegments instance is re-validated from its dump, so a record
    built with model_construct is checked like any dict.

    Returns:
        (segments, []) on success, (None, errors) on failure
    """
    data = payload.model_dump() if isinstance(payload, NibrsSegments) else payload
    if not isinstance(data, dict):
        return None, [("", f"Payload must be an object, got {type(data).__name__}")]

    try:
        return NibrsSegments.model_validate(data), []
    except ValidationError as e:
        return None, schema_errors(e)
