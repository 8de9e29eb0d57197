"""
IR Serialization — JSON import/export for records and raw payloads.
"""

import json
from pathlib import Path
from typing import Union

from nibrs.ir.schema import NibrsSegments


def to_json(segments: NibrsSegments, indent: int = 2) -> str:
    """Serialize NibrsSegments to a JSON string."""
    return segments.model_dump_json(indent=indent)


def from_json(json_str: str) -> NibrsSegments:
    """Deserialize NibrsSegments from a JSON string."""
    return NibrsSegments.model_validate_json(json_str)


def load_payload(path: Union[str, Path]) -> dict:
    """Load a raw JSON payload without parsing it into a model."""
    path = Path(path)
    return json.loads(path.read_text())
