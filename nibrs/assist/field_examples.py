"""
Field Examples — Example text and quick-fill answers for missing fields.

When a report comes back with missing fields, a correction UI asks the
officer for each one. This module picks the example to show beside the
prompt, keyed by the kind of field ("victim", "substance", ...) and the
offense category ("Drugs", "Robbery", ...).

The tables live in data/field_examples.yaml and are loaded once.
"""

from pathlib import Path
from typing import Any, Optional

import yaml

from nibrs.core.errors import NibrsError
from nibrs.core.logging import get_logger, LogChannel

log = get_logger(LogChannel.SYSTEM)

FIELD_EXAMPLES_PATH = Path(__file__).parent / "data" / "field_examples.yaml"

DEFAULT_FIELD_CATEGORY = "victim"
DEFAULT_QUICK_FILL = (
    "Specific details to be documented",
    "Information currently being verified",
)

_REQUIRED_SECTIONS = ("field_examples", "quick_fill", "field_mappings", "contextual", "offense_categories")

# Data cache
_cache: dict[str, dict[str, Any]] = {}


class FieldExamplesError(NibrsError):
    """The packaged field example tables are missing or malformed."""


def load_field_data(path: Optional[Path] = None) -> dict[str, Any]:
    """
    Load the field example tables.

    Raises:
        FieldExamplesError: If the file is missing, not YAML, or lacks a section
    """
    path = Path(path) if path is not None else FIELD_EXAMPLES_PATH
    key = str(path)
    if key in _cache:
        return _cache[key]

    if not path.exists():
        raise FieldExamplesError(f"Field example tables not found: {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise FieldExamplesError(f"Field example tables {path} are not valid YAML: {e}") from e

    missing = [s for s in _REQUIRED_SECTIONS if not isinstance(data.get(s), dict)]
    if missing:
        raise FieldExamplesError(f"Field example tables {path} lack: {', '.join(missing)}")

    unknown = sorted(set(data["field_mappings"].values()) - set(data["field_examples"]))
    if unknown:
        raise FieldExamplesError(f"Field mappings name unknown categories: {', '.join(unknown)}")

    log.verbose("field_examples_loaded", path=key, categories=len(data["field_examples"]))
    _cache[key] = data
    return data


def clear_cache() -> None:
    """Clear the data cache."""
    _cache.clear()


FIELD_EXAMPLES: dict[str, dict[str, str]] = load_field_data()["field_examples"]
QUICK_FILL_OPTIONS: dict[str, list[str]] = load_field_data()["quick_fill"]


# ============================================================================
# Lookups
# ============================================================================

def resolve_field_category(field: str) -> str:
    """
    Kind of field a free-form field name refers to.

    Keywords are tried in table order, so "drug quantity" resolves to
    "substance" before "quantity" could be read any other way. Unknown
    fields resolve to "victim".
    """
    lowered = field.lower().strip()
    for keyword, category in load_field_data()["field_mappings"].items():
        if keyword in lowered:
            return category
    return DEFAULT_FIELD_CATEGORY


def offense_category(code: str) -> Optional[str]:
    """Example category for an offense code ("35A" -> "Drugs"), if any."""
    for category, codes in load_field_data()["offense_categories"].items():
        if code in codes:
            return category
    return None


def get_field_examples(field: str, category: str) -> str:
    """
    Example answer for a missing field.

    Args:
        field: Field name as shown to the user ("Drug quantity")
        category: Offense category ("Drugs"), or an offense code ("35A")

    Returns:
        Example text, or a generic prompt when there is no example
    """
    examples = FIELD_EXAMPLES.get(resolve_field_category(field), {})
    example = examples.get(category) or examples.get(offense_category(category) or "")
    return example or f"Provide specific details about {field.lower()}"


def get_quick_fill_options(field: str) -> list[str]:
    options = QUICK_FILL_OPTIONS.get(resolve_field_category(field))
    return list(options) if options else list(DEFAULT_QUICK_FILL)


def contextual_fields(category: str) -> list[str]:
    """Extra fields worth asking about for an offense category or code."""
    contextual = load_field_data()["contextual"]
    fields = contextual.get(category) or contextual.get(offense_category(category) or "")
    return list(fields or [])
