"""Templates — Per-offense required-field policy."""

from nibrs.templates.registry import (
    clear_cache,
    get_registry,
    load_templates,
    missing_field_from_template_error,
    template_for,
    validate_with_template,
)
from nibrs.templates.schema import OffenseTemplate, TemplateRegistry

__all__ = [
    "OffenseTemplate",
    "TemplateRegistry",
    "clear_cache",
    "get_registry",
    "load_templates",
    "missing_field_from_template_error",
    "template_for",
    "validate_with_template",
]
