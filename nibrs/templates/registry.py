"""
Template Registry — Load offense templates and check records against them.

The registry is read from YAML once and cached. Every offense in a record
is checked against its own template; an incident with a robbery and an
assault must satisfy both.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from nibrs.codes.tables import OFFENSE_CODES, VICTIMLESS_OFFENSE_CODES
from nibrs.core.errors import TemplateRegistryError
from nibrs.core.logging import get_logger, LogChannel
from nibrs.ir.enums import VictimType
from nibrs.ir.schema import NibrsSegments
from nibrs.templates.schema import (
    OFFENDER_FIELDS,
    VICTIM_FIELDS,
    OffenseTemplate,
    TemplateRegistry,
)

log = get_logger(LogChannel.VALIDATION)

TEMPLATES_PATH = Path(__file__).parent / "configs" / "offense_templates.yaml"

# Registry cache
_cache: dict[str, TemplateRegistry] = {}


def load_templates(path: Union[Path, str, None] = None) -> TemplateRegistry:
    """
    Load and validate an offense template registry.

    Args:
        path: YAML file to load (default: the packaged templates)

    Raises:
        TemplateRegistryError: If the file is missing, not YAML, fails
            schema validation, or names an unknown offense code
    """
    path = Path(path) if path is not None else TEMPLATES_PATH
    if not path.exists():
        raise TemplateRegistryError(f"Template registry not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        registry = TemplateRegistry.model_validate(data or {})
    except yaml.YAMLError as e:
        raise TemplateRegistryError(f"Template registry {path} is not valid YAML: {e}") from e
    except ValidationError as e:
        raise TemplateRegistryError(f"Template registry {path} is invalid: {e}") from e

    unknown = sorted(code for code in registry.templates if code not in OFFENSE_CODES)
    if unknown:
        raise TemplateRegistryError(f"Templates for unknown offense codes: {', '.join(unknown)}")

    log.verbose("templates_loaded", path=str(path), templates=len(registry.templates))
    return registry


def get_registry() -> TemplateRegistry:
    """Get the packaged registry, loading it on first use."""
    key = str(TEMPLATES_PATH)
    if key not in _cache:
        _cache[key] = load_templates(TEMPLATES_PATH)
    return _cache[key]


def clear_cache() -> None:
    """Clear the registry cache."""
    _cache.clear()


def template_for(code: Optional[str]) -> OffenseTemplate:
    """Template for an offense code, or the permissive default."""
    registry = get_registry()
    if not code:
        return registry.default
    return registry.templates.get(code, registry.default)


def _is_absent(value: object) -> bool:
    return value is None or value == ""


def validate_with_template(segments: NibrsSegments) -> list[str]:
    """
    Check every offense's required sub-fields.

    Returns:
        Error messages of the form "<Role> <attribute> is required for
        offense <code>", without duplicates and in discovery order.
    """
    errors: list[str] = []

    def emit(message: str) -> None:
        if message not in errors:
            errors.append(message)

    # Society victims stand for the victimless offenses in a mixed incident
    person_victims = [v for v in segments.victims if v.victim_type != VictimType.SOCIETY.value]

    for offense in segments.offenses:
        code = offense.code
        template = template_for(code)
        victimless = template.is_victimless or code in VICTIMLESS_OFFENSE_CODES

        if not victimless:
            for victim in person_victims:
                for attribute in template.required_victim:
                    if _is_absent(getattr(victim, VICTIM_FIELDS[attribute])):
                        emit(f"Victim {attribute} is required for offense {code}")

            for offender in segments.offenders:
                for attribute in template.required_offender:
                    if _is_absent(getattr(offender, OFFENDER_FIELDS[attribute])):
                        emit(f"Offender {attribute} is required for offense {code}")

        if template.required_property:
            has_value = any((p.value or 0) > 0 for p in segments.properties)
            if not (has_value or segments.properties or segments.evidence is not None):
                emit(f"Property information is required for offense {code}")

        if template.required_evidence and segments.evidence is None:
            emit(f"Evidence information is required for offense {code}")

    if errors:
        log.verbose("template_errors", count=len(errors))
    return errors


_TEMPLATE_ERROR = re.compile(
    r"^(?P<role>Victim|Offender|Property|Evidence) (?P<attribute>\w+) is required for offense (?P<code>\w+)$"
)


def missing_field_from_template_error(message: str) -> Optional[str]:
    """
    Field path named by a template error message.

    "Victim sex is required for offense 13A" -> "victim.sex"
    "Property information is required for offense 220" -> "property"
    """
    m = _TEMPLATE_ERROR.match(message.strip())
    if m is None:
        return None
    role = m.group("role").lower()
    attribute = m.group("attribute")
    if attribute == "information":
        return role
    return f"{role}.{attribute}"
