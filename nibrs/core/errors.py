"""
Errors — Exception hierarchy for the NIBRS engine.

Expected failures (nothing mappable, rule violations, missing template
fields) travel as values: MappingOutcome, ValidationResult,
StandardErrorResponse. Exceptions are reserved for callers that ask for
them (MappingOutcome.unwrap) and for broken packaged configuration.
"""

from typing import Optional


class NibrsError(Exception):
    """Base class for all NIBRS engine errors."""


class MappingFailureError(NibrsError):
    """No reportable offense survived mapping and filtering."""

    def __init__(self, message: str, failure: Optional[object] = None) -> None:
        super().__init__(message)
        self.failure = failure


class RulesetError(NibrsError):
    """The packaged classification ruleset is missing or malformed."""


class TemplateRegistryError(NibrsError):
    """The packaged offense template registry is missing or malformed."""
