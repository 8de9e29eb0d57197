"""
Contracts — The shapes passes and record validators must have.
"""

from abc import ABC, abstractmethod
from typing import Protocol

from nibrs.core.context import MappingContext
from nibrs.ir.schema import NibrsSegments


class Pass(Protocol):
    """A mapping pass: reads the context, fills in its own fields, returns it."""

    __name__: str

    def __call__(self, ctx: MappingContext) -> MappingContext:
        ...


class Validator(ABC):
    """A named check over a finished record."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def validate(self, segments: NibrsSegments) -> list[str]:
        """Error messages for the record; empty when it passes."""
        ...
