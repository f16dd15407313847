"""
==============================================================================
Mutation Outcomes Module
==============================================================================

Explicit outcomes returned by catalog mutations.

    MutationResult = Ok | ValidationFailed | NotFound | Unclassified

Callers branch on the outcome type instead of catching exceptions, so every
failure path is visible at the call site.

==============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Generic, TypeVar, Union

from app.catalog.models import Violation, violations_to_dict


T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The mutation was applied; ``value`` is its result."""

    value: T


@dataclass(frozen=True)
class ValidationFailed:
    """The payload broke one or more field rules; nothing was written."""

    violations: FrozenSet[Violation]

    @property
    def errors(self) -> Dict[str, str]:
        return violations_to_dict(self.violations)


@dataclass(frozen=True)
class NotFound:
    """No product with ``product_id`` exists; nothing was written."""

    product_id: int

    @property
    def message(self) -> str:
        return f"Product not found with id: {self.product_id}"


@dataclass(frozen=True)
class Unclassified:
    """The data store failed; the transaction was rolled back."""

    error: Exception


MutationResult = Union[Ok[T], ValidationFailed, NotFound, Unclassified]
