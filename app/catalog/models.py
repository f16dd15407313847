"""
==============================================================================
Catalog Core Types
==============================================================================

Types shared by the validation and query layers.

==============================================================================
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, NamedTuple, Optional, Protocol


class ProductFields(Protocol):
    """
    Anything carrying the four mutable product fields.

    Request payloads and persisted ``Product`` rows both satisfy it, so the
    same rules apply to incoming data and to stored records.
    """

    name: Optional[str]
    description: Optional[str]
    price: Optional[Decimal]
    stock: Optional[int]


class Violation(NamedTuple):
    """A single failed constraint: the field name and a readable message."""

    field: str
    message: str


def violations_to_dict(violations: Iterable[Violation]) -> Dict[str, str]:
    """
    Collapse violations into a field -> message mapping.

    A field with several violations keeps the message that sorts first, so
    the mapping is the same for the same input on every call.
    """
    errors: Dict[str, str] = {}
    for violation in sorted(violations):
        errors.setdefault(violation.field, violation.message)
    return errors
