"""Capability flags derived from a collection's field types.

Templates use these flags to emit optional imports only when a collection
actually has a field of that type, so strict compilers never see an unused
import.  The flags are always recomputed from the field list; templates never
set them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from schemascaffold.schema.models import FieldModel, FieldType


@dataclass(frozen=True)
class Capabilities:
    """Derived boolean flags for one collection."""

    has_identifier_field: bool = False
    has_temporal_field: bool = False
    has_reference_field: bool = False
    has_optional_field: bool = False

    def as_dict(self) -> dict[str, bool]:
        return {
            "has_identifier_field": self.has_identifier_field,
            "has_temporal_field": self.has_temporal_field,
            "has_reference_field": self.has_reference_field,
            "has_optional_field": self.has_optional_field,
        }


def derive_capabilities(fields: Iterable[FieldModel]) -> Capabilities:
    """Scan *fields* once and compute the capability flags."""
    fields = list(fields)
    types = {f.field_type for f in fields}
    return Capabilities(
        has_identifier_field=FieldType.UUID in types,
        has_temporal_field=FieldType.TIMESTAMP in types,
        has_reference_field=FieldType.REFERENCE in types,
        has_optional_field=any(not f.required for f in fields),
    )
