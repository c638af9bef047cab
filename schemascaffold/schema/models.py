"""Pydantic v2 models describing the schema to scaffold.

A ``Project`` owns an ordered list of ``Collection`` objects, each owning an
ordered list of ``FieldModel`` objects.  The models hold data only: naming
variants and capability flags are derived on demand by the scaffolder so they
can never drift from the canonical collection name.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class FieldType(str, Enum):
    """The fixed set of field types a schema may declare."""
    INTEGER = "integer"
    STRING = "string"
    UUID = "uuid"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"
    FLOAT = "float"
    REFERENCE = "reference"


class CollectionType(str, Enum):
    """Document collections are scaffolded; message collections are not."""
    DOCUMENTS = "documents"
    MESSAGES = "messages"


# Accepted spellings on input, normalised to the canonical ``FieldType`` value.
_TYPE_ALIASES: dict[str, FieldType] = {
    "int": FieldType.INTEGER,
    "int32": FieldType.INTEGER,
    "int64": FieldType.INTEGER,
    "long": FieldType.INTEGER,
    "str": FieldType.STRING,
    "text": FieldType.STRING,
    "identifier": FieldType.UUID,
    "id": FieldType.UUID,
    "datetime": FieldType.TIMESTAMP,
    "date-time": FieldType.TIMESTAMP,
    "date": FieldType.TIMESTAMP,
    "time": FieldType.TIMESTAMP,
    "bool": FieldType.BOOLEAN,
    "double": FieldType.FLOAT,
    "number": FieldType.FLOAT,
    "object": FieldType.REFERENCE,
    "nested": FieldType.REFERENCE,
}


def resolve_field_type(type_str: str) -> Optional[FieldType]:
    """Return the canonical ``FieldType`` for *type_str*, or ``None``.

    Matching is case-insensitive and accepts the aliases in ``_TYPE_ALIASES``.
    """
    key = type_str.strip().lower()
    try:
        return FieldType(key)
    except ValueError:
        return _TYPE_ALIASES.get(key)


# ---------------------------------------------------------------------------
# Schema models
# ---------------------------------------------------------------------------

class FieldModel(BaseModel):
    """A single typed attribute of a collection."""
    name: str = Field(..., description="Field name as declared in the schema")
    type: str = Field(..., description="Declared type, e.g. 'integer', 'uuid', 'timestamp'")
    primary_key: bool = Field(default=False, description="Whether this field is the primary key")
    required: bool = Field(default=True, description="Whether the field must be present")
    auto_generate: bool = Field(
        default=False, description="Whether the database generates the value on insert"
    )
    reference: Optional[str] = Field(
        default=None, description="Target collection of a nested-reference field"
    )
    description: str = Field(default="", description="What this field represents")

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value: object) -> object:
        # Unknown spellings are kept verbatim so validation can report them.
        if isinstance(value, str):
            resolved = resolve_field_type(value)
            return resolved.value if resolved else value
        return value

    @property
    def field_type(self) -> Optional[FieldType]:
        """The canonical type, or ``None`` when the declared type is unknown."""
        return resolve_field_type(self.type)


class Collection(BaseModel):
    """One schema entity that receives its own generated type and endpoint."""
    name: str = Field(..., description="Canonical singular name, e.g. 'OrderItem'")
    fields: list[FieldModel] = Field(default_factory=list, description="Ordered fields")
    collection_type: CollectionType = Field(
        default=CollectionType.DOCUMENTS, description="Documents or messages collection"
    )
    description: str = Field(default="", description="What this collection stores")

    @property
    def primary_keys(self) -> list[FieldModel]:
        """All fields flagged as primary key (a valid collection has exactly one)."""
        return [f for f in self.fields if f.primary_key]

    @property
    def is_scaffolded(self) -> bool:
        """Message collections are kept in the schema but get no generated code."""
        return self.collection_type == CollectionType.DOCUMENTS


class Project(BaseModel):
    """The complete schema for one generation run."""
    name: str = Field(..., description="Project display name")
    db_name: str = Field(..., description="Database name")
    package: str = Field(
        default="", description="Root package/namespace; defaults to the database name"
    )
    description: str = Field(default="", description="Short project description")
    collections: list[Collection] = Field(
        default_factory=list, description="Ordered collections; order is preserved in output"
    )

    @property
    def package_name(self) -> str:
        """The effective package, falling back to ``db_name`` when unset."""
        return self.package or self.db_name

    @property
    def scaffolded_collections(self) -> list[Collection]:
        """Collections that receive generated code, in declared order."""
        return [c for c in self.collections if c.is_scaffolded]

    def get_collection(self, name: str) -> Optional[Collection]:
        """Look up a collection by name, case-insensitively."""
        wanted = name.lower()
        for collection in self.collections:
            if collection.name.lower() == wanted:
                return collection
        return None
