"""Schema validation.

``validate_project`` checks a ``Project`` against the rules every generation
run relies on and raises the first violation as a ``SchemaError``.  It never
mutates its input.

Names are checked both as declared and as the identifiers the templates
derive from them (``OrderItem``, ``orderItem``, ``order_item``), since a
clash or a reserved word only shows up after projection.
"""

from __future__ import annotations

import keyword
import re

from schemascaffold.errors import SchemaError, SchemaErrorKind
from schemascaffold.naming import CollectionNames, json_field_name, snake_case
from schemascaffold.schema.models import Collection, FieldType, Project

_DB_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")
_PACKAGE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_COLLECTION_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_FIELD_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_JAVA_RESERVED = frozenset(
    """
    abstract assert boolean break byte case catch char class const continue
    default do double else enum extends final finally float for goto if
    implements import instanceof int interface long native new package private
    protected public return short static strictfp super switch synchronized
    this throw throws transient try void volatile while true false null _
    """.split()
)

# Words no generated identifier may be, in any bundled target language.
RESERVED_WORDS = _JAVA_RESERVED | frozenset(keyword.kwlist)


def validate_project(project: Project) -> None:
    """Validate *project*, raising ``SchemaError`` on the first problem found.

    Checks, in order:
    - the database name is a plain name (no path separators)
    - the package is a dotted identifier without reserved segments
    - at least one collection will be scaffolded
    - collection names are valid and unique, ignoring case
    - each collection's fields (see ``_validate_collection``)
    - reference fields point at collections that are scaffolded
    """
    if not _DB_NAME_RE.match(project.db_name):
        raise SchemaError(
            SchemaErrorKind.INVALID_IDENTIFIER,
            f"database name '{project.db_name}' must start with a letter or underscore "
            f"and contain only letters, digits, '_' or '-'",
        )

    package = project.package_name
    if not _PACKAGE_RE.match(package):
        raise SchemaError(
            SchemaErrorKind.INVALID_IDENTIFIER,
            f"package '{package}' is not a valid dotted identifier",
        )
    for segment in package.split("."):
        if segment in RESERVED_WORDS:
            raise SchemaError(
                SchemaErrorKind.INVALID_IDENTIFIER,
                f"package '{package}' uses the reserved word '{segment}'",
            )

    if not project.scaffolded_collections:
        raise SchemaError(
            SchemaErrorKind.EMPTY_PROJECT,
            f"project '{project.name}' has no document collections to scaffold",
        )

    seen: dict[str, str] = {}
    for collection in project.collections:
        _validate_collection_name(collection)
        key = collection.name.lower()
        if key in seen:
            raise SchemaError(
                SchemaErrorKind.DUPLICATE_NAME,
                f"collection '{collection.name}' duplicates '{seen[key]}'",
                collection=collection.name,
            )
        seen[key] = collection.name
        _validate_collection(collection)

    targets = {c.name.lower() for c in project.scaffolded_collections}
    for collection in project.collections:
        for field in collection.fields:
            if field.reference and field.reference.lower() not in targets:
                raise SchemaError(
                    SchemaErrorKind.UNKNOWN_REFERENCE,
                    f"field '{collection.name}.{field.name}' references "
                    f"'{field.reference}', which is not a document collection of this project",
                    collection=collection.name,
                    field=field.name,
                )


def _validate_collection_name(collection: Collection) -> None:
    if not _COLLECTION_NAME_RE.match(collection.name):
        raise SchemaError(
            SchemaErrorKind.INVALID_IDENTIFIER,
            f"collection name '{collection.name}' is not a valid identifier",
            collection=collection.name,
        )
    names = CollectionNames.derive(collection.name)
    for derived in (names.name, names.name_decap, names.json, names.json_plural):
        if derived in RESERVED_WORDS:
            raise SchemaError(
                SchemaErrorKind.INVALID_IDENTIFIER,
                f"collection '{collection.name}' becomes the reserved word '{derived}'",
                collection=collection.name,
            )


def _validate_collection(collection: Collection) -> None:
    """Check field names, field types and the primary key of one collection.

    Two fields clash when their generated camelCase or snake_case names are
    equal, e.g. ``order_id`` and ``orderId``.
    """
    seen: dict[str, str] = {}
    for field in collection.fields:
        if not _FIELD_NAME_RE.match(field.name):
            raise SchemaError(
                SchemaErrorKind.INVALID_IDENTIFIER,
                f"field name '{field.name}' in '{collection.name}' is not a valid identifier",
                collection=collection.name,
                field=field.name,
            )

        for derived in dict.fromkeys((json_field_name(field.name), snake_case(field.name))):
            if not derived.isidentifier() or derived in RESERVED_WORDS:
                raise SchemaError(
                    SchemaErrorKind.INVALID_IDENTIFIER,
                    f"field name '{field.name}' in '{collection.name}' becomes "
                    f"'{derived}', which is not a usable identifier",
                    collection=collection.name,
                    field=field.name,
                )
            if derived in seen:
                raise SchemaError(
                    SchemaErrorKind.DUPLICATE_NAME,
                    f"field '{field.name}' clashes with '{seen[derived]}' in "
                    f"'{collection.name}' (both become '{derived}')",
                    collection=collection.name,
                    field=field.name,
                )
        seen[json_field_name(field.name)] = field.name
        seen[snake_case(field.name)] = field.name

        if field.field_type is None:
            allowed = ", ".join(t.value for t in FieldType)
            raise SchemaError(
                SchemaErrorKind.UNKNOWN_TYPE,
                f"field '{collection.name}.{field.name}' has unknown type "
                f"'{field.type}' (expected one of: {allowed})",
                collection=collection.name,
                field=field.name,
            )

    if not collection.is_scaffolded:
        return

    keys = collection.primary_keys
    if not keys:
        raise SchemaError(
            SchemaErrorKind.MISSING_PRIMARY_KEY,
            f"collection '{collection.name}' has no primary key field",
            collection=collection.name,
        )
    if len(keys) > 1:
        names = ", ".join(f.name for f in keys)
        raise SchemaError(
            SchemaErrorKind.MULTIPLE_PRIMARY_KEYS,
            f"collection '{collection.name}' declares several primary keys: {names}",
            collection=collection.name,
        )
