"""Deterministic naming transforms.

Every identifier a template needs (type name, instance name, JSON key, route,
plural forms) is derived here from a collection's canonical name.  All
functions are pure: the same input always yields the same output and nothing
consults global state.

Pluralization is a suffix heuristic, not an English pluralizer.  Irregular
plurals ("person" -> "people") are only produced when the caller supplies
them in an override table.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

# Splits "HTTPServer_v2-order item" into ["HTTP", "Server", "v", "2", "order", "item"].
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")

_ES_SUFFIXES = ("s", "x", "z", "ch", "sh")
_VOWELS = "aeiou"


def split_words(name: str) -> list[str]:
    """Split an identifier on separators and case boundaries."""
    return _WORD_RE.findall(name)


def pascal_case(name: str) -> str:
    """Convert ``order_item``, ``order-item`` or ``orderItem`` to ``OrderItem``.

    Acronyms are folded (``HTTPServer`` -> ``HttpServer``) so the transform is
    idempotent.
    """
    return "".join(word[0].upper() + word[1:].lower() for word in split_words(name))


def decapitalize(name: str) -> str:
    """Lower-case the first character only: ``OrderItem`` -> ``orderItem``."""
    if not name:
        return ""
    return name[0].lower() + name[1:]


def camel_case(name: str) -> str:
    """Convert any identifier to ``camelCase``."""
    return decapitalize(pascal_case(name))


def json_field_name(name: str) -> str:
    """The camelCase key used for a field in serialized documents."""
    return camel_case(name)


def snake_case(name: str) -> str:
    """Convert ``OrderItem`` or ``order-item`` to ``order_item``."""
    return "_".join(word.lower() for word in split_words(name))


def kebab_case(name: str) -> str:
    """Convert ``OrderItem`` or ``order_item`` to ``order-item``."""
    return "-".join(word.lower() for word in split_words(name))


def pluralize(word: str, overrides: Mapping[str, str] | None = None) -> str:
    """Return a plural form of *word* using fixed English suffix rules.

    Rules, applied to the last word of the identifier:
    - an entry in *overrides* (keys matched case-insensitively) wins
    - ``s``, ``x``, ``z``, ``ch``, ``sh`` endings take ``es``
    - a consonant followed by ``y`` becomes ``ies``
    - everything else takes ``s``

    This is a heuristic.  It does not know irregular nouns; pass them in
    *overrides*, e.g. ``{"person": "people"}``.
    """
    if not word:
        return word

    words = split_words(word)
    last = words[-1] if words and word.endswith(words[-1]) else word
    head = word[: len(word) - len(last)]

    if overrides:
        lowered = {k.lower(): v for k, v in overrides.items()}
        replacement = lowered.get(last.lower())
        if replacement:
            return head + _match_case(last, replacement)

    lower = last.lower()
    if lower.endswith(_ES_SUFFIXES):
        return word + _suffix_case(last, "es")
    if len(lower) > 1 and lower.endswith("y") and lower[-2] not in _VOWELS:
        return word[:-1] + _suffix_case(last, "ies")
    return word + _suffix_case(last, "s")


def route_name(name: str, overrides: Mapping[str, str] | None = None) -> str:
    """The lower-kebab plural used in REST paths: ``OrderItem`` -> ``order-items``."""
    return kebab_case(pluralize(pascal_case(name), overrides))


def _suffix_case(reference: str, suffix: str) -> str:
    return suffix.upper() if reference.isupper() and len(reference) > 1 else suffix


def _match_case(reference: str, text: str) -> str:
    """Upper-case *text* when *reference* is all upper-case, keep a leading capital."""
    if reference.isupper() and len(reference) > 1:
        return text.upper()
    if reference[:1].isupper():
        return text[:1].upper() + text[1:]
    return text


# ---------------------------------------------------------------------------
# Per-collection name set
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CollectionNames:
    """Every naming variant templates use for one collection.

    Example for ``order_item``::

        name               OrderItem
        name_decap         orderItem
        name_plural        OrderItems
        name_plural_decap  orderItems
        json               order_item
        json_plural        order_items
        route              order-items
    """

    name: str
    name_decap: str
    name_plural: str
    name_plural_decap: str
    json: str
    json_plural: str
    route: str

    @classmethod
    def derive(
        cls, canonical: str, overrides: Mapping[str, str] | None = None
    ) -> "CollectionNames":
        """Derive all variants from the canonical collection name."""
        name = pascal_case(canonical)
        plural = pluralize(name, overrides)
        return cls(
            name=name,
            name_decap=decapitalize(name),
            name_plural=plural,
            name_plural_decap=decapitalize(plural),
            json=snake_case(name),
            json_plural=snake_case(plural),
            route=kebab_case(plural),
        )
