"""Compute casing variants of names and derive operation names from routes.

:func:`normalize_name` is pure and total: any input string, including one with
no usable characters, produces a :class:`~specir.ir.NormalizedName`.

**Sanitisation rules:**

* Runs of non-alphanumeric characters become a single word separator.
* Word boundaries are also inserted at lower-to-upper case changes
  (``listModels`` -> ``list``, ``Models``) and at the end of an acronym
  (``HTTPServer`` -> ``HTTP``, ``Server``).
* A name whose first character is a digit gets a leading underscore in every
  casing variant, so that ``3dModel`` becomes ``_3dModel`` / ``_3d_model``.
* A name with no alphanumeric characters at all normalises as ``unnamed``.
"""

from __future__ import annotations

import re

from specir.ir.types import NormalizedName

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

_METHOD_PREFIXES = {
    "POST": "create",
    "PUT": "update",
    "DELETE": "delete",
    "PATCH": "patch",
}


def normalize_name(name: str) -> NormalizedName:
    """Build a :class:`NormalizedName` for *name*.

    Example::

        >>> n = normalize_name("listModels")
        >>> n.pascal_case, n.camel_case, n.snake_case, n.screaming_snake
        ('ListModels', 'listModels', 'list_models', 'LIST_MODELS')
    """
    words = _split_words(_sanitize(name))
    prefix = "_" if words[0][0].isdigit() else ""

    capitalized = [_capitalize(word) for word in words]
    return NormalizedName(
        original=name,
        pascal_case=prefix + "".join(capitalized),
        camel_case=prefix + words[0].lower() + "".join(capitalized[1:]),
        snake_case=prefix + "_".join(word.lower() for word in words),
        screaming_snake=prefix + "_".join(word.upper() for word in words),
    )


def to_pascal_case(name: str) -> str:
    return normalize_name(name).pascal_case


def route_to_name(method: str, path: str) -> str:
    """Derive a camelCase operation name from an HTTP method and path.

    Parameter segments (``{id}``) are dropped from the resource words. When
    the path ends in a parameter, only the final resource word is
    singularised; earlier words are kept as written.

    Example::

        >>> route_to_name("GET", "/users")
        'listUsers'
        >>> route_to_name("GET", "/users/{userId}")
        'getUser'
        >>> route_to_name("POST", "/users/{userId}/messages")
        'createUsersMessages'
    """
    resource_words: list[str] = []
    ends_with_param = False
    for segment in path.split("/"):
        if not segment:
            continue
        if segment.startswith("{") and segment.endswith("}"):
            ends_with_param = True
        else:
            resource_words.append(segment)
            ends_with_param = False

    method_upper = method.upper()
    if method_upper == "GET":
        prefix = "get" if ends_with_param else "list"
    else:
        prefix = _METHOD_PREFIXES.get(method_upper, method.lower())

    parts = []
    for i, word in enumerate(resource_words):
        if ends_with_param and i == len(resource_words) - 1:
            word = singularize(word)
        parts.append(to_pascal_case(word))

    return prefix + "".join(parts)


def singularize(word: str) -> str:
    """Naive English singular: ``ies`` -> ``y``, ``ses``/``xes``/``zes`` drop ``es``, else drop one ``s``."""
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word.endswith(("ses", "xes", "zes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss") and len(word) > 1:
        return word[:-1]
    return word


def _sanitize(name: str) -> str:
    result: list[str] = []
    pending_separator = False
    for ch in name:
        if ch.isalnum():
            if pending_separator and result:
                result.append("_")
            result.append(ch)
            pending_separator = False
        else:
            pending_separator = True

    if not result:
        return "unnamed"
    return "".join(result)


def _split_words(sanitized: str) -> list[str]:
    spaced = _ACRONYM_BOUNDARY.sub(r"\1_\2", sanitized)
    spaced = _CAMEL_BOUNDARY.sub(r"\1_\2", spaced)
    return [word for word in spaced.split("_") if word]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()
