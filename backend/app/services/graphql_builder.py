"""GraphQL query builders for Weaviate Get and Aggregate queries.

Weaviate's GraphQL API has no variables for class or field names, so names
are interpolated into the query text. Every name is checked against the
GraphQL name grammar first.
"""

import re
from collections.abc import Iterable

from app.schemas.collection import PropertyInfo, SortDirective

_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")

# Data types that cannot be selected as a scalar field.
_NESTED_SELECTIONS = {
    "geoCoordinates": "{ latitude longitude }",
    "phoneNumber": "{ input internationalFormatted countryCode national }",
}


def validate_name(name: str) -> str:
    """Return name unchanged, or raise ValueError if it is not a GraphQL name."""
    if not _NAME_RE.match(name):
        raise ValueError(f"Invalid GraphQL name: {name!r}")
    return name


def _field_selection(prop: PropertyInfo) -> str | None:
    """Selection text for one property, or None if it cannot be selected."""
    if prop.is_reference:
        return None
    name = validate_name(prop.name)
    if prop.is_object:
        # object and object[] need an explicit selection of their nested fields
        nested_fields = [
            f for f in (_field_selection(p) for p in prop.nested_properties or []) if f
        ]
        if not nested_fields:
            return None
        joined = " ".join(nested_fields)
        return f"{name} {{ {joined} }}"
    data_type = prop.data_type[0] if prop.data_type else None
    nested = _NESTED_SELECTIONS.get(data_type or "")
    if nested:
        return f"{name} {nested}"
    return name


def build_get_query(
    class_name: str,
    properties: Iterable[PropertyInfo],
    sort: SortDirective | None = None,
    limit: int | None = None,
) -> str:
    """Build a ``Get`` query for the given class and properties."""
    validate_name(class_name)

    fields = [f for f in (_field_selection(p) for p in properties) if f]
    if not fields:
        # A Get selection cannot be empty
        fields = ["_additional { id }"]

    args = []
    if sort is not None:
        args.append(f'sort: [{{path: ["{validate_name(sort.property)}"], order: {sort.order}}}]')
    if limit is not None:
        args.append(f"limit: {int(limit)}")
    arg_text = f"({', '.join(args)})" if args else ""

    selection = "\n        ".join(fields)
    return (
        "{\n"
        "  Get {\n"
        f"    {class_name}{arg_text} {{\n"
        f"        {selection}\n"
        "    }\n"
        "  }\n"
        "}"
    )


def build_ids_query(class_name: str) -> str:
    """Build a ``Get`` query selecting only object ids."""
    validate_name(class_name)
    return (
        "{\n"
        "  Get {\n"
        f"    {class_name} {{\n"
        "      _additional { id }\n"
        "    }\n"
        "  }\n"
        "}"
    )


def build_aggregate_count_query(class_name: str) -> str:
    """Build an ``Aggregate`` query requesting ``meta { count }``."""
    validate_name(class_name)
    return (
        "{\n"
        "  Aggregate {\n"
        f"    {class_name} {{\n"
        "      meta { count }\n"
        "    }\n"
        "  }\n"
        "}"
    )
