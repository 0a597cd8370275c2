"""
SQL helpers for building partial-update statements.

The repositories own their statement text; these helpers only produce the
SET clause and its bound values for an UPDATE whose column list depends on
which fields the caller supplied.
"""

from typing import Any, Dict, Iterable, List, Mapping, Tuple

from jobboard.core.exceptions import EmptyUpdateError, InvalidFieldError


def restrict_fields(fields: Mapping[str, Any], allowed: Iterable[str]) -> Dict[str, Any]:
    """
    Reject any field name outside the permitted set.

    Field names end up as SQL identifiers in build_set_fragment, so callers
    must pass every update mapping through here first.

    Args:
        fields: Field name to new value
        allowed: Field names the entity permits in a partial update

    Returns:
        The fields as a new dict, in their original order

    Raises:
        InvalidFieldError: If any key is not in allowed
    """
    allowed = set(allowed)
    unknown = [key for key in fields if key not in allowed]
    if unknown:
        raise InvalidFieldError(unknown)
    return dict(fields)


def build_set_fragment(fields: Mapping[str, Any], name_map: Mapping[str, str]) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a partial UPDATE.

    Each field becomes a quoted column assignment with its own positional
    placeholder, numbered from $1 in the mapping's iteration order:

        {"numEmployees": 10, "name": "Acme"}, {"numEmployees": "num_employees"}
        => ('"num_employees"=$1, "name"=$2', [10, "Acme"])

    Keys missing from name_map are used as the column name verbatim.

    Args:
        fields: Field name to new value (must not be empty)
        name_map: Field name to storage column name

    Returns:
        Tuple of (fragment, values) where placeholder $i binds to values[i-1]

    Raises:
        EmptyUpdateError: If fields is empty
    """
    if not fields:
        raise EmptyUpdateError()

    cols = [
        f'"{name_map.get(key, key)}"=${idx}'
        for idx, key in enumerate(fields, start=1)
    ]
    return ", ".join(cols), list(fields.values())
