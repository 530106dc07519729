"""Absolute vs. relative mutation semantics for numeric adjustments.

LifeUp applies ``coin``/``exp``/``set_price``/... either as a replacement
(absolute) or as a signed delta (relative), chosen by a paired ``*_set_type``
parameter. The resolver only decides which marker goes out next to a value;
the resulting remote value is never computed here.
"""

from typing import Optional

from lifeup_agent.schemas.common import SetType

DEFAULT_SET_TYPE = SetType.absolute


def resolve_set_type(set_type: Optional[SetType | str]) -> SetType:
    """Return the effective set type, falling back to DEFAULT_SET_TYPE."""
    if set_type is None:
        return DEFAULT_SET_TYPE
    return SetType(set_type)


def adjustment_pairs(
    field: str,
    value: Optional[int],
    set_type: Optional[SetType | str],
    marker: str,
) -> list[tuple[str, object]]:
    """Value and its marker as two adjacent query pairs.

    A marker without a value has nothing to qualify and is dropped.
    """
    if value is None:
        return []
    return [(field, value), (marker, resolve_set_type(set_type).value)]


def is_absolute(set_type: Optional[SetType | str]) -> bool:
    return resolve_set_type(set_type) is SetType.absolute
