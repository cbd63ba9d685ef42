# =============================================================================
# core/validators.py  —  Tool Argument Validation
# =============================================================================
#
# One predicate per tool.  Each takes whatever arrived as the tool's
# "arguments" and answers a single question: does it have the right shape?
#
#   - never raises, never coerces, never fills in defaults
#   - optional fields may be absent; a JSON null is a type mismatch
#   - JSON booleans are not numbers, even though bool subclasses int
# =============================================================================

from collections.abc import Mapping
from typing import Any

_MISSING = object()


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_property_value(value: Any) -> bool:
    return value is None or _is_string(value) or _is_bool(value) or _is_number(value)


def _required(args: Mapping, name: str, check) -> bool:
    return check(args.get(name, _MISSING))


def _optional(args: Mapping, name: str, check) -> bool:
    value = args.get(name, _MISSING)
    return value is _MISSING or check(value)


def is_valid_get_profile_args(args: Any) -> bool:
    return isinstance(args, Mapping) and _required(args, "profileId", _is_string)


def is_valid_search_profiles_args(args: Any) -> bool:
    return (
        isinstance(args, Mapping)
        and _required(args, "query", _is_string)
        and _optional(args, "limit", _is_number)
        and _optional(args, "offset", _is_number)
    )


def is_valid_get_my_profile_args(args: Any) -> bool:
    return (
        isinstance(args, Mapping)
        and _optional(args, "requireSegments", _is_bool)
        and _optional(args, "requireScores", _is_bool)
    )


def is_valid_update_my_profile_args(args: Any) -> bool:
    """``properties`` must be a mapping of string keys to scalar-or-null values."""
    if not isinstance(args, Mapping):
        return False
    properties = args.get("properties")
    if not isinstance(properties, Mapping):
        return False
    return all(
        _is_string(key) and _is_property_value(value)
        for key, value in properties.items()
    )


def is_valid_create_scope_args(args: Any) -> bool:
    return (
        isinstance(args, Mapping)
        and _required(args, "scope", _is_string)
        and _optional(args, "name", _is_string)
        and _optional(args, "description", _is_string)
    )
