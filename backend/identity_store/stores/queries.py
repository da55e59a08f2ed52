"""
Predicate builders for identity lookups.

Only a closed set of filter shapes is produced:

- scalar equality:            {field: value}
- entry with a field pair:    {sequence: {"$elemMatch": {a: x, b: y}}}
- entry with a single field:  {"sequence.field": value}

Values are compared with exact, case-sensitive equality. Builders never add
a sort or limit, so results keep storage order and are unbounded.
"""
from typing import Any

from identity_store.core.exceptions import InvalidArgumentError
from identity_store.models.claim import Claim


def _require_str(name: str, value: Any) -> str:
    # Non-string values could carry query operators such as {"$ne": None}
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"{name} must be a string, got {type(value).__name__}"
        )
    return value


def field_equals(field: str, value: str) -> dict[str, Any]:
    """Match documents whose scalar field equals value."""
    return {field: _require_str(field, value)}


def has_entry(sequence_field: str, **criteria: str) -> dict[str, Any]:
    """Match documents with one sequence entry satisfying every criterion."""
    return {
        sequence_field: {
            "$elemMatch": {
                name: _require_str(name, value) for name, value in criteria.items()
            }
        }
    }


def has_entry_with(sequence_field: str, entry_field: str, value: str) -> dict[str, Any]:
    """Match documents with any sequence entry whose field equals value."""
    return {f"{sequence_field}.{entry_field}": _require_str(entry_field, value)}


# ==================== Named lookups ====================

def by_normalized_user_name(normalized_user_name: str) -> dict[str, Any]:
    return field_equals("normalized_user_name", normalized_user_name)


def by_normalized_email(normalized_email: str) -> dict[str, Any]:
    return field_equals("normalized_email", normalized_email)


def by_normalized_role_name(normalized_name: str) -> dict[str, Any]:
    return field_equals("normalized_name", normalized_name)


def by_login(login_provider: str, provider_key: str) -> dict[str, Any]:
    """Both fields must match the same login entry."""
    return has_entry("logins", login_provider=login_provider, provider_key=provider_key)


def by_claim(claim: Claim) -> dict[str, Any]:
    """Type and value must match the same claim entry."""
    return has_entry("claims", type=claim.type, value=claim.value)


def by_role_name(role_name: str) -> dict[str, Any]:
    return has_entry_with("roles", "role_name", role_name)
