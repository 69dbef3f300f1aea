"""Shared helpers for feed schemas"""
from typing import Any, Optional


IDENTITY_KEYS = ("id", "_id")


def normalize_identity(value: Any) -> Optional[str]:
    """
    Reduce a supervisor/project reference to a canonical string id.

    The feed sends references either as a bare id or as a populated object
    carrying the id, e.g. "abc" or {"_id": "abc", "name": "..."}.
    Returns None when no id can be found.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        text = str(value).strip()
        return text or None
    if isinstance(value, dict):
        for key in IDENTITY_KEYS:
            if key in value:
                return normalize_identity(value[key])
        return None
    for key in IDENTITY_KEYS:
        nested = getattr(value, key, None)
        if nested is not None:
            return normalize_identity(nested)
    return None
