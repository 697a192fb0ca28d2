"""
Deterministic cache key derivation.

Keys look like ``flashcards:industryId=2&language=null&levelId=3``: parameter
names sorted lexicographically, ``None`` rendered as the literal ``null``
instead of being dropped. Two calls with the same parameter shape therefore
collide predictably; callers must always pass the full shape. Literal ``%``,
``&`` and ``=`` inside values are percent-encoded.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from content_cache.core.config.constants import CACHE_KEY_NULL_TOKEN, CACHE_KEY_PAIR_SEPARATOR

# Percent-encode the characters that delimit pairs so values cannot forge them
_ESCAPES = str.maketrans({"%": "%25", "&": "%26", "=": "%3D"})


def _stringify(value: Any) -> str:
    if value is None:
        return CACHE_KEY_NULL_TOKEN
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value).translate(_ESCAPES)
    return str(value).translate(_ESCAPES)


def build_cache_key(prefix: str, params: Mapping[str, Any]) -> str:
    """
    Build a cache key from a resource prefix and an unordered parameter set.

    Args:
        prefix: Logical resource name (e.g. "level", "flashcards")
        params: Parameter name -> scalar value; None means absent

    Returns:
        "prefix:name1=value1&name2=value2" with names in sorted order

    Example:
        >>> build_cache_key("level", {"levelId": "3", "language": None})
        'level:language=null&levelId=3'
    """
    pairs = CACHE_KEY_PAIR_SEPARATOR.join(
        f"{name}={_stringify(params[name])}" for name in sorted(params)
    )
    return f"{prefix}:{pairs}"
