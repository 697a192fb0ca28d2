"""Response envelopes shared by every route."""

from typing import Any


def success_response(data: Any, **extra: Any) -> dict[str, Any]:
    """
    {"success": true, ...extra, "data": data}

    Example:
        >>> success_response([1, 2], count=2)
        {'success': True, 'count': 2, 'data': [1, 2]}
    """
    return {"success": True, **extra, "data": data}


def error_response(message: str) -> dict[str, Any]:
    return {"success": False, "error": message}
