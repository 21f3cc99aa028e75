from typing import Any, Dict

from flask import request


def json_object() -> Dict[str, Any]:
    """Request body as a JSON object; anything else (missing, invalid, array, scalar) reads as empty."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return {}
    return payload
