from typing import Any, Dict
from flask import request
from chat.errors import BadRequest

# feedback.id is a 32-bit INTEGER column
MAX_FEEDBACK_ID = 2**31 - 1


def parse_feedback_id(raw: str) -> int:
    """Route ids arrive as strings; only plain positive integers are accepted."""
    value = (raw or "").strip()
    if not (value.isascii() and value.isdigit()):
        raise BadRequest("Identificador de feedback inválido", details={"feedback_id": raw})
    n = int(value)
    if n < 1 or n > MAX_FEEDBACK_ID:
        raise BadRequest("Identificador de feedback inválido", details={"feedback_id": raw})
    return n


def get_json_object() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
