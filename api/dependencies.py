"""Request dependencies shared by the exercise routes."""

import json
from typing import Any, Dict
from fastapi import Request
from api.errors import BadRequestError

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_payload(request: Request) -> Dict[str, Any]:
    """Read the request body as a flat dict.

    JSON and HTML form submissions are both accepted; any other body is
    treated as empty.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == "application/json":
        raw = await request.body()
        if not raw:
            return {}
        try:
            body = json.loads(raw)
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            reason = e.msg if isinstance(e, json.JSONDecodeError) else "body is not valid UTF-8"
            raise BadRequestError(f"Invalid JSON body: {reason}")
        return body if isinstance(body, dict) else {}

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return {key: value for key, value in form.items()}

    return {}
