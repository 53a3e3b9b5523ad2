# dependencies.py
"""Centralized dependencies for the FastAPI application."""

import json

from fastapi import Request

from .errors import ErrorKind, Operation, ProductoError
from .store import ProductoStore

OPERATIONS_BY_METHOD = {
    "GET": Operation.LIST,
    "POST": Operation.CREATE,
    "PUT": Operation.UPDATE,
    "DELETE": Operation.DELETE,
}


def get_store(request: Request) -> ProductoStore:
    """Store dependency.

    Returns the instance built once in ``create_app``.
    Usage: store: ProductoStore = Depends(get_store)
    """
    return request.app.state.store


def _reject_constant(name: str):
    # NaN and Infinity are not JSON.
    raise ValueError(f"unsupported constant {name}")


async def get_json_body(request: Request) -> dict:
    """Parse the raw request body as a JSON object.

    A missing or blank body counts as ``{}`` and leaves rejection to validation.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    operation = OPERATIONS_BY_METHOD.get(request.method, Operation.CREATE)
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise ProductoError(ErrorKind.PARSE, operation, f"Invalid JSON body: {e}") from e
    if not isinstance(payload, dict):
        raise ProductoError(ErrorKind.PARSE, operation, "Request body must be a JSON object")
    return payload
