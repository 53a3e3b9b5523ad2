# errors.py
"""Typed request failures and their mapping to HTTP responses."""

import enum
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MISSING_ID_DETAIL = "ID de producto es requerido"
METHOD_NOT_ALLOWED = "Método no permitido"


class ErrorKind(str, enum.Enum):
    PARSE = "parse"
    VALIDATION = "validation"
    MISSING_ID = "missing_id"
    STORE = "store"


class Operation(str, enum.Enum):
    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


MESSAGES = {
    Operation.LIST: "Error al obtener productos",
    Operation.CREATE: "Error al crear producto",
    Operation.UPDATE: "Error al actualizar producto",
    Operation.DELETE: "Error al eliminar producto",
}


class StoreError(Exception):
    """A remote store call failed. Raised by store adapters only."""


class ProductoError(Exception):
    """A failed request, tagged with what went wrong and during which operation."""

    def __init__(self, kind: ErrorKind, operation: Operation, detail: str):
        super().__init__(detail)
        self.kind = kind
        self.operation = operation
        self.detail = detail

    @property
    def status_code(self) -> int:
        return status_for(self.kind, self.operation)

    def envelope(self) -> dict:
        return {"message": MESSAGES[self.operation], "error": self.detail}


def status_for(kind: ErrorKind, operation: Operation) -> int:
    # Reads have no client input to blame; every other failure is a 400.
    if kind is ErrorKind.STORE and operation is Operation.LIST:
        return 500
    return 400


async def producto_error_handler(request: Request, exc: ProductoError) -> JSONResponse:
    status_code = exc.status_code
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed ({exc.kind.value}): {exc.detail}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.kind.value}): {exc.detail}")
    return JSONResponse(status_code=status_code, content=exc.envelope())
