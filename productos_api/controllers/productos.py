# controllers/productos.py
"""CRUD endpoints for the productos collection."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..dependencies import get_json_body, get_store
from ..errors import MISSING_ID_DETAIL, ErrorKind, Operation, ProductoError, StoreError
from ..schemas.producto import ProductoCreate, ProductoUpdate, describe_validation_error
from ..store import ProductoStore

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate(schema, payload: dict, operation: Operation):
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise ProductoError(ErrorKind.VALIDATION, operation, describe_validation_error(e)) from e


def _call_store(operation: Operation, call, *args):
    try:
        return call(*args)
    except StoreError as e:
        raise ProductoError(ErrorKind.STORE, operation, str(e)) from e


@router.get("/productos", summary="List all productos")
def list_productos(store: ProductoStore = Depends(get_store)):
    """Return the whole collection, possibly empty."""
    logger.debug("Fetching productos")
    return _call_store(Operation.LIST, store.list_all)


@router.post("/productos", status_code=201, summary="Create a producto")
def create_producto(
    payload: dict = Depends(get_json_body),
    store: ProductoStore = Depends(get_store)
):
    """Validate the payload, insert it and return the inserted rows."""
    producto = _validate(ProductoCreate, payload, Operation.CREATE)
    logger.info(f"Creating producto: {producto.nombre} (precio {producto.precio})")
    rows = _call_store(Operation.CREATE, store.insert, producto.model_dump())
    return JSONResponse(status_code=201, content=rows)


@router.put("/productos", summary="Update a producto")
def update_producto(
    payload: dict = Depends(get_json_body),
    store: ProductoStore = Depends(get_store)
):
    """Apply a partial update to the producto whose ``id`` is in the body."""
    payload = dict(payload)
    producto_id = payload.pop("id", None)
    if not producto_id:
        raise ProductoError(ErrorKind.MISSING_ID, Operation.UPDATE, MISSING_ID_DETAIL)
    if isinstance(producto_id, bool) or not isinstance(producto_id, (int, str)):
        raise ProductoError(ErrorKind.VALIDATION, Operation.UPDATE, "id: debe ser un entero o una cadena")
    if isinstance(producto_id, str) and not producto_id.strip():
        raise ProductoError(ErrorKind.MISSING_ID, Operation.UPDATE, MISSING_ID_DETAIL)

    patch = _validate(ProductoUpdate, payload, Operation.UPDATE).patch()
    logger.info(f"Updating producto {producto_id}: {sorted(patch)}")
    return _call_store(Operation.UPDATE, store.update, producto_id, patch)


@router.delete("/productos", summary="Delete a producto")
def delete_producto(
    id: Optional[str] = Query(None, description="ID of the producto to delete"),
    store: ProductoStore = Depends(get_store)
):
    """Delete by ``?id=``; the store decides whether anything matched."""
    if not id or not id.strip():
        raise ProductoError(ErrorKind.MISSING_ID, Operation.DELETE, MISSING_ID_DETAIL)

    producto_id = id.strip()
    logger.info(f"Deleting producto {producto_id}")
    return _call_store(Operation.DELETE, store.delete, producto_id)
