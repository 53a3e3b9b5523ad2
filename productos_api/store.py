# store.py
"""Data access for the productos collection.

Every backend exposes the same four calls and returns plain row dicts.
Library failures are re-raised as ``StoreError``; nothing here retries.
"""

import logging
import re
from typing import List, Protocol

import httpx
from postgrest.exceptions import APIError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from supabase import Client, create_client

from . import models
from .config import SQL, Settings
from .database import make_session_factory
from .errors import StoreError
from .schemas.producto import ProductoId

logger = logging.getLogger(__name__)

DIGITS = re.compile(r"\d+\Z")

Row = dict


class ProductoStore(Protocol):
    def list_all(self) -> List[Row]: ...

    def insert(self, row: Row) -> List[Row]: ...

    def update(self, producto_id: ProductoId, patch: Row) -> List[Row]: ...

    def delete(self, producto_id: ProductoId) -> List[Row]: ...


class SupabaseProductoStore:
    """Hosted Supabase table accessed through PostgREST."""

    def __init__(self, client: Client, table: str = "productos"):
        self.client = client
        self.table = table

    def _execute(self, query) -> List[Row]:
        try:
            response = query.execute()
        except APIError as e:
            raise StoreError(e.message or str(e)) from e
        except httpx.HTTPError as e:
            raise StoreError(f"Store unreachable: {e}") from e
        return list(response.data or [])

    def list_all(self) -> List[Row]:
        return self._execute(self.client.table(self.table).select("*"))

    def insert(self, row: Row) -> List[Row]:
        return self._execute(self.client.table(self.table).insert(row))

    def update(self, producto_id: ProductoId, patch: Row) -> List[Row]:
        return self._execute(self.client.table(self.table).update(patch).eq("id", producto_id))

    def delete(self, producto_id: ProductoId) -> List[Row]:
        return self._execute(self.client.table(self.table).delete().eq("id", producto_id))


class SqlProductoStore:
    """Productos table behind SQLAlchemy (Postgres in production, SQLite locally)."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def list_all(self) -> List[Row]:
        with self.session_factory() as db:
            try:
                productos = db.query(models.Producto).order_by(models.Producto.id).all()
            except SQLAlchemyError as e:
                raise StoreError(str(e)) from e
            return [p.to_dict() for p in productos]

    def insert(self, row: Row) -> List[Row]:
        with self.session_factory() as db:
            try:
                producto = models.Producto(**row)
                db.add(producto)
                db.commit()
                db.refresh(producto)
            except SQLAlchemyError as e:
                db.rollback()
                raise StoreError(str(e)) from e
            return [producto.to_dict()]

    def _matching(self, db: Session, producto_id: ProductoId) -> List[models.Producto]:
        # Integer keys only; bools, floats and non-digit strings match nothing.
        if isinstance(producto_id, bool):
            return []
        if isinstance(producto_id, int):
            pk = producto_id
        elif isinstance(producto_id, str) and DIGITS.match(producto_id):
            pk = int(producto_id)
        else:
            return []
        return db.query(models.Producto).filter(models.Producto.id == pk).all()

    def update(self, producto_id: ProductoId, patch: Row) -> List[Row]:
        with self.session_factory() as db:
            try:
                productos = self._matching(db, producto_id)
                for producto in productos:
                    for field, value in patch.items():
                        setattr(producto, field, value)
                db.commit()
                for producto in productos:
                    db.refresh(producto)
            except SQLAlchemyError as e:
                db.rollback()
                raise StoreError(str(e)) from e
            return [p.to_dict() for p in productos]

    def delete(self, producto_id: ProductoId) -> List[Row]:
        with self.session_factory() as db:
            try:
                productos = self._matching(db, producto_id)
                deleted = [p.to_dict() for p in productos]
                for producto in productos:
                    db.delete(producto)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise StoreError(str(e)) from e
            return deleted


def build_store(settings: Settings) -> ProductoStore:
    """Construct the one store instance the application shares across requests."""
    if settings.store_backend == SQL:
        logger.info("Using SQL productos store")
        return SqlProductoStore(make_session_factory(settings.database_url))
    logger.info(f"Using Supabase productos store, table '{settings.table}'")
    return SupabaseProductoStore(create_client(settings.supabase_url, settings.supabase_key), settings.table)
