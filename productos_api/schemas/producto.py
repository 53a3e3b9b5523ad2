import math
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, ValidationError, field_validator, model_validator

ProductoId = Union[int, str]


class ProductoBase(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    nombre: str = Field(min_length=1)
    precio: StrictFloat
    descripcion: Optional[str] = None

    @field_validator('precio')
    @classmethod
    def precio_must_be_positive(cls, v: float) -> float:
        if not math.isfinite(v) or v <= 0:
            raise ValueError('Precio debe ser positivo')
        return v


class ProductoCreate(ProductoBase):
    pass


class ProductoUpdate(BaseModel):
    """Partial shape: every field optional, but present fields keep their constraints."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    nombre: Optional[str] = None
    precio: Optional[StrictFloat] = None
    descripcion: Optional[str] = None

    @field_validator('nombre')
    @classmethod
    def nombre_must_not_be_empty(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError('Nombre no puede ser nulo')
        if not v:
            raise ValueError('Nombre es requerido')
        return v

    @field_validator('precio')
    @classmethod
    def precio_must_be_positive(cls, v: Optional[float]) -> float:
        if v is None:
            raise ValueError('Precio no puede ser nulo')
        if not math.isfinite(v) or v <= 0:
            raise ValueError('Precio debe ser positivo')
        return v

    @model_validator(mode='after')
    def has_changes(self) -> 'ProductoUpdate':
        if not self.model_fields_set:
            raise ValueError('No hay campos para actualizar')
        return self

    def patch(self) -> dict:
        return self.model_dump(exclude_unset=True)


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error list into ``field: message; ...``."""
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"])
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts)
