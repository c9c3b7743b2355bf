from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

# Los nombres de los campos en JSON siguen el esquema persistido
# (id, name, active, createdAt, updatedAt); en Python usamos los nuestros.


# --- REGISTRO (lo que entrega el store a los suscriptores) ---
class ItemCatalogo(BaseModel):
    id: int
    nombre: str = Field(alias="name")
    activo: bool = Field(default=True, alias="active")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, frozen=True)


class AreaResponse(ItemCatalogo):
    pass


class BecaResponse(ItemCatalogo):
    pass


# --- ALTA / EDICIÓN (panel de administración de áreas y becas) ---
class CatalogoCreate(BaseModel):
    nombre: str = Field(alias="name", min_length=1, max_length=100)
    activo: Optional[bool] = Field(default=None, alias="active")

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class CatalogoUpdate(BaseModel):
    nombre: Optional[str] = Field(default=None, alias="name", min_length=1, max_length=100)
    activo: Optional[bool] = Field(default=None, alias="active")

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)
