from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional, Union

# anioCurso: entero 1..5 cuando se pudo convertir, si no el texto tal cual
AnioCurso = Union[int, str]


# --- BORRADOR (lo que edita la UI; sin ids ni campos denormalizados) ---
class BecarioDraft(BaseModel):
    id: Optional[int] = None
    legajo: str = ""
    apellido: str = ""
    nombre: str = ""
    dni: str = ""
    nro_movil: str = Field(default="", alias="nroMovil")
    usuario_telegram: str = Field(default="", alias="usuarioTelegram")
    email: str = ""
    anio_curso: AnioCurso = Field(default="", alias="anioCurso")
    # Etiquetas tal como las eligió/escribió el usuario
    area_inscripcion: str = Field(default="", alias="areaInscripcion")
    beca: str = ""

    model_config = ConfigDict(populate_by_name=True)


# --- FORMA PERSISTIDA (ids + nombres cacheados) ---
class BecarioPersistido(BaseModel):
    legajo: str = ""
    apellido: str = ""
    nombre: str = ""
    dni: str = ""
    nro_movil: str = Field(default="", alias="nroMovil")
    usuario_telegram: str = Field(default="", alias="usuarioTelegram")
    email: str = ""
    anio_curso: Optional[AnioCurso] = Field(default=None, alias="anioCurso")

    area_id: Optional[int] = Field(default=None, alias="areaId")
    area_nombre: str = Field(default="", alias="areaName")
    beca_id: Optional[int] = Field(default=None, alias="becaId")
    beca_nombre: str = Field(default="", alias="becaName")

    activo: bool = Field(default=True, alias="active")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# --- REGISTRO (lo que entrega el store a los suscriptores) ---
class BecarioResponse(BecarioPersistido):
    id: int
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True, frozen=True)
