from pydantic import BaseModel, ConfigDict, EmailStr
from datetime import datetime


class UsuarioCreate(BaseModel):
    nombre_completo: str
    email: EmailStr
    password: str


class UsuarioLogin(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str
    rol: str
    nombre: str
    email: str


class UsuarioResponse(BaseModel):
    id: int
    email: EmailStr
    nombre_completo: str
    rol: str
    activo: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
