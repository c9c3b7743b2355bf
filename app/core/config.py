"""Configuración de la aplicación.

Se lee de variables de entorno con prefijo ``BECARIOS_`` (o de un ``.env``).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BECARIOS_",
        env_file=".env",
        extra="ignore",
    )

    # SQLite por defecto; en producción se usa SQL Server vía pyodbc, p.ej.
    # mssql+pyodbc:///?odbc_connect=DRIVER%3D%7BODBC+Driver+18+for+SQL+Server%7D...
    database_url: str = "sqlite:///./becarios.db"

    secret_key: str = "cambiar-esta-clave-en-produccion"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(default=60, ge=1)

    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
