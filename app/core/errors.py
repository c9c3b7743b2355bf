"""Errores tipados de la capa de datos.

Todos llevan un ``code`` (cadena del proveedor) y un ``message`` legible.
Una referencia no resuelta NO es un error: ver ``app.services.referencias``.
"""


class BecariosError(Exception):
    code = "unknown"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class NotFoundError(BecariosError):
    code = "not-found"


class PersistenceError(BecariosError):
    """Falla del proveedor (conexión, permisos, restricción). La causa queda en ``__cause__``."""

    code = "unavailable"


class SesionRequeridaError(BecariosError):
    code = "unauthenticated"


class CredencialesInvalidasError(BecariosError):
    code = "auth/invalid-credential"
