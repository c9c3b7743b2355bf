from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.errors import SesionRequeridaError
from app.services.sesion import SesionIdentidad

bearer_scheme = HTTPBearer(auto_error=False)


def get_stores(request: Request):
    return request.app.state.stores


def get_gestion(request: Request):
    return request.app.state.gestion


def get_sesion(
    request: Request,
    credenciales: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> SesionIdentidad:
    token = credenciales.credentials if credenciales else None
    return SesionIdentidad.desde_token(request.app.state.session_factory, token)


def requerir_sesion(sesion: SesionIdentidad = Depends(get_sesion)) -> SesionIdentidad:
    """Las rutas de escritura exigen un usuario autenticado y todavía activo."""
    if sesion.current_user_id() is None:
        raise SesionRequeridaError("Debe iniciar sesión")
    if not sesion.vigente():
        raise SesionRequeridaError("La cuenta fue deshabilitada o eliminada")
    return sesion
