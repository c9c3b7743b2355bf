"""Sesión de identidad: usuario autenticado, login y logout."""

import logging
from typing import Optional

from app.core import security
from app.core.errors import CredencialesInvalidasError
from app.models.users import Usuario

logger = logging.getLogger(__name__)


class SesionIdentidad:
    def __init__(self, session_factory, usuario_id: Optional[int] = None):
        self._session_factory = session_factory
        self._usuario_id = usuario_id

    @classmethod
    def desde_token(cls, session_factory, token: Optional[str]) -> "SesionIdentidad":
        """Sesión a partir de un bearer token; anónima si el token no es válido."""
        payload = security.decode_access_token(token) if token else None
        if not payload or "uid" not in payload:
            return cls(session_factory)
        return cls(session_factory, usuario_id=int(payload["uid"]))

    def current_user_id(self) -> Optional[int]:
        return self._usuario_id

    def login(self, email: str, password: str) -> Usuario:
        with self._session_factory() as db:
            user = db.query(Usuario).filter(Usuario.email == email.strip()).first()

        if user is None:
            raise CredencialesInvalidasError("No existe una cuenta con ese correo.", code="auth/user-not-found")
        if not security.verify_password(password, user.hashed_password):
            raise CredencialesInvalidasError("Contraseña incorrecta.", code="auth/wrong-password")
        if not user.activo:
            raise CredencialesInvalidasError(
                "Cuenta deshabilitada. Contactá al administrador.", code="auth/user-disabled"
            )

        self._usuario_id = user.id
        logger.info("Sesión iniciada por usuario id=%s", user.id)
        return user

    def vigente(self) -> bool:
        """True si el usuario de la sesión todavía existe y no fue deshabilitado."""
        if self._usuario_id is None:
            return False
        with self._session_factory() as db:
            user = db.get(Usuario, self._usuario_id)
        return user is not None and bool(user.activo)

    def logout(self) -> None:
        if self._usuario_id is not None:
            logger.info("Sesión cerrada por usuario id=%s", self._usuario_id)
        self._usuario_id = None

    def emitir_token(self, user: Usuario) -> str:
        return security.create_access_token({"sub": user.email, "uid": user.id, "rol": user.rol})
