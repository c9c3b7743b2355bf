"""RecordStore: CRUD + suscripción en tiempo real sobre una colección.

Un store por colección (Áreas, Becas, Becarios), construido con la fábrica de
sesiones y compartido por todas las sesiones del proceso. Cada escritura
exitosa re-lee la colección completa y la empuja a todos los suscriptores:
los suscriptores nunca reciben diffs, siempre el estado actual ordenado por
``created_at`` descendente y, a igual fecha, por ``id`` ascendente.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Any, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import NotFoundError, PersistenceError
from app.models.mixins import ahora_utc

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Campos que asigna el store; nunca se aceptan del cliente
CAMPOS_PROTEGIDOS = frozenset({"id", "created_at", "updated_at"})


class Suscripcion:
    def __init__(self, store: "RecordStore", callback: Callable[[list], None]):
        self._store = store
        self.callback = callback
        self.activa = True

    def cancelar(self) -> None:
        """Da de baja la suscripción. Se puede llamar varias veces."""
        self._store._quitar(self)

    __call__ = cancelar


class RecordStore(Generic[T]):
    def __init__(
        self,
        nombre: str,
        model,
        schema: type[T],
        session_factory,
        reloj: Callable[[], datetime] = ahora_utc,
        monotonico: bool = True,
    ):
        self.nombre = nombre
        self.model = model
        self.schema = schema
        self._session_factory = session_factory
        self._reloj = reloj
        self._monotonico = monotonico
        self._ultima_marca: Optional[datetime] = None
        self._columnas = {c.key for c in inspect(model).column_attrs}
        self._suscripciones: list[Suscripcion] = []
        # Serializa despachos y altas/bajas de suscriptores. Reentrante para que
        # un callback pueda desuscribirse o escribir desde adentro.
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"<RecordStore {self.nombre} suscriptores={len(self._suscripciones)}>"

    # ------------------------------------------------------------------ helpers

    def _marca_tiempo(self) -> datetime:
        with self._lock:
            marca = self._reloj()
            if self._monotonico and self._ultima_marca is not None and marca <= self._ultima_marca:
                marca = self._ultima_marca + timedelta(microseconds=1)
            self._ultima_marca = marca
            return marca

    def _a_dict(self, data: Any, parcial: bool) -> dict:
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=parcial)
        else:
            data = dict(data)

        valores = {}
        for campo, valor in data.items():
            if campo in CAMPOS_PROTEGIDOS:
                continue
            if campo not in self._columnas:
                raise PersistenceError(
                    f"El campo '{campo}' no existe en {self.nombre}", code="invalid-argument"
                )
            valores[campo] = valor
        return valores

    def _leer(self, session) -> list[T]:
        stmt = select(self.model).order_by(self.model.created_at.desc(), self.model.id.asc())
        return [self.schema.model_validate(row) for row in session.scalars(stmt)]

    # --------------------------------------------------------------------- CRUD

    def create(self, data: Any) -> int:
        """Alta. Asigna id y marcas de tiempo; ``activo`` es True si no se indica."""
        valores = self._a_dict(data, parcial=False)
        # Un None en una columna NOT NULL deja actuar al default de la tabla
        valores = {
            k: v for k, v in valores.items()
            if v is not None or self.model.__table__.c[k].nullable
        }
        if valores.get("activo") is None:
            valores["activo"] = True
        marca = self._marca_tiempo()

        with self._session_factory() as session:
            try:
                row = self.model(**valores, created_at=marca, updated_at=marca)
                session.add(row)
                session.commit()
                nuevo_id = row.id
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("Error creando en %s: %s", self.nombre, exc)
                raise PersistenceError(f"No se pudo crear en {self.nombre}") from exc

        logger.debug("%s: creado id=%s", self.nombre, nuevo_id)
        self._notificar()
        return nuevo_id

    def get(self, id: int) -> T:
        with self._session_factory() as session:
            try:
                row = session.get(self.model, id)
            except SQLAlchemyError as exc:
                raise PersistenceError(f"No se pudo leer {self.nombre}/{id}") from exc
            if row is None:
                raise NotFoundError(f"{self.nombre}/{id} no existe")
            return self.schema.model_validate(row)

    def list(self) -> list[T]:
        """Lectura única de la colección completa, ya ordenada."""
        with self._session_factory() as session:
            try:
                return self._leer(session)
            except SQLAlchemyError as exc:
                raise PersistenceError(f"No se pudo leer {self.nombre}") from exc

    def update(self, id: int, patch: Any) -> None:
        """Patch: solo se escriben los campos provistos, más ``updated_at``."""
        valores = self._a_dict(patch, parcial=True)

        with self._session_factory() as session:
            try:
                row = session.get(self.model, id)
                if row is None:
                    raise NotFoundError(f"{self.nombre}/{id} no existe")
                for campo, valor in valores.items():
                    setattr(row, campo, valor)
                row.updated_at = self._marca_tiempo()
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("Error actualizando %s/%s: %s", self.nombre, id, exc)
                raise PersistenceError(f"No se pudo actualizar {self.nombre}/{id}") from exc

        logger.debug("%s: actualizado id=%s campos=%s", self.nombre, id, sorted(valores))
        self._notificar()

    def delete(self, id: int) -> None:
        """Baja definitiva. Borrar un id inexistente no es un error."""
        with self._session_factory() as session:
            try:
                row = session.get(self.model, id)
                if row is None:
                    logger.debug("%s: id=%s ya no existe, nada que borrar", self.nombre, id)
                    return
                session.delete(row)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("Error borrando %s/%s: %s", self.nombre, id, exc)
                raise PersistenceError(f"No se pudo borrar {self.nombre}/{id}") from exc

        logger.debug("%s: borrado id=%s", self.nombre, id)
        self._notificar()

    # ----------------------------------------------------------- suscripciones

    def subscribe(self, callback: Callable[[list[T]], None]) -> Suscripcion:
        """Registra ``callback`` y lo invoca de inmediato con la colección actual.

        Devuelve un objeto invocable que da de baja la suscripción.
        """
        with self._lock:
            items = self.list()
            sub = Suscripcion(self, callback)
            self._suscripciones.append(sub)
            self._entregar(sub, items)
        return sub

    def _quitar(self, sub: Suscripcion) -> None:
        with self._lock:
            sub.activa = False
            if sub in self._suscripciones:
                self._suscripciones.remove(sub)

    def _entregar(self, sub: Suscripcion, items: list[T]) -> None:
        if not sub.activa:
            return
        try:
            sub.callback(list(items))
        except Exception:
            logger.exception("Suscriptor de %s falló al procesar el snapshot", self.nombre)

    def _notificar(self) -> None:
        with self._lock:
            if not self._suscripciones:
                return
            try:
                items = self.list()
            except PersistenceError:
                # La escritura ya se confirmó; el próximo cambio vuelve a empujar
                logger.exception("No se pudo releer %s para notificar", self.nombre)
                return
            for sub in list(self._suscripciones):
                self._entregar(sub, items)

    def cerrar(self) -> None:
        """Da de baja todas las suscripciones (apagado de la aplicación)."""
        with self._lock:
            for sub in list(self._suscripciones):
                self._quitar(sub)
