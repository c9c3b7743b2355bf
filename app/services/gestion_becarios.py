"""Modelo de vista de la página de gestión de becarios.

Mantiene la última lista de becarios, áreas y becas tal como la empujan los
stores. El estado en memoria solo cambia por esa vía: los comandos escriben
en el store y esperan el próximo snapshot, nunca modifican la lista local.
"""

import logging
from typing import Callable, Iterable, Optional

from app.core.errors import SesionRequeridaError
from app.schemas.becarios import BecarioDraft, BecarioResponse
from app.services.mappers import to_draft, to_persisted

logger = logging.getLogger(__name__)


def filtrar_becarios(items: Iterable[BecarioResponse], nombre: str = "", area: str = "") -> list[BecarioResponse]:
    """Filtro por "nombre apellido" y por nombre de área cacheado (sin distinguir mayúsculas)."""
    nombre_q = (nombre or "").lower()
    area_q = (area or "").lower()
    return [
        b for b in items
        if nombre_q in f"{b.nombre} {b.apellido}".lower()
        and area_q in (b.area_nombre or "").lower()
    ]


class GestionBecarios:
    def __init__(self, becarios_store, areas_store, becas_store, sesion=None,
                 on_change: Optional[Callable[["GestionBecarios"], None]] = None):
        self.becarios_store = becarios_store
        self.areas_store = areas_store
        self.becas_store = becas_store
        self.sesion = sesion
        self.on_change = on_change

        self._becarios: list = []
        self._areas: list = []
        self._becas: list = []
        self._suscripciones = []

        try:
            self._suscripciones.append(areas_store.subscribe(self._on_areas))
            self._suscripciones.append(becas_store.subscribe(self._on_becas))
            self._suscripciones.append(becarios_store.subscribe(self._on_becarios))
        except Exception:
            self.cerrar()
            raise

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.cerrar()

    # --- snapshots ---

    @property
    def becarios(self) -> list:
        return list(self._becarios)

    @property
    def areas(self) -> list:
        return list(self._areas)

    @property
    def becas(self) -> list:
        return list(self._becas)

    def _on_becarios(self, items):
        self._becarios = items
        self._avisar()

    def _on_areas(self, items):
        self._areas = items
        self._avisar()

    def _on_becas(self, items):
        self._becas = items
        self._avisar()

    def _avisar(self):
        if self.on_change is not None:
            self.on_change(self)

    # --- comandos ---

    def _requerir_sesion(self):
        if self.sesion is not None and self.sesion.current_user_id() is None:
            raise SesionRequeridaError("Debe iniciar sesión para modificar becarios")

    def create(self, draft: BecarioDraft) -> int:
        self._requerir_sesion()
        persistido = to_persisted(draft, self._areas, self._becas)
        return self.becarios_store.create(persistido)

    def update(self, id: int, draft: BecarioDraft) -> None:
        self._requerir_sesion()
        persistido = to_persisted(draft, self._areas, self._becas)
        self.becarios_store.update(id, persistido)

    def delete(self, id: int, confirmado: bool = False) -> bool:
        """Borra solo si el usuario confirmó. Devuelve si se ejecutó el borrado."""
        if not confirmado:
            logger.debug("Borrado de becario %s sin confirmar, se ignora", id)
            return False
        self._requerir_sesion()
        self.becarios_store.delete(id)
        return True

    def draft(self, id: int) -> BecarioDraft:
        return to_draft(self.becarios_store.get(id))

    def filtered_view(self, name_query: str = "", area_query: str = "") -> list:
        return filtrar_becarios(self._becarios, name_query, area_query)

    def cerrar(self) -> None:
        for sub in self._suscripciones:
            sub.cancelar()
        self._suscripciones = []
