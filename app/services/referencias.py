"""Resolución de etiquetas contra un catálogo (Áreas o Becas)."""

from typing import Iterable, NamedTuple, Optional


class Referencia(NamedTuple):
    id: Optional[int]
    nombre: str

    @property
    def resuelta(self) -> bool:
        return self.id is not None


def resolve(label: Optional[str], catalog: Iterable) -> Referencia:
    """Busca ``label`` (coincidencia exacta, sensible a mayúsculas) en ``catalog``.

    Cada ítem del catálogo debe exponer ``id`` y ``nombre``. Si no hay
    coincidencia se devuelve ``Referencia(None, label)``: el nombre escrito
    queda como etiqueta sin id. Nunca lanza.
    """
    label = label or ""
    for item in catalog:
        if item.nombre == label:
            return Referencia(item.id, item.nombre)
    return Referencia(None, label)
