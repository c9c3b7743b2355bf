"""Conversión entre el borrador de la UI y la forma persistida de un Becario."""

from typing import Iterable

from app.schemas.becarios import AnioCurso, BecarioDraft, BecarioPersistido
from app.services.referencias import resolve

ANIO_MIN, ANIO_MAX = 1, 5


def coerce_anio_curso(valor) -> AnioCurso:
    """Entero si ``valor`` es un entero en [1, 5]; si no, el valor original como texto."""
    if isinstance(valor, int) and not isinstance(valor, bool) and ANIO_MIN <= valor <= ANIO_MAX:
        return valor
    texto = "" if valor is None else str(valor)
    try:
        numero = int(texto.strip())
    except ValueError:
        return texto
    return numero if ANIO_MIN <= numero <= ANIO_MAX else texto


def to_persisted(draft: BecarioDraft, areas: Iterable = (), becas: Iterable = ()) -> BecarioPersistido:
    area = resolve(draft.area_inscripcion, areas)
    beca = resolve(draft.beca, becas)

    return BecarioPersistido(
        legajo=draft.legajo,
        apellido=draft.apellido,
        nombre=draft.nombre,
        dni=draft.dni,
        nro_movil=draft.nro_movil,
        usuario_telegram=draft.usuario_telegram,
        email=draft.email,
        anio_curso=coerce_anio_curso(draft.anio_curso),
        area_id=area.id,
        area_nombre=area.nombre,
        beca_id=beca.id,
        beca_nombre=beca.nombre,
        activo=True,
    )


def to_draft(becario) -> BecarioDraft:
    # Las etiquetas salen de los nombres cacheados: no se vuelve a resolver
    anio = becario.anio_curso
    return BecarioDraft(
        id=becario.id,
        legajo=becario.legajo,
        apellido=becario.apellido,
        nombre=becario.nombre,
        dni=becario.dni,
        nro_movil=becario.nro_movil,
        usuario_telegram=becario.usuario_telegram,
        email=becario.email,
        anio_curso="" if anio is None else anio,
        area_inscripcion=becario.area_nombre,
        beca=becario.beca_nombre,
    )
