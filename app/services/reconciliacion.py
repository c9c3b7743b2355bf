"""Reconciliación opcional de nombres cacheados en los becarios.

Nunca se ejecuta sola: el alta/edición de un Área o Beca no toca a los
becarios. Quien la invoque acepta reescribir ``area_nombre``/``beca_nombre``
con el nombre actual del catálogo cuando el id referenciado todavía existe.
Las referencias a ids borrados quedan como están.
"""

import logging

logger = logging.getLogger(__name__)


def reconciliar_nombres(becarios_store, areas, becas) -> int:
    """Devuelve la cantidad de becarios actualizados."""
    nombres_area = {a.id: a.nombre for a in areas}
    nombres_beca = {b.id: b.nombre for b in becas}
    actualizados = 0

    for becario in becarios_store.list():
        patch = {}
        if becario.area_id in nombres_area and nombres_area[becario.area_id] != becario.area_nombre:
            patch["area_nombre"] = nombres_area[becario.area_id]
        if becario.beca_id in nombres_beca and nombres_beca[becario.beca_id] != becario.beca_nombre:
            patch["beca_nombre"] = nombres_beca[becario.beca_id]
        if patch:
            becarios_store.update(becario.id, patch)
            actualizados += 1

    logger.info("Reconciliación: %d becarios actualizados", actualizados)
    return actualizados
