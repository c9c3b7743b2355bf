from types import SimpleNamespace

from app.services.referencias import Referencia, resolve

CATALOGO = [
    SimpleNamespace(id=7, nombre="Desarrollo"),
    SimpleNamespace(id=3, nombre="Soporte"),
]


def test_coincidencia_exacta():
    ref = resolve("Soporte", CATALOGO)
    assert ref == Referencia(3, "Soporte")
    assert ref.resuelta


def test_etiqueta_inexistente_devuelve_la_etiqueta_sin_id():
    ref = resolve("NoExiste", CATALOGO)
    assert ref == Referencia(None, "NoExiste")
    assert not ref.resuelta


def test_distingue_mayusculas():
    assert resolve("desarrollo", CATALOGO).id is None


def test_catalogo_vacio():
    assert resolve("Desarrollo", []) == Referencia(None, "Desarrollo")


def test_etiqueta_vacia_o_none():
    assert resolve(None, CATALOGO) == Referencia(None, "")
    assert resolve("", CATALOGO) == Referencia(None, "")


def test_gana_la_primera_coincidencia():
    duplicado = CATALOGO + [SimpleNamespace(id=99, nombre="Desarrollo")]
    assert resolve("Desarrollo", duplicado).id == 7
