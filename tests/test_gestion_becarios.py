import pytest

from app.core.errors import NotFoundError, SesionRequeridaError
from app.schemas.becarios import BecarioDraft
from app.services.gestion_becarios import GestionBecarios, filtrar_becarios
from app.services.reconciliacion import reconciliar_nombres


class SesionFalsa:
    def __init__(self, usuario_id=None):
        self.usuario_id = usuario_id

    def current_user_id(self):
        return self.usuario_id


@pytest.fixture
def gestion(stores):
    g = GestionBecarios(stores.becarios, stores.areas, stores.becas)
    yield g
    g.cerrar()


def _draft(nombre, apellido, area="", beca="", anio="1"):
    return BecarioDraft(nombre=nombre, apellido=apellido, area_inscripcion=area, beca=beca, anio_curso=anio)


def test_nombre_de_area_cacheado_no_sigue_al_renombre(stores, gestion):
    a1 = stores.areas.create({"nombre": "Desarrollo"})
    bid = gestion.create(_draft("Juan", "Pérez", area="Desarrollo"))

    becario = stores.becarios.get(bid)
    assert becario.area_id == a1
    assert becario.area_nombre == "Desarrollo"

    stores.areas.update(a1, {"nombre": "Dev"})

    assert gestion.areas[0].nombre == "Dev"
    assert stores.becarios.get(bid).area_nombre == "Desarrollo"
    assert gestion.becarios[0].area_nombre == "Desarrollo"


def test_borrar_area_no_toca_a_los_becarios(stores, gestion):
    a1 = stores.areas.create({"nombre": "Desarrollo"})
    bid = gestion.create(_draft("Juan", "Pérez", area="Desarrollo"))
    stores.areas.delete(a1)

    becario = stores.becarios.get(bid)
    assert becario.area_id == a1
    assert becario.area_nombre == "Desarrollo"


def test_create_usa_los_catalogos_en_cache(stores, gestion):
    stores.becas.create({"nombre": "Estímulo"})
    bid = gestion.create(_draft("Ana", "López", area="Sin Área", beca="Estímulo", anio="4"))
    becario = stores.becarios.get(bid)
    assert becario.area_id is None
    assert becario.area_nombre == "Sin Área"
    assert becario.beca_id is not None
    assert becario.anio_curso == 4


def test_update_con_etiqueta_sin_match_limpia_el_id(stores, gestion):
    stores.areas.create({"nombre": "Desarrollo"})
    bid = gestion.create(_draft("Juan", "Pérez", area="Desarrollo"))
    gestion.update(bid, _draft("Juan", "Pérez", area="Otra"))

    becario = stores.becarios.get(bid)
    assert becario.area_id is None
    assert becario.area_nombre == "Otra"


def test_estado_local_solo_cambia_por_suscripcion(stores, gestion):
    assert gestion.becarios == []
    gestion.create(_draft("Juan", "Pérez"))
    assert [b.nombre for b in gestion.becarios] == ["Juan"]

    # Otra "sesión" escribiendo directo en el store también se ve
    stores.becarios.create({"nombre": "Eva", "apellido": "Ruiz"})
    assert [b.nombre for b in gestion.becarios] == ["Eva", "Juan"]


def test_update_fallido_no_modifica_el_estado(gestion):
    gestion.create(_draft("Juan", "Pérez"))
    antes = gestion.becarios
    with pytest.raises(NotFoundError):
        gestion.update(999, _draft("X", "Y"))
    assert gestion.becarios == antes


def test_delete_requiere_confirmacion(stores, gestion):
    bid = gestion.create(_draft("Juan", "Pérez"))
    assert gestion.delete(bid) is False
    assert len(gestion.becarios) == 1

    assert gestion.delete(bid, confirmado=True) is True
    assert gestion.becarios == []
    assert gestion.delete(bid, confirmado=True) is True


def test_comandos_exigen_sesion(stores):
    with GestionBecarios(stores.becarios, stores.areas, stores.becas, sesion=SesionFalsa()) as g:
        with pytest.raises(SesionRequeridaError):
            g.create(_draft("Juan", "Pérez"))
        assert g.becarios == []

    with GestionBecarios(stores.becarios, stores.areas, stores.becas, sesion=SesionFalsa(1)) as g:
        g.create(_draft("Juan", "Pérez"))
        assert len(g.becarios) == 1


def test_draft_para_editar(stores, gestion):
    stores.areas.create({"nombre": "Desarrollo"})
    bid = gestion.create(_draft("Juan", "Pérez", area="Desarrollo", anio="3"))
    draft = gestion.draft(bid)
    assert draft.id == bid
    assert draft.area_inscripcion == "Desarrollo"
    assert draft.anio_curso == 3


def test_on_change_y_cerrar(stores):
    cambios = []
    g = GestionBecarios(stores.becarios, stores.areas, stores.becas, on_change=cambios.append)
    # un aviso por cada suscripción inicial
    assert len(cambios) == 3

    stores.areas.create({"nombre": "Desarrollo"})
    assert len(cambios) == 4

    g.cerrar()
    g.cerrar()
    stores.areas.create({"nombre": "Soporte"})
    assert len(cambios) == 4
    assert [a.nombre for a in g.areas] == ["Desarrollo"]


def test_filtered_view(stores, gestion):
    gestion.create(_draft("Juan", "Pérez", area="Desarrollo"))
    gestion.create(_draft("María", "Juárez", area="Soporte"))
    gestion.create(_draft("Pedro", "Gil", area="Desarrollo Web"))

    assert len(gestion.filtered_view()) == 3
    assert [b.nombre for b in gestion.filtered_view("JUAN")] == ["Juan"]
    assert [b.nombre for b in gestion.filtered_view("ría juá")] == ["María"]
    assert [b.nombre for b in gestion.filtered_view("", "desarrollo")] == ["Pedro", "Juan"]
    assert [b.nombre for b in gestion.filtered_view("pedro", "Desarrollo")] == ["Pedro"]
    assert gestion.filtered_view("nadie") == []


def test_filtered_view_es_pura(gestion):
    gestion.create(_draft("Juan", "Pérez", area="Desarrollo"))
    gestion.create(_draft("Ana", "Paz", area="Soporte"))
    assert gestion.filtered_view("a", "o") == gestion.filtered_view("a", "o")
    snapshot = gestion.becarios
    assert filtrar_becarios(snapshot, "juan", "") == filtrar_becarios(snapshot, "juan", "")
    assert gestion.becarios == snapshot


def test_reconciliacion_explicita(stores, gestion):
    a1 = stores.areas.create({"nombre": "Desarrollo"})
    a2 = stores.areas.create({"nombre": "Soporte"})
    b1 = gestion.create(_draft("Juan", "Pérez", area="Desarrollo"))
    b2 = gestion.create(_draft("Ana", "Paz", area="Soporte"))
    stores.areas.update(a1, {"nombre": "Dev"})
    stores.areas.delete(a2)

    actualizados = reconciliar_nombres(stores.becarios, stores.areas.list(), stores.becas.list())

    assert actualizados == 1
    assert stores.becarios.get(b1).area_nombre == "Dev"
    assert stores.becarios.get(b2).area_nombre == "Soporte"
