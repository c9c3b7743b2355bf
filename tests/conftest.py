from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import Base, crear_engine, crear_session_factory
from app.main import Stores, create_app
from app.models.becarios import Becario
from app.models.catalogos import Area, Beca
from app.schemas.becarios import BecarioResponse
from app.schemas.catalogos import AreaResponse, BecaResponse
from app.services.record_store import RecordStore


class RelojFalso:
    """Reloj determinista: cada lectura avanza ``paso``."""

    def __init__(self, inicio=datetime(2024, 3, 1, 9, 0, 0), paso=timedelta(seconds=1)):
        self.actual = inicio
        self.paso = paso

    def __call__(self):
        marca = self.actual
        self.actual += self.paso
        return marca


@pytest.fixture
def engine():
    engine = crear_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return crear_session_factory(engine)


@pytest.fixture
def reloj():
    return RelojFalso()


@pytest.fixture
def stores(session_factory, reloj):
    stores = Stores(
        areas=RecordStore("areas", Area, AreaResponse, session_factory, reloj=reloj),
        becas=RecordStore("becas", Beca, BecaResponse, session_factory, reloj=reloj),
        becarios=RecordStore("becarios", Becario, BecarioResponse, session_factory, reloj=reloj),
    )
    yield stores
    for store in stores:
        store.cerrar()


@pytest.fixture
def client():
    app = create_app(Settings(database_url="sqlite://", log_level="WARNING"))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    client.post("/auth/register", json={
        "nombre_completo": "Laura Gómez",
        "email": "laura.gomez@universidad.edu.ar",
        "password": "clave-segura-1",
    })
    r = client.post("/auth/login", json={
        "email": "laura.gomez@universidad.edu.ar",
        "password": "clave-segura-1",
    })
    return {"Authorization": f"Bearer {r.json()['access_token']}"}
