import logging
from contextlib import asynccontextmanager
from typing import NamedTuple, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.database import Base, crear_engine, crear_session_factory
from app.core.errors import (
    BecariosError,
    CredencialesInvalidasError,
    NotFoundError,
    PersistenceError,
    SesionRequeridaError,
)
from app.core.logs import configure_logging
# Importamos modelos para creación de tablas
from app.models import becarios, catalogos, users  # noqa: F401
from app.schemas.becarios import BecarioResponse
from app.schemas.catalogos import AreaResponse, BecaResponse
from app.services.gestion_becarios import GestionBecarios
from app.services.record_store import RecordStore
# Importamos los controladores
from app.controllers import auth_controller, becarios_controller, catalogos_controller

logger = logging.getLogger(__name__)


class Stores(NamedTuple):
    areas: RecordStore
    becas: RecordStore
    becarios: RecordStore


def crear_stores(session_factory) -> Stores:
    """Un store por colección, compartido por toda la aplicación."""
    return Stores(
        areas=RecordStore("areas", catalogos.Area, AreaResponse, session_factory),
        becas=RecordStore("becas", catalogos.Beca, BecaResponse, session_factory),
        becarios=RecordStore("becarios", becarios.Becario, BecarioResponse, session_factory),
    )


# Traducción de errores de dominio a respuestas HTTP
STATUS_POR_ERROR = {
    NotFoundError: 404,
    SesionRequeridaError: 401,
    CredencialesInvalidasError: 401,
    PersistenceError: 503,
}


async def manejar_error(request: Request, exc: BecariosError):
    status = next((s for tipo, s in STATUS_POR_ERROR.items() if isinstance(exc, tipo)), 500)
    if status >= 500:
        logger.error("%s %s -> %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"detail": exc.message, "code": exc.code})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = crear_engine(settings.database_url)
        # Crear tablas si no existen
        Base.metadata.create_all(bind=engine)
        app.state.session_factory = crear_session_factory(engine)
        app.state.stores = crear_stores(app.state.session_factory)
        app.state.gestion = GestionBecarios(
            app.state.stores.becarios, app.state.stores.areas, app.state.stores.becas
        )
        logger.info("Aplicación iniciada con base %s", engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            app.state.gestion.cerrar()
            for store in app.state.stores:
                store.cerrar()
            engine.dispose()

    app = FastAPI(title="Gestión de Becarios API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(BecariosError, manejar_error)

    # REGISTRO DE RUTAS
    app.include_router(auth_controller.router)
    app.include_router(catalogos_controller.areas_router)
    app.include_router(catalogos_controller.becas_router)
    app.include_router(becarios_controller.router)

    @app.get("/")
    def root():
        return {"message": "API Gestión de Becarios"}

    return app


app = create_app()
