from sqlalchemy import Column, Integer, String, JSON
from app.core.database import Base
from app.models.mixins import AuditoriaMixin


class Becario(Base, AuditoriaMixin):
    __tablename__ = "Becarios"

    id = Column(Integer, primary_key=True, index=True)

    # Datos personales
    legajo = Column(String(20), nullable=False, default="")
    apellido = Column(String(50), nullable=False, default="")
    nombre = Column(String(50), nullable=False, default="")
    dni = Column(String(20), nullable=False, default="")
    nro_movil = Column(String(20), nullable=False, default="")
    usuario_telegram = Column(String(50), nullable=False, default="")
    email = Column(String(100), nullable=False, default="")

    # 1..5 como entero, o el texto original si no se pudo convertir
    anio_curso = Column(JSON, nullable=True)

    # Referencias SIN ForeignKey: borrar o renombrar un Área/Beca no toca a
    # los becarios. Los *_nombre son copias tomadas al momento de escribir.
    area_id = Column(Integer, nullable=True, index=True)
    area_nombre = Column(String(100), nullable=False, default="")
    beca_id = Column(Integer, nullable=True, index=True)
    beca_nombre = Column(String(100), nullable=False, default="")
