from sqlalchemy import Column, Integer, String
from app.core.database import Base
from app.models.mixins import AuditoriaMixin


class Usuario(Base, AuditoriaMixin):
    __tablename__ = "Usuarios"

    id = Column(Integer, primary_key=True, index=True)
    nombre_completo = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(200), nullable=False)
    rol = Column(String(20), default="Profesor")
