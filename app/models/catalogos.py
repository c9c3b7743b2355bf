from sqlalchemy import Column, Integer, String
from app.core.database import Base
from app.models.mixins import AuditoriaMixin


# --- 1. ÁREA (donde se inscribe el becario) ---
class Area(Base, AuditoriaMixin):
    __tablename__ = "Areas"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)    # Ej: Desarrollo


# --- 2. BECA (tipo de beca) ---
class Beca(Base, AuditoriaMixin):
    __tablename__ = "Becas"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)    # Ej: Beca de Investigación
