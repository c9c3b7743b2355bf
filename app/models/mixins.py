from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Boolean


def ahora_utc() -> datetime:
    # Naive en UTC: SQLite no conserva la zona horaria
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Esta clase NO es una tabla, es una plantilla que otros modelos usarán.
# Los RecordStore asignan created_at/updated_at explícitamente; los defaults
# solo cubren las tablas que se escriben fuera de un store (Usuarios).
class AuditoriaMixin:
    activo = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=ahora_utc, nullable=False, index=True)
    updated_at = Column(DateTime, default=ahora_utc, onupdate=ahora_utc, nullable=False)
