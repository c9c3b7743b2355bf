import logging

FORMATO = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configura el logger raíz una sola vez (idempotente)."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level.upper(), format=FORMATO)
    else:
        root.setLevel(level.upper())
