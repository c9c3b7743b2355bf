"""Puente entre la suscripción de un RecordStore y un WebSocket.

Se envía la colección completa en JSON al conectar y después de cada cambio.
La suscripción se libera cuando el cliente cierra el socket.
"""

import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


def reemplazar_pendiente(cola: asyncio.Queue, payload) -> None:
    """Deja en la cola solo el snapshot más reciente (cada uno reemplaza al anterior)."""
    try:
        cola.get_nowait()
    except asyncio.QueueEmpty:
        pass
    cola.put_nowait(payload)


async def _esperar_cierre(websocket: WebSocket):
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass


async def transmitir(websocket: WebSocket, store):
    await websocket.accept()
    loop = asyncio.get_running_loop()
    cola: asyncio.Queue = asyncio.Queue(maxsize=1)

    # El store puede llamar desde cualquier hilo (las rutas sync corren en el threadpool)
    def empujar(items):
        payload = [item.model_dump(mode="json", by_alias=True) for item in items]
        loop.call_soon_threadsafe(reemplazar_pendiente, cola, payload)

    # subscribe y cancelar leen la base y toman el lock del store: fuera del event loop
    sub = await run_in_threadpool(store.subscribe, empujar)
    receptor = asyncio.create_task(_esperar_cierre(websocket))
    logger.debug("WebSocket suscripto a %s", store.nombre)
    try:
        while True:
            envio = asyncio.create_task(cola.get())
            hechos, _ = await asyncio.wait({receptor, envio}, return_when=asyncio.FIRST_COMPLETED)
            if receptor in hechos:
                envio.cancel()
                break
            await websocket.send_json(envio.result())
    except WebSocketDisconnect:
        pass
    finally:
        receptor.cancel()
        await run_in_threadpool(sub.cancelar)
        logger.debug("WebSocket de %s desuscripto", store.nombre)
