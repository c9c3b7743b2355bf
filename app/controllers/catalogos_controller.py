from fastapi import APIRouter, Depends, Response, WebSocket
from app.controllers.dependencias import get_stores, requerir_sesion
from app.controllers.tiempo_real import transmitir
from app.schemas import catalogos as schemas


def crear_router(clave: str, etiqueta: str, response_model) -> APIRouter:
    """Router CRUD + tiempo real para un catálogo (``areas`` o ``becas``).

    Renombrar o borrar un ítem NO actualiza a los becarios que lo referencian.
    """
    router = APIRouter(prefix=f"/{clave}", tags=[etiqueta])

    def store_de(stores=Depends(get_stores)):
        return getattr(stores, clave)

    # 1. Listado completo (más nuevos primero)
    @router.get("", response_model=list[response_model])
    def listar(store=Depends(store_de)):
        return store.list()

    # 2. Detalle
    @router.get("/{item_id}", response_model=response_model)
    def obtener(item_id: int, store=Depends(store_de)):
        return store.get(item_id)

    # 3. Alta
    @router.post("", response_model=response_model, status_code=201)
    def crear(dto: schemas.CatalogoCreate, store=Depends(store_de), _sesion=Depends(requerir_sesion)):
        nuevo_id = store.create(dto.model_dump())
        return store.get(nuevo_id)

    # 4. Edición parcial (nombre y/o activo)
    @router.patch("/{item_id}", response_model=response_model)
    def editar(item_id: int, dto: schemas.CatalogoUpdate, store=Depends(store_de),
               _sesion=Depends(requerir_sesion)):
        store.update(item_id, dto.model_dump(exclude_unset=True, exclude_none=True))
        return store.get(item_id)

    # 5. Baja (idempotente)
    @router.delete("/{item_id}", status_code=204)
    def eliminar(item_id: int, store=Depends(store_de), _sesion=Depends(requerir_sesion)):
        store.delete(item_id)
        return Response(status_code=204)

    # 6. Tiempo real
    @router.websocket("/ws")
    async def en_vivo(websocket: WebSocket):
        await transmitir(websocket, getattr(websocket.app.state.stores, clave))

    return router


areas_router = crear_router("areas", "Áreas", schemas.AreaResponse)
becas_router = crear_router("becas", "Becas", schemas.BecaResponse)
