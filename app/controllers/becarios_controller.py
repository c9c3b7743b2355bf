from fastapi import APIRouter, Depends, HTTPException, Response, WebSocket
from app.controllers.dependencias import get_gestion, get_stores, requerir_sesion
from app.controllers.tiempo_real import transmitir
from app.schemas import becarios as schemas
from app.services.reconciliacion import reconciliar_nombres

router = APIRouter(prefix="/becarios", tags=["Becarios"])


# 1. Listado con filtros (nombre y apellido / área)
@router.get("", response_model=list[schemas.BecarioResponse])
def listar(nombre: str = "", area: str = "", gestion=Depends(get_gestion)):
    return gestion.filtered_view(nombre, area)


# 2. Detalle
@router.get("/{becario_id}", response_model=schemas.BecarioResponse)
def obtener(becario_id: int, stores=Depends(get_stores)):
    return stores.becarios.get(becario_id)


# 3. Borrador para el formulario de edición (usa los nombres cacheados)
@router.get("/{becario_id}/borrador", response_model=schemas.BecarioDraft)
def borrador(becario_id: int, gestion=Depends(get_gestion)):
    return gestion.draft(becario_id)


# 4. Alta: las etiquetas de área y beca se resuelven contra los catálogos actuales
@router.post("", response_model=schemas.BecarioResponse, status_code=201)
def crear(dto: schemas.BecarioDraft, gestion=Depends(get_gestion), _sesion=Depends(requerir_sesion)):
    nuevo_id = gestion.create(dto)
    return gestion.becarios_store.get(nuevo_id)


# 5. Edición
@router.put("/{becario_id}", response_model=schemas.BecarioResponse)
def editar(becario_id: int, dto: schemas.BecarioDraft, gestion=Depends(get_gestion),
           _sesion=Depends(requerir_sesion)):
    gestion.update(becario_id, dto)
    return gestion.becarios_store.get(becario_id)


# 6. Baja (requiere confirmado=true)
@router.delete("/{becario_id}", status_code=204)
def eliminar(becario_id: int, confirmado: bool = False, gestion=Depends(get_gestion),
             _sesion=Depends(requerir_sesion)):
    if not gestion.delete(becario_id, confirmado=confirmado):
        raise HTTPException(status_code=409, detail="Confirme la eliminación con confirmado=true")
    return Response(status_code=204)


# 7. Reconciliación explícita de nombres cacheados
@router.post("/reconciliar")
def reconciliar(stores=Depends(get_stores), _sesion=Depends(requerir_sesion)):
    actualizados = reconciliar_nombres(stores.becarios, stores.areas.list(), stores.becas.list())
    return {"actualizados": actualizados}


# 8. Tiempo real
@router.websocket("/ws")
async def en_vivo(websocket: WebSocket):
    await transmitir(websocket, websocket.app.state.stores.becarios)
