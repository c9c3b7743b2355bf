from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from app.core import database, security
from app.models.users import Usuario
from app.schemas import auth as schemas
from app.services.sesion import SesionIdentidad
from app.controllers.dependencias import requerir_sesion

# Definimos el "Router" que actúa como controlador
router = APIRouter(prefix="/auth", tags=["Autenticación"])


@router.post("/register", response_model=schemas.UsuarioResponse)
def register(usuario: schemas.UsuarioCreate, db: Session = Depends(database.get_db)):
    # Lógica de negocio: Validar existencia
    if db.query(Usuario).filter(Usuario.email == usuario.email).first():
        raise HTTPException(status_code=400, detail="El correo ya existe")

    nuevo_usuario = Usuario(
        nombre_completo=usuario.nombre_completo,
        email=usuario.email,
        hashed_password=security.get_password_hash(usuario.password),
        rol="Profesor",
    )
    db.add(nuevo_usuario)
    db.commit()
    db.refresh(nuevo_usuario)
    return nuevo_usuario


@router.post("/login", response_model=schemas.Token)
def login(creds: schemas.UsuarioLogin, request: Request):
    sesion = SesionIdentidad(request.app.state.session_factory)
    user = sesion.login(creds.email, creds.password)
    return {
        "access_token": sesion.emitir_token(user),
        "token_type": "bearer",
        "rol": user.rol,
        "nombre": user.nombre_completo,
        "email": user.email,
    }


@router.get("/me", response_model=schemas.UsuarioResponse)
def me(sesion: SesionIdentidad = Depends(requerir_sesion), db: Session = Depends(database.get_db)):
    user = db.get(Usuario, sesion.current_user_id())
    if user is None:
        raise HTTPException(status_code=404, detail="Usuario no encontrado")
    return user


# Los tokens no se guardan en el servidor: cerrar sesión es descartar el token
@router.post("/logout")
def logout(sesion: SesionIdentidad = Depends(requerir_sesion)):
    sesion.logout()
    return {"mensaje": "Sesión cerrada"}
