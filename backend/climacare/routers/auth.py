# climacare/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..core.api import ok
from ..core.db import get_db
from ..core.security import hash_password, verify_password, create_access_token, get_current_user
from ..models.user import User
from ..schemas.user import UserCreate, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])
profile_router = APIRouter(prefix="/api/user", tags=["auth"])


def _serialize_user(u: User) -> dict:
    return UserRead.model_validate(u).model_dump()


def _session_payload(u: User) -> dict:
    return {"user": _serialize_user(u), "token": create_access_token(sub=u.username, user_id=u.id)}


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    username = payload.username.strip()
    email = payload.email.strip().lower() if payload.email else None

    if db.query(User).filter(User.username == username).first():
        raise HTTPException(status_code=400, detail="Nome de usuário já existe")
    if email and db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="Email já cadastrado")

    user = User(
        username=username,
        email=email,
        name=(payload.name or "").strip() or None,
        phone=(payload.phone or "").strip() or None,
        password_hash=hash_password(payload.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("user registered id=%s username=%s", user.id, user.username)
    return ok(_session_payload(user), status_code=status.HTTP_201_CREATED)


@router.post("/login")
def login(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # aceita nome de usuário ou e-mail no campo "username"
    ident = form.username.strip()
    user = (
        db.query(User)
          .filter(or_(User.username == ident, User.email == ident.lower()))
          .first()
    )
    if not user or not verify_password(form.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais inválidas",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return ok(_session_payload(user))


@profile_router.get("/profile")
def profile(current: User = Depends(get_current_user)):
    return ok(_serialize_user(current))
