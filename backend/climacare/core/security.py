# backend/climacare/core/security.py
"""
Senhas (bcrypt), emissão/validação do JWT e a dependência ``get_current_user``.

O token carrega ``sub`` (username) e ``id`` (UUID do usuário). A busca usa o
``id``, então renomear o usuário não invalida sessões abertas; tokens sem
``id`` ainda são aceitos pelo ``sub``.
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from .db import get_db
from ..models.user import User

SECRET_KEY = os.getenv("JWT_SECRET", "dev-secret-change-me")
ALGORITHM = os.getenv("JWT_ALG", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

MISSING_TOKEN = "Token não fornecido"
INVALID_TOKEN = "Token inválido ou expirado"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def create_access_token(sub: str, user_id: str, expires_minutes: Optional[int] = None) -> str:
    minutes = ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    claims = {
        "sub": sub,
        "id": user_id,
        "exp": datetime.now(tz=timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def bearer_token(header: Optional[str]) -> Optional[str]:
    """
    Extrai o JWT do cabeçalho Authorization ou devolve None.

    Tolera aspas em volta do valor, espaços extras e "Bearer" repetido,
    que aparecem quando o token é colado à mão no painel.
    """
    if not header:
        return None
    scheme, param = get_authorization_scheme_param(str(header).strip().strip("\"'"))
    if scheme.lower() != "bearer":
        return None
    token = param.strip()
    while token.lower().startswith("bearer "):
        token = token[len("bearer "):].strip()
    # JWT não tem espaços
    return token.replace(" ", "") or None


def decode_token(token: str) -> Dict[str, Any]:
    try:
        claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise _unauthorized(INVALID_TOKEN)
    if not claims.get("id") and not claims.get("sub"):
        raise _unauthorized(INVALID_TOKEN)
    return claims


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise _unauthorized(MISSING_TOKEN)

    claims = decode_token(token)
    if claims.get("id"):
        user = db.get(User, claims["id"])
    else:
        user = db.query(User).filter(User.username == claims["sub"]).first()
    if user is None:
        raise _unauthorized(INVALID_TOKEN)
    return user
