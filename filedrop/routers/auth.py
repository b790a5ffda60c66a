import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from filedrop.core.deps import get_storage_service
from filedrop.core.security import (
    CurrentUser,
    create_access_token,
    get_current_user,
    hash_password,
    verify_password,
)
from filedrop.db.database import get_db
from filedrop.db.models import User
from filedrop.schemas.auth import RegisterIn, LoginIn, MessageOut, TokenOut, MeOut
from filedrop.services.storage import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _password_bytes_ok(pw: str) -> bool:
    # bcrypt hard-limit: 72 bytes
    return len(pw.encode("utf-8")) <= 72


def _require_credentials(email: str | None, password: str | None) -> None:
    if not email or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password required.",
        )


@router.post("/register", response_model=MessageOut)
def register(
    payload: RegisterIn,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage_service),
):
    # 1) Champs requis
    _require_credentials(payload.email, payload.password)

    # 2) Limite bcrypt (sinon 500)
    if not _password_bytes_ok(payload.password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password too long (bcrypt is limited to 72 bytes).",
        )

    # 3) Unicité email (la contrainte UNIQUE couvre les inscriptions concurrentes)
    exists = db.execute(select(User).where(User.email == payload.email)).scalar_one_or_none()
    if exists:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered.")

    user = User(email=payload.email, password_hash=hash_password(payload.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered.")

    # 4) Dossier d'upload de l'utilisateur
    storage.ensure_user_dir(user.id)

    logger.info("Registered user %s (%s)", user.id, user.email)
    return MessageOut(message="Registration successful.")


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    _require_credentials(payload.email, payload.password)

    user = db.execute(select(User).where(User.email == payload.email)).scalar_one_or_none()
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed login for %s", payload.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials.",
        )

    return TokenOut(token=create_access_token(user.id, user.email))


@router.get("/me", response_model=MeOut)
def me(current_user: CurrentUser = Depends(get_current_user)):
    return MeOut(id=current_user.id, email=current_user.email)
