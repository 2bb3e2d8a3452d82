import logging
from datetime import timedelta
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from app.api import deps
from app.core import security
from app.core.config import settings
from app.crud import crud_admin
from app.db.session import get_db
from app.models.base import Admin
from app.schemas.schemas import LoginRequest, LoginResponse, AdminOut, Token

logger = logging.getLogger(__name__)

router = APIRouter()

def _authenticate_admin(db: Session, email: str, password: str) -> Admin:
    # Only the configured admin may sign in at all
    if email != settings.ADMIN_EMAIL:
        logger.warning("Login attempt for unknown account %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized access")

    admin = crud_admin.authenticate(db, email, password)
    if not admin:
        logger.warning("Invalid password for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    logger.info("Admin %s logged in", admin.email)
    return admin

def _issue_token(admin: Admin) -> str:
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return security.create_access_token(admin.email, expires_delta=access_token_expires)

@router.post("/login", response_model=LoginResponse)
def login(login_in: LoginRequest, db: Session = Depends(get_db)) -> Any:
    admin = _authenticate_admin(db, login_in.email, login_in.password)
    return {
        "success": True,
        "message": "Login successful",
        "user": {"email": admin.email, "role": admin.role},
        "access_token": _issue_token(admin),
        "token_type": "bearer",
    }

@router.post("/login/access-token", response_model=Token)
def login_access_token(
    db: Session = Depends(get_db), form_data: OAuth2PasswordRequestForm = Depends()
) -> Any:
    """OAuth2 password form login, used by the interactive API docs"""
    admin = _authenticate_admin(db, form_data.username, form_data.password)
    return {"access_token": _issue_token(admin), "token_type": "bearer"}

@router.get("/me", response_model=AdminOut)
def read_admin_me(
    current_admin: Admin = Depends(deps.get_current_active_admin)
) -> Any:
    return current_admin
