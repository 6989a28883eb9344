"""Authentication routes for signup, login, logout and the current user."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy import or_
from sqlalchemy.orm import Session

from fridge_chef.config import settings
from fridge_chef.database import get_db
from fridge_chef.models.user import User
from fridge_chef.services.auth import get_auth_provider
from fridge_chef.services.auth.dependencies import get_current_user


router = APIRouter(prefix="/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 8


def _user_response(user: User) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "username": user.username,
        "name": user.name,
        "roles": sorted(role.name for role in user.roles),
    }


def _session_response(user: User, token: str, status_code: int = 200) -> JSONResponse:
    response = JSONResponse(status_code=status_code, content=_user_response(user))
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


# =============================================================================
# Signup / Login / Logout
# =============================================================================


@router.post("/signup")
async def signup(
    request: Request,
    email: str = Form(...),
    username: str = Form(...),
    password: str = Form(...),
    name: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    """Create an account and log it in."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )

    existing = (
        db.query(User)
        .filter(
            or_(
                User.email == email.strip().lower(),
                User.username == username.strip().lower(),
            )
        )
        .first()
    )
    if existing:
        raise HTTPException(status_code=409, detail="Email or username already taken")

    auth_provider = get_auth_provider()
    user = await auth_provider.create_user(db, email, username, password, name=name)
    token = await auth_provider.create_session(db, user, request)
    return _session_response(user, token, status_code=201)


@router.post("/login")
async def login(
    request: Request,
    username: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    """Log in with username or email."""
    auth_provider = get_auth_provider()
    user = await auth_provider.authenticate(db, username, password)

    if not user:
        raise HTTPException(status_code=401, detail="Invalid username or password")

    token = await auth_provider.create_session(db, user, request)
    return _session_response(user, token)


@router.post("/logout", status_code=204)
async def logout(request: Request, db: Session = Depends(get_db)):
    """Logout and clear session."""
    auth_provider = get_auth_provider()

    # Revoke session from database
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        await auth_provider.revoke_session(db, token)

    response = Response(status_code=204)
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    return _user_response(user)
