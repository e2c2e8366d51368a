# app/api/routes.py
from fastapi import APIRouter, Depends, HTTPException, Response as HTTPResponse
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import UserCreate
from app.schemas.auth import Token
from app.auth.jwt import create_access_token, get_password_hash, verify_password

router = APIRouter()

def _set_auth_cookie(response: HTTPResponse, token: str) -> None:
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
    )

@router.get("/health")
def health():
    return {"status": "ok"}

@router.post("/api/auth/register", response_model=Token, status_code=201)
def register(user_in: UserCreate, response: HTTPResponse, db: Session = Depends(get_db)):
    """Create a new user and sign them in"""
    existing = db.query(User).filter(User.email == user_in.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        email=user_in.email,
        hashed_password=get_password_hash(user_in.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    token = create_access_token(subject=user.id)
    _set_auth_cookie(response, token)
    return Token(message="User registered successfully", access_token=token)

@router.post("/api/auth/login", response_model=Token)
def login(user_in: UserCreate, response: HTTPResponse, db: Session = Depends(get_db)):
    """Authenticate user, set the auth cookie and return the JWT"""
    user = db.query(User).filter(User.email == user_in.email).first()
    if not user or not verify_password(user_in.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(subject=user.id)
    _set_auth_cookie(response, token)
    return Token(message="Login successful", access_token=token)

@router.post("/api/auth/logout")
def logout(response: HTTPResponse):
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return {"message": "Logged out"}
