from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from db.init import get_db
from models.user import User
from utils.security import verify_password, create_access_token
from utils.deps import current_user, get_current_user
from models.login import LoginRequest
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def landing_page(role: str) -> str:
    """Where the client should go after signing in."""
    if role == "TECHNICIAN":
        return "/tech"
    return "/dashboard"


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    email = body.email.strip().lower()

    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(body.password, user.password_hash):
        logger.warning(f"Failed login attempt for {email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token({"sub": user.email, "role": user.role, "uid": user.id})
    return {
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "redirect": landing_page(user.role),
        "access_token": token,
        "token_type": "bearer",
    }


@router.get("/me")
def me(payload=Depends(get_current_user), db: Session = Depends(get_db)):
    user = current_user(db, payload)
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "role": user.role,
        "avatar": user.avatar,
    }
