from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from utils.security import decode_token
from models.user import User

bearer_scheme = HTTPBearer(auto_error=False)

def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)):

    if credentials is None or not credentials.scheme.lower() == "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    token = credentials.credentials
    payload = decode_token(token)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return payload

def role_required(*roles: str):
    def wrapper(payload=Depends(get_current_user)):
        if payload.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Not enough privileges")
        return payload
    return wrapper


def current_user(db, payload: dict):
    """Resolve token claims to a User row: uid claim first, then email (sub)."""
    user = None
    if payload.get("uid") is not None:
        user = db.query(User).filter(User.id == int(payload["uid"])).first()
    if user is None and payload.get("sub"):
        user = db.query(User).filter(User.email == payload["sub"]).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
