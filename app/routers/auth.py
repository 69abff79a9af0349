from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.schemas.user import UserCreate, UserLogin, RegisterOut, LoginOut, IdentityOut
from app.services import auth as auth_service
from app.utils.tokens import TokenIdentity, TokenService
from app.dependencies import get_current_identity, get_token_service
from app.database import get_db

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=RegisterOut)
def register(user: UserCreate, db: Session = Depends(get_db)):
    auth_service.register(db, user.username, user.password)
    # neither the new id nor the hash leaves the server
    return {"message": "User registered successfully"}

@router.post("/login", response_model=LoginOut)
def login(user: UserLogin, db: Session = Depends(get_db), tokens: TokenService = Depends(get_token_service)):
    result = auth_service.login(db, tokens, user.username, user.password)
    return {"token": result.token, "username": result.username, "expiration": result.expires_at}

@router.get("/me", response_model=IdentityOut)
def me(identity: TokenIdentity = Depends(get_current_identity)):
    return {"id": identity.user_id, "username": identity.username}
