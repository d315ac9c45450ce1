from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from movier.db import get_db
from movier.schemas.user import UserCreate, UserLogin, UserResponse, AuthResponse
from movier.services.user_service import UserService
from movier.core.auth import get_current_user
from movier.core.exceptions import handle_exception

router = APIRouter(prefix="/auth", tags=["authentication"])

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    try:
        return UserService(db).register(user_data.username, user_data.email, user_data.password)
    except Exception as e:
        raise handle_exception(e)

@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with username or email and return a token"""
    try:
        return UserService(db).login(credentials.identifier, credentials.password)
    except Exception as e:
        raise handle_exception(e)

@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get current user information"""
    try:
        return UserService(db).get_user(current_user_id)
    except Exception as e:
        raise handle_exception(e)
